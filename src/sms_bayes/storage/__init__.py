# =============================================================================
# Storage Module
# =============================================================================
# Handles persistent storage using SQLite.
#
# Provides:
#   - Database initialization and schema versioning
#   - Training runs with their full vocabulary (so any run can be rebuilt)
#   - Predictions on held-out messages, for downstream reporting
#   - Async operations via aiosqlite
#
# The database is stored in the XDG data directory (~/.local/share/sms-bayes/).
# =============================================================================

from sms_bayes.storage.database import Database
from sms_bayes.storage.repository import Repository, StoredPrediction

__all__ = ["Database", "Repository", "StoredPrediction"]
