# =============================================================================
# UI Module
# =============================================================================
# Textual-based interactive classifier.
#
# Structure:
#   - screens/: Full-screen views
#   - widgets/: Reusable UI components
# =============================================================================

from sms_bayes.ui.screens.classify import ClassifyScreen
from sms_bayes.ui.widgets.token_table import TokenTable

__all__ = [
    "ClassifyScreen",
    "TokenTable",
]
