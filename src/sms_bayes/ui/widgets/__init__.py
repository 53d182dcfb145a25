# =============================================================================
# UI Widgets
# =============================================================================
# Reusable UI components.
# =============================================================================

from sms_bayes.ui.widgets.token_table import TokenTable

__all__ = ["TokenTable"]
