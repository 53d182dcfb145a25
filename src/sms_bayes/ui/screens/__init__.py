# =============================================================================
# UI Screens
# =============================================================================
# Full-screen views for the application.
#
#   - ClassifyScreen: type a message, see the prediction and token breakdown
# =============================================================================

from sms_bayes.ui.screens.classify import ClassifyScreen

__all__ = ["ClassifyScreen"]
