# =============================================================================
# SMS-Bayes Core Module
# =============================================================================
# Core domain models. These are plain dataclasses and enums with no external
# dependencies, so they can be imported anywhere without causing circular
# imports.
#
#   - Message: A text message with an optional ham/spam label
#   - Label: ham, spam, or unknown (the last one is prediction-only)
# =============================================================================

from sms_bayes.core.message import TRAINING_LABELS, Label, Message

__all__ = [
    "Label",
    "Message",
    "TRAINING_LABELS",
]
