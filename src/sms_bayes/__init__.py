# =============================================================================
# SMS-Bayes: A Naive Bayes Spam Classifier for Short Messages
# =============================================================================
#
# Classifies short text messages as ham or spam with a multinomial Naive
# Bayes model trained from labeled examples.
#
# Features:
#   - Deterministic tokenizer with URL / long-number sentinels
#   - Laplace-smoothed per-class token probabilities
#   - Log-space Bayes decision with an explicit "unknown" outcome
#   - Reproducible stratified train/test split
#   - Model persistence (JSON) and a SQLite record of runs and predictions
#   - Interactive Textual classifier
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "sms-bayes"

# Main entry point - this is what gets called by the 'sms-bayes' command
from sms_bayes.app import main

__all__ = ["main", "__version__", "__app_name__"]
