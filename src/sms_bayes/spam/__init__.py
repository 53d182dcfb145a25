# =============================================================================
# Spam Module
# =============================================================================
# Multinomial Naive Bayes classification of short text messages.
#
# Pipeline:
#   tokenizer.py   - text -> normalized tokens
#   stopwords.py   - stopword-filtered side channel (reports only)
#   vocabulary.py  - per-class token counts over the training split
#   estimator.py   - Laplace-smoothed probabilities and class priors
#   classifier.py  - log-space Bayes decision, model persistence
#
# Everything here is a pure function over immutable values. A trained model
# can be shared across threads without locking.
# =============================================================================

from sms_bayes.spam.classifier import (
    EMPTY_POLICIES,
    ModelError,
    Prediction,
    SpamModel,
    build_model,
    classify,
    classify_many,
    token_contributions,
)
from sms_bayes.spam.estimator import ClassPriors, ProbabilityTable, TokenProbabilities, estimate
from sms_bayes.spam.stopwords import STOP_WORDS, remove_stopwords
from sms_bayes.spam.tokenizer import Tokenizer, TokenizerConfig, normalize
from sms_bayes.spam.vocabulary import TokenCounts, Vocabulary, build_vocabulary, merge_vocabularies

__all__ = [
    "build_model",
    "classify",
    "classify_many",
    "token_contributions",
    "SpamModel",
    "Prediction",
    "ModelError",
    "EMPTY_POLICIES",
    "ProbabilityTable",
    "ClassPriors",
    "TokenProbabilities",
    "estimate",
    "Vocabulary",
    "TokenCounts",
    "build_vocabulary",
    "merge_vocabularies",
    "Tokenizer",
    "TokenizerConfig",
    "normalize",
    "STOP_WORDS",
    "remove_stopwords",
]
