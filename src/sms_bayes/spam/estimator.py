# =============================================================================
# Probability Estimator
# =============================================================================
# Turns raw vocabulary counts into smoothed conditional probabilities.
#
# For each token t and class c:
#
#     P(t | c) = (count(t, c) + alpha) / (total(c) + alpha * V)
#
# where V is the number of distinct tokens and alpha the smoothing constant
# (1.0 = Laplace / add-one). Smoothing keeps every probability strictly
# positive, so a token never seen in one class can't zero out a whole
# message score.
#
# Class priors are the plain fraction of training messages in each class.
# =============================================================================

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from sms_bayes.core import Label
from sms_bayes.spam.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


# Laplace smoothing
DEFAULT_SMOOTHING = 1.0


@dataclass(frozen=True)
class TokenProbabilities:
    """P(token | ham) and P(token | spam)."""
    ham: float
    spam: float

    def for_label(self, label: Label) -> float:
        return self.spam if label is Label.SPAM else self.ham

    @property
    def spam_share(self) -> float:
        """How strongly this token points at spam, in (0, 1)."""
        return self.spam / (self.spam + self.ham)


@dataclass(frozen=True)
class ClassPriors:
    """
    Prior probability of each class.

    Attributes:
        ham: P(ham) before looking at the message.
        spam: P(spam) before looking at the message.
    """
    ham: float
    spam: float

    def for_label(self, label: Label) -> float:
        return self.spam if label is Label.SPAM else self.ham

    @property
    def total(self) -> float:
        return self.ham + self.spam


@dataclass(frozen=True)
class ProbabilityTable:
    """
    Immutable token -> class probability table.

    Attributes:
        probabilities: Token -> TokenProbabilities. Read-only.
        smoothing: Smoothing constant the table was built with.
    """
    probabilities: Mapping[str, TokenProbabilities] = field(default_factory=dict)
    smoothing: float = DEFAULT_SMOOTHING

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "probabilities", MappingProxyType(dict(self.probabilities))
        )

    def __len__(self) -> int:
        return len(self.probabilities)

    def __contains__(self, token: object) -> bool:
        return token in self.probabilities

    def __getitem__(self, token: str) -> TokenProbabilities:
        return self.probabilities[token]

    def get(self, token: str) -> TokenProbabilities | None:
        """Probabilities for a token, None if it's out of vocabulary."""
        return self.probabilities.get(token)


def smoothed_probability(count: int, total: int, vocabulary_size: int, smoothing: float) -> float:
    """Laplace-smoothed P(token | class)."""
    return (count + smoothing) / (total + smoothing * vocabulary_size)


def estimate_priors(vocabulary: Vocabulary) -> ClassPriors:
    """
    Empirical class priors from training message counts.

    Raises:
        ValueError: If either class has no training messages.
    """
    if vocabulary.ham_messages <= 0 or vocabulary.spam_messages <= 0:
        raise ValueError(
            "Training data needs at least one ham and one spam message "
            f"(got ham={vocabulary.ham_messages}, spam={vocabulary.spam_messages})"
        )

    total = vocabulary.message_count
    return ClassPriors(
        ham=vocabulary.ham_messages / total,
        spam=vocabulary.spam_messages / total,
    )


def estimate(
    vocabulary: Vocabulary,
    smoothing: float = DEFAULT_SMOOTHING,
) -> tuple[ProbabilityTable, ClassPriors]:
    """
    Compute the probability table and class priors.

    Args:
        vocabulary: Training vocabulary.
        smoothing: Additive smoothing constant. Must be positive.

    Returns:
        (ProbabilityTable, ClassPriors)

    Raises:
        ValueError: If smoothing isn't positive, or a class has no messages.
    """
    if smoothing <= 0:
        raise ValueError(f"Smoothing must be positive, got {smoothing}")

    priors = estimate_priors(vocabulary)

    size = len(vocabulary)
    probabilities = {
        token: TokenProbabilities(
            ham=smoothed_probability(counts.ham, vocabulary.ham_total, size, smoothing),
            spam=smoothed_probability(counts.spam, vocabulary.spam_total, size, smoothing),
        )
        for token, counts in vocabulary.counts.items()
    }

    logger.debug(
        f"Estimated {size} token probabilities (smoothing={smoothing}), "
        f"priors ham={priors.ham:.4f} spam={priors.spam:.4f}"
    )
    return ProbabilityTable(probabilities=probabilities, smoothing=smoothing), priors
