# =============================================================================
# Naive Bayes Spam Classifier
# =============================================================================
# Multinomial Naive Bayes over whole-word tokens.
#
# How it works:
#   1. Training counts how often each token appears in spam vs ham
#      (vocabulary.py) and turns counts into smoothed probabilities
#      (estimator.py)
#   2. Classification compares
#         log P(ham)  + sum(log P(token|ham))
#         log P(spam) + sum(log P(token|spam))
#      over the message's in-vocabulary tokens, repeats included
#   3. The larger score wins; an exact tie is "unknown"
#
# Tokens never seen in training are skipped entirely. They add nothing to
# either score.
#
# A message with no in-vocabulary tokens is "unknown" by default. The
# "prior" empty policy instead lets the raw priors decide.
#
# Log space keeps long messages from underflowing to 0.0 and gives the same
# decision as comparing the raw products.
# =============================================================================

import json
import logging
import math
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from sms_bayes.core import Label, Message
from sms_bayes.spam.estimator import (
    DEFAULT_SMOOTHING,
    ClassPriors,
    ProbabilityTable,
    estimate,
)
from sms_bayes.spam.tokenizer import normalize
from sms_bayes.spam.vocabulary import TokenCounts, Vocabulary, build_vocabulary

logger = logging.getLogger(__name__)


# Model file format version
MODEL_VERSION = 1

# What to do with a message that has no in-vocabulary tokens
EMPTY_POLICY_UNKNOWN = "unknown"   # always "unknown"
EMPTY_POLICY_PRIOR = "prior"       # compare the raw priors
EMPTY_POLICIES = (EMPTY_POLICY_UNKNOWN, EMPTY_POLICY_PRIOR)


class ModelError(Exception):
    """Raised when a saved model can't be read."""
    pass


@dataclass(frozen=True)
class Prediction:
    """
    Result of classifying one message.

    Attributes:
        label: ham, spam, or unknown.
        ham_score: log P(ham) + sum of log P(token|ham).
        spam_score: log P(spam) + sum of log P(token|spam).
        scored_tokens: Number of in-vocabulary tokens that were scored.
    """
    label: Label
    ham_score: float
    spam_score: float
    scored_tokens: int = 0

    @property
    def spam_probability(self) -> float:
        """
        Posterior P(spam | message), normalized over the two classes.

        Uses the max-subtraction trick so large negative scores don't
        underflow.
        """
        if self.ham_score == self.spam_score:
            return 0.5
        top = max(self.ham_score, self.spam_score)
        spam = math.exp(self.spam_score - top)
        ham = math.exp(self.ham_score - top)
        return spam / (spam + ham)


def _log(p: float) -> float:
    return math.log(p) if p > 0 else -math.inf


def _decide(ham_score: float, spam_score: float) -> Label:
    if ham_score > spam_score:
        return Label.HAM
    if ham_score < spam_score:
        return Label.SPAM
    return Label.UNKNOWN


def classify_tokens(
    tokens: Iterable[str],
    table: ProbabilityTable,
    priors: ClassPriors,
    *,
    empty_policy: str = EMPTY_POLICY_UNKNOWN,
) -> Prediction:
    """
    Classify an already-tokenized message.

    Args:
        tokens: Normalized tokens, repeats included.
        table: Trained probability table.
        priors: Class priors.
        empty_policy: "unknown" or "prior", see module notes.

    Returns:
        Prediction for the message.

    Raises:
        ValueError: If empty_policy isn't recognized.
    """
    if empty_policy not in EMPTY_POLICIES:
        raise ValueError(
            f"Unknown empty policy {empty_policy!r}, expected one of {EMPTY_POLICIES}"
        )

    ham_score = _log(priors.ham)
    spam_score = _log(priors.spam)
    scored = 0

    for token in tokens:
        probs = table.get(token)
        if probs is None:
            continue
        ham_score += math.log(probs.ham)
        spam_score += math.log(probs.spam)
        scored += 1

    if scored == 0 and empty_policy == EMPTY_POLICY_UNKNOWN:
        label = Label.UNKNOWN
    else:
        label = _decide(ham_score, spam_score)

    return Prediction(
        label=label,
        ham_score=ham_score,
        spam_score=spam_score,
        scored_tokens=scored,
    )


def classify(
    text: str,
    table: ProbabilityTable,
    priors: ClassPriors,
    *,
    empty_policy: str = EMPTY_POLICY_UNKNOWN,
) -> Prediction:
    """
    Classify a message as ham, spam, or unknown.

    Args:
        text: Raw message text.
        table: Trained probability table.
        priors: Class priors.
        empty_policy: "unknown" or "prior".

    Returns:
        Prediction for the message.
    """
    return classify_tokens(normalize(text), table, priors, empty_policy=empty_policy)


def classify_many(
    texts: Iterable[str],
    table: ProbabilityTable,
    priors: ClassPriors,
    *,
    empty_policy: str = EMPTY_POLICY_UNKNOWN,
    workers: int | None = None,
) -> list[Prediction]:
    """
    Classify a batch of messages.

    The table is read-only, so messages are classified independently on a
    thread pool when workers > 1. Results are in input order.
    """
    texts = list(texts)

    def run(text: str) -> Prediction:
        return classify(text, table, priors, empty_policy=empty_policy)

    if not workers or workers <= 1:
        return [run(text) for text in texts]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, texts))


def token_contributions(text: str, table: ProbabilityTable) -> dict[str, float]:
    """
    Spam share of each distinct in-vocabulary token in a message.

    Returns:
        Token -> P(t|spam) / (P(t|spam) + P(t|ham)), in message order.
        Values above 0.5 push toward spam.
    """
    contributions: dict[str, float] = {}
    for token in normalize(text):
        probs = table.get(token)
        if probs is not None and token not in contributions:
            contributions[token] = probs.spam_share
    return contributions


def build_model(
    training_messages: Iterable[Message | tuple[str, str]],
    smoothing: float = DEFAULT_SMOOTHING,
    *,
    workers: int | None = None,
) -> tuple[ProbabilityTable, ClassPriors, Vocabulary]:
    """
    Train a model from labeled messages.

    Args:
        training_messages: Messages labeled ham/spam, or (label, text) pairs.
        smoothing: Additive smoothing constant.
        workers: Threads used to count the vocabulary.

    Returns:
        (ProbabilityTable, ClassPriors, Vocabulary)
    """
    vocabulary = build_vocabulary(training_messages, workers=workers)
    table, priors = estimate(vocabulary, smoothing)
    return table, priors, vocabulary


@dataclass(frozen=True)
class SpamModel:
    """
    A trained model: probability table, priors, and the vocabulary behind them.

    Only the vocabulary and smoothing constant are persisted. The table and
    priors are re-derived on load, so a reloaded model gives exactly the
    same predictions.

    Usage:
        >>> model = SpamModel.train([("ham", "see you soon"), ("spam", "win cash")])
        >>> model.classify("win win win").label
        <Label.SPAM: 'spam'>
        >>> model.save(path)
        >>> SpamModel.load(path) == model
        True

    Attributes:
        table: Token probabilities.
        priors: Class priors.
        vocabulary: Training counts.
    """
    table: ProbabilityTable
    priors: ClassPriors
    vocabulary: Vocabulary

    @classmethod
    def train(
        cls,
        training_messages: Iterable[Message | tuple[str, str]],
        smoothing: float = DEFAULT_SMOOTHING,
        *,
        workers: int | None = None,
    ) -> "SpamModel":
        """Train a model (see build_model)."""
        table, priors, vocabulary = build_model(
            training_messages, smoothing, workers=workers
        )
        return cls(table=table, priors=priors, vocabulary=vocabulary)

    @classmethod
    def from_vocabulary(
        cls,
        vocabulary: Vocabulary,
        smoothing: float = DEFAULT_SMOOTHING,
    ) -> "SpamModel":
        """Rebuild a model from stored counts."""
        table, priors = estimate(vocabulary, smoothing)
        return cls(table=table, priors=priors, vocabulary=vocabulary)

    @property
    def smoothing(self) -> float:
        return self.table.smoothing

    def classify(self, text: str, *, empty_policy: str = EMPTY_POLICY_UNKNOWN) -> Prediction:
        """Classify one message with this model."""
        return classify(text, self.table, self.priors, empty_policy=empty_policy)

    def classify_many(
        self,
        texts: Iterable[str],
        *,
        empty_policy: str = EMPTY_POLICY_UNKNOWN,
        workers: int | None = None,
    ) -> list[Prediction]:
        """Classify a batch of messages with this model."""
        return classify_many(
            texts, self.table, self.priors,
            empty_policy=empty_policy, workers=workers,
        )

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """JSON-ready representation (counts only)."""
        return {
            "version": MODEL_VERSION,
            "smoothing": self.smoothing,
            "ham_messages": self.vocabulary.ham_messages,
            "spam_messages": self.vocabulary.spam_messages,
            "tokens": {
                token: {"ham": counts.ham, "spam": counts.spam}
                for token, counts in self.vocabulary.counts.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SpamModel":
        """
        Rebuild a model from to_dict() output.

        Raises:
            ModelError: If the data is malformed or from another version.
        """
        try:
            if data["version"] != MODEL_VERSION:
                raise ModelError(f"Unsupported model version: {data['version']}")

            counts = {
                token: TokenCounts(ham=int(c["ham"]), spam=int(c["spam"]))
                for token, c in data["tokens"].items()
            }
            ham_messages = int(data["ham_messages"])
            spam_messages = int(data["spam_messages"])
            if ham_messages < 0 or spam_messages < 0 or any(
                c.ham < 0 or c.spam < 0 for c in counts.values()
            ):
                raise ModelError("Invalid model data: negative count")
            vocabulary = Vocabulary(
                counts=counts,
                ham_total=sum(c.ham for c in counts.values()),
                spam_total=sum(c.spam for c in counts.values()),
                ham_messages=ham_messages,
                spam_messages=spam_messages,
            )
            return cls.from_vocabulary(vocabulary, float(data["smoothing"]))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ModelError(f"Invalid model data: {e}") from e

    def save(self, path: Path | None = None) -> Path:
        """
        Save the model to disk as JSON.

        Args:
            path: Path to save to. Uses the XDG data location if None.

        Returns:
            The path written.
        """
        save_path = path
        if not save_path:
            from sms_bayes.config import Config
            save_path = Config.model_path()

        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f)

        logger.info(f"Saved model ({len(self.vocabulary)} tokens) to {save_path}")
        return save_path

    @classmethod
    def load(cls, path: Path | None = None) -> "SpamModel":
        """
        Load a model from disk.

        Args:
            path: Path to load from. Uses the XDG data location if None.

        Raises:
            ModelError: If there is no model file or it can't be parsed.
        """
        load_path = path
        if not load_path:
            from sms_bayes.config import Config
            load_path = Config.model_path()

        if not load_path.exists():
            raise ModelError(f"No trained model at {load_path} (run 'sms-bayes train' first)")

        try:
            with open(load_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ModelError(f"Could not read model file {load_path}: {e}") from e

        model = cls.from_dict(data)
        logger.debug(f"Loaded model ({len(model.vocabulary)} tokens) from {load_path}")
        return model
