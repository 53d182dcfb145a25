# =============================================================================
# Vocabulary Builder
# =============================================================================
# Counts how often each token appears in ham vs spam training messages.
#
# The vocabulary holds, for every distinct token seen in training:
#   - ham count:  occurrences across all ham messages (repeats counted)
#   - spam count: occurrences across all spam messages
# A token seen in only one class still gets an entry, with 0 for the other.
#
# It also keeps the per-class totals the estimator needs:
#   - ham_total / spam_total:       total tokens per class
#   - ham_messages / spam_messages: message counts per class (for priors)
#
# Counting is a plain sum, so it's commutative and associative. Partial
# vocabularies built from disjoint chunks of the corpus merge into exactly
# the vocabulary a single pass would produce. build_vocabulary() uses that
# to count chunks on a thread pool.
# =============================================================================

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from types import MappingProxyType

from sms_bayes.core import TRAINING_LABELS, Label, Message

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenCounts:
    """
    Token frequency counts for spam classification.

    Attributes:
        ham: Times this token appeared in ham.
        spam: Times this token appeared in spam.
    """
    ham: int = 0
    spam: int = 0

    def __add__(self, other: "TokenCounts") -> "TokenCounts":
        return TokenCounts(ham=self.ham + other.ham, spam=self.spam + other.spam)

    def for_label(self, label: Label) -> int:
        """Count for one class."""
        return self.spam if label is Label.SPAM else self.ham


_ZERO = TokenCounts()


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable per-class token frequency table.

    Attributes:
        counts: Token -> TokenCounts. Read-only after construction.
        ham_total: Total tokens over all ham messages.
        spam_total: Total tokens over all spam messages.
        ham_messages: Number of ham messages counted.
        spam_messages: Number of spam messages counted.

    Usage:
        >>> vocab = build_vocabulary([("ham", "hi there"), ("spam", "win cash now")])
        >>> len(vocab), vocab.ham_total, vocab.spam_total
        (5, 2, 3)
        >>> vocab["win"]
        TokenCounts(ham=0, spam=1)
    """
    counts: Mapping[str, TokenCounts] = field(default_factory=dict)
    ham_total: int = 0
    spam_total: int = 0
    ham_messages: int = 0
    spam_messages: int = 0

    def __post_init__(self) -> None:
        # Freeze the mapping so a shared vocabulary can't be mutated
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, token: object) -> bool:
        return token in self.counts

    def __getitem__(self, token: str) -> TokenCounts:
        return self.counts[token]

    def get(self, token: str) -> TokenCounts:
        """Counts for a token, zero for both classes if it was never seen."""
        return self.counts.get(token, _ZERO)

    @property
    def tokens(self) -> list[str]:
        """Distinct tokens in first-seen order."""
        return list(self.counts)

    @property
    def message_count(self) -> int:
        return self.ham_messages + self.spam_messages

    def total(self, label: Label) -> int:
        """Total token count for one class."""
        return self.spam_total if label is Label.SPAM else self.ham_total

    def messages(self, label: Label) -> int:
        """Message count for one class."""
        return self.spam_messages if label is Label.SPAM else self.ham_messages

    def merge(self, other: "Vocabulary") -> "Vocabulary":
        """
        Combine two vocabularies by summing counts.

        Tokens keep first-seen order: this vocabulary's tokens first, then
        any tokens only the other one has.
        """
        merged = dict(self.counts)
        for token, counts in other.counts.items():
            merged[token] = merged.get(token, _ZERO) + counts

        return Vocabulary(
            counts=merged,
            ham_total=self.ham_total + other.ham_total,
            spam_total=self.spam_total + other.spam_total,
            ham_messages=self.ham_messages + other.ham_messages,
            spam_messages=self.spam_messages + other.spam_messages,
        )


def merge_vocabularies(*parts: Vocabulary) -> Vocabulary:
    """Merge any number of partial vocabularies (empty input gives an empty one)."""
    result = Vocabulary()
    for part in parts:
        result = result.merge(part)
    return result


def count_messages(messages: Iterable[Message | tuple[str, str]]) -> Vocabulary:
    """
    Build a vocabulary in a single pass.

    Args:
        messages: Labeled messages, or (label, text) pairs.

    Returns:
        Vocabulary for exactly these messages.

    Raises:
        ValueError: If a message isn't labeled ham or spam.
    """
    # token -> [ham, spam]; mutable while counting, frozen at the end
    counts: dict[str, list[int]] = {}
    totals = {Label.HAM: 0, Label.SPAM: 0}
    message_counts = {Label.HAM: 0, Label.SPAM: 0}

    for item in messages:
        message = Message.coerce(item)
        if message.label not in TRAINING_LABELS:
            raise ValueError(
                f"Training messages must be labeled ham or spam, got {message.label!r}"
            )

        index = 1 if message.label is Label.SPAM else 0
        tokens = message.tokens

        message_counts[message.label] += 1
        totals[message.label] += len(tokens)

        for token in tokens:
            if token not in counts:
                counts[token] = [0, 0]
            counts[token][index] += 1

    return Vocabulary(
        counts={token: TokenCounts(ham=ham, spam=spam) for token, (ham, spam) in counts.items()},
        ham_total=totals[Label.HAM],
        spam_total=totals[Label.SPAM],
        ham_messages=message_counts[Label.HAM],
        spam_messages=message_counts[Label.SPAM],
    )


def build_vocabulary(
    messages: Iterable[Message | tuple[str, str]],
    *,
    workers: int | None = None,
) -> Vocabulary:
    """
    Build the training vocabulary.

    Args:
        messages: Labeled training messages, or (label, text) pairs.
        workers: Count chunks on this many threads. None or 1 counts inline.

    Returns:
        Vocabulary with per-class counts and totals.
    """
    items = [Message.coerce(item) for item in messages]

    if not workers or workers <= 1 or len(items) < 2:
        vocabulary = count_messages(items)
    else:
        # Contiguous chunks so the merged token order matches a single pass
        size = -(-len(items) // workers)
        chunks = [items[i:i + size] for i in range(0, len(items), size)]
        logger.debug(f"Counting {len(items)} messages in {len(chunks)} chunks")

        with ThreadPoolExecutor(max_workers=workers) as pool:
            parts = list(pool.map(count_messages, chunks))
        vocabulary = merge_vocabularies(*parts)

    logger.info(
        f"Built vocabulary: {len(vocabulary)} tokens, "
        f"ham_total={vocabulary.ham_total}, spam_total={vocabulary.spam_total}"
    )
    return vocabulary
