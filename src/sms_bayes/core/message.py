# =============================================================================
# Message Model
# =============================================================================
# Represents a short text message (an SMS) and its class label.
#
# A message carries:
#   - The original text, exactly as the loader produced it
#   - Its label (ham or spam) when it comes from the training data
#   - Two derived views, computed lazily and cached:
#       * tokens:       Normalizer output, the only thing the model sees
#       * cleaned_text: stopword-filtered text, used for word-frequency
#                       inspection only (never fed to the model)
#
# Messages are immutable. Two messages with the same text and label are equal.
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from functools import cached_property


class Label(str, Enum):
    """
    Classification labels.

    HAM and SPAM are the two trainable classes. UNKNOWN is only ever a
    prediction: it marks a tie or a message with nothing to score.
    """
    HAM = "ham"
    SPAM = "spam"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | Label") -> "Label":
        """
        Parse a label from loose text ("Ham", " spam ").

        Raises:
            ValueError: If the value isn't a known label.
        """
        if isinstance(value, Label):
            return value
        return cls(str(value).strip().lower())


# Labels a training message may carry
TRAINING_LABELS = (Label.HAM, Label.SPAM)


@dataclass(frozen=True)
class Message:
    """
    A single text message.

    Attributes:
        text: Original message text (may be empty).
        label: Known class for training data, None at inference time.

    Example:
        >>> msg = Message("WIN cash now!!!", Label.SPAM)
        >>> msg.tokens
        ['win', 'cash', 'now']
    """
    text: str
    label: Label | None = None

    @cached_property
    def tokens(self) -> list[str]:
        """Normalized token sequence of the original text."""
        from sms_bayes.spam.tokenizer import normalize
        return normalize(self.text)

    @cached_property
    def cleaned_text(self) -> str:
        """Stopword-filtered text (side channel for word-frequency reports)."""
        from sms_bayes.spam.stopwords import remove_stopwords
        return remove_stopwords(self.text)

    @classmethod
    def coerce(cls, item: "Message | tuple[str, str]") -> "Message":
        """
        Accept either a Message or a (label, text) pair.

        Pairs are what most callers have at hand, e.g. rows of a CSV.
        """
        if isinstance(item, Message):
            return item
        label, text = item
        return cls(text=text, label=Label.parse(label))
