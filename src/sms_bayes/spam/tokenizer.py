# =============================================================================
# Message Tokenizer (Text Normalizer)
# =============================================================================
# Converts message text into tokens (features) for the spam classifier.
#
# The pipeline is fixed and order-sensitive:
#   1. Strip every character that isn't a word character or whitespace
#   2. Lowercase, then strip again (lowercasing can add combining marks)
#   3. Standalone words starting with http / www   -> _url_
#   4. Standalone runs of 7+ digits                 -> _longnum_
#   5. Split on whitespace
#   6. Drop tokens of length <= 1
#
# Word characters include "_", so the sentinel tokens survive a second pass
# and normalizing already-normalized text is a no-op.
#
# The same tokenizer is used to build the vocabulary and to classify, which
# is what makes a trained model reproducible.
# =============================================================================

import re
from dataclasses import dataclass


# Sentinel tokens
URL_TOKEN = "_url_"
LONGNUM_TOKEN = "_longnum_"


@dataclass(frozen=True)
class TokenizerConfig:
    """
    Configuration for message tokenization.

    Attributes:
        min_token_length: Minimum length for a token to be kept.
        long_number_digits: Digit runs at least this long become _longnum_.
    """
    min_token_length: int = 2
    long_number_digits: int = 7


class Tokenizer:
    """
    Converts message text into normalized tokens.

    Usage:
        >>> tokenizer = Tokenizer()
        >>> tokenizer.tokenize("Call 07123456789 or see www.win.com NOW!")
        ['call', '_longnum_', 'or', 'see', '_url_', 'now']
    """

    # Anything that isn't a word character or whitespace
    STRIP_PATTERN = re.compile(r"[^\w\s]")

    # Whole whitespace-delimited words starting with http or www
    URL_PATTERN = re.compile(r"(?<!\S)(?:http|www)\S*")

    def __init__(self, config: TokenizerConfig | None = None) -> None:
        """
        Initialize the tokenizer.

        Args:
            config: Tokenizer configuration.
        """
        self.config = config or TokenizerConfig()

        self._longnum_pattern = re.compile(
            rf"(?<!\S)\d{{{self.config.long_number_digits},}}(?!\S)"
        )

    def tokenize(self, text: str) -> list[str]:
        """
        Tokenize message text.

        Args:
            text: Raw message text. Empty text is fine.

        Returns:
            List of tokens, in message order (repeats kept).
        """
        if not text:
            return []

        text = self.STRIP_PATTERN.sub("", text)
        # Lowercasing can add combining marks ("İ" becomes "i" + U+0307)
        text = self.STRIP_PATTERN.sub("", text.lower())
        text = self.URL_PATTERN.sub(URL_TOKEN, text)
        text = self._longnum_pattern.sub(LONGNUM_TOKEN, text)

        return [
            word for word in text.split()
            if len(word) >= self.config.min_token_length
        ]


_default_tokenizer = Tokenizer()


def normalize(text: str) -> list[str]:
    """Tokenize text with the default tokenizer."""
    return _default_tokenizer.tokenize(text)
