# =============================================================================
# Tokenizer Tests
# =============================================================================

import pytest

from sms_bayes.spam.tokenizer import (
    LONGNUM_TOKEN,
    URL_TOKEN,
    Tokenizer,
    TokenizerConfig,
    normalize,
)


class TestNormalize:
    """Tests for the default normalization pipeline."""

    def test_sentinels_and_punctuation(self):
        tokens = normalize("Free!!! WIN cash now www.example.com 12345678")

        assert tokens == ["free", "win", "cash", "now", URL_TOKEN, LONGNUM_TOKEN]
        assert all(len(token) > 1 for token in tokens)
        assert all(any(c.isalnum() for c in token) for token in tokens)

    def test_http_url(self):
        assert normalize("Visit http://bit.ly/xyz today") == ["visit", URL_TOKEN, "today"]

    def test_https_and_mixed_case_url(self):
        assert normalize("HTTPS://Example.com/Claim") == [URL_TOKEN]

    def test_short_digit_runs_are_kept(self):
        assert normalize("code 123456 expires") == ["code", "123456", "expires"]

    def test_digits_inside_a_word_are_not_longnum(self):
        assert normalize("ref abc1234567") == ["ref", "abc1234567"]

    def test_phone_number_with_punctuation(self):
        # Punctuation goes first, so the digits join up into one long run
        assert normalize("call 0800-123-4567") == ["call", LONGNUM_TOKEN]

    def test_single_letters_dropped(self):
        assert normalize("I saw a u") == ["saw"]

    def test_whitespace_of_any_kind_splits(self):
        assert normalize("hi\nthere\tyou") == ["hi", "there", "you"]

    def test_underscores_kept(self):
        assert normalize("foo_bar") == ["foo_bar"]

    @pytest.mark.parametrize("text", ["", "   ", "!!! ?? ...", "a b c"])
    def test_nothing_left_gives_empty_list(self, text):
        assert normalize(text) == []

    def test_repeats_kept_in_order(self):
        assert normalize("win WIN win!") == ["win", "win", "win"]

    def test_deterministic(self):
        text = "URGENT! Call 09061701461 or visit www.prize.co.uk"
        assert normalize(text) == normalize(text)

    @pytest.mark.parametrize("text", [
        "Free!!! WIN cash now www.example.com 12345678",
        "Ok lar... Joking wif u oni...",
        "URGENT! Your mobile No. 07808726822 was awarded £2,000",
        "http://x.com _url_ _longnum_ 1234567",
        "İstanbul deal",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(" ".join(once)) == once

    def test_lowercasing_adds_no_marks(self):
        assert normalize("İstanbul deal") == ["istanbul", "deal"]


class TestTokenizerConfig:
    """Tests for non-default tokenizer settings."""

    def test_min_token_length(self):
        tokenizer = Tokenizer(TokenizerConfig(min_token_length=1))
        assert tokenizer.tokenize("a b") == ["a", "b"]

    def test_long_number_digits(self):
        tokenizer = Tokenizer(TokenizerConfig(long_number_digits=4))
        assert tokenizer.tokenize("pin 1234 id 123") == ["pin", LONGNUM_TOKEN, "id", "123"]
