# =============================================================================
# Vocabulary Builder Tests
# =============================================================================

import pytest

from sms_bayes.core import Label, Message
from sms_bayes.spam.vocabulary import (
    TokenCounts,
    Vocabulary,
    build_vocabulary,
    count_messages,
    merge_vocabularies,
)


class TestBuildVocabulary:
    """Tests for single-pass vocabulary construction."""

    def test_tiny_corpus(self, tiny_pairs):
        vocab = build_vocabulary(tiny_pairs)

        assert set(vocab.tokens) == {"hi", "there", "win", "cash", "now"}
        assert len(vocab) == 5
        assert vocab["hi"] == TokenCounts(ham=1, spam=0)
        assert vocab["there"] == TokenCounts(ham=1, spam=0)
        assert vocab["win"] == TokenCounts(ham=0, spam=1)
        assert vocab["cash"] == TokenCounts(ham=0, spam=1)
        assert vocab["now"] == TokenCounts(ham=0, spam=1)
        assert vocab.ham_total == 2
        assert vocab.spam_total == 3
        assert vocab.ham_messages == 1
        assert vocab.spam_messages == 1

    def test_repeats_counted(self):
        vocab = build_vocabulary([("spam", "win win WIN"), ("ham", "win")])

        assert vocab["win"] == TokenCounts(ham=1, spam=3)
        assert vocab.spam_total == 3
        assert vocab.ham_total == 1

    def test_totals_match_token_counts(self, sample_corpus):
        vocab = build_vocabulary(sample_corpus)

        assert vocab.ham_total == sum(c.ham for c in vocab.counts.values())
        assert vocab.spam_total == sum(c.spam for c in vocab.counts.values())
        assert vocab.ham_total == sum(len(m.tokens) for m in sample_corpus if m.label is Label.HAM)

    def test_every_training_token_has_one_entry(self, sample_corpus):
        vocab = build_vocabulary(sample_corpus)

        seen = {token for message in sample_corpus for token in message.tokens}
        assert set(vocab.tokens) == seen
        assert len(vocab.tokens) == len(seen)

    def test_first_seen_order(self):
        vocab = build_vocabulary([("ham", "bb aa bb"), ("spam", "cc aa")])
        assert vocab.tokens == ["bb", "aa", "cc"]

    def test_empty_message_counts_towards_priors(self):
        vocab = build_vocabulary([("ham", "!!!"), ("spam", "win")])

        assert vocab.ham_messages == 1
        assert vocab.ham_total == 0

    def test_accepts_message_objects(self):
        vocab = build_vocabulary([Message("hi there", Label.HAM)])
        assert vocab["hi"].ham == 1

    @pytest.mark.parametrize("item", [
        Message("hello", None),
        ("unknown", "hello"),
    ])
    def test_rejects_non_training_labels(self, item):
        with pytest.raises(ValueError):
            build_vocabulary([item])

    def test_unseen_token_counts_zero(self, tiny_pairs):
        vocab = build_vocabulary(tiny_pairs)

        assert "zzz" not in vocab
        assert vocab.get("zzz") == TokenCounts(ham=0, spam=0)

    def test_counts_are_read_only(self, tiny_pairs):
        vocab = build_vocabulary(tiny_pairs)

        with pytest.raises(TypeError):
            vocab.counts["hi"] = TokenCounts(ham=5)

    def test_total_and_messages_by_label(self, tiny_pairs):
        vocab = build_vocabulary(tiny_pairs)

        assert vocab.total(Label.HAM) == 2
        assert vocab.total(Label.SPAM) == 3
        assert vocab.messages(Label.SPAM) == 1
        assert vocab["win"].for_label(Label.SPAM) == 1


class TestMerge:
    """Merging partial vocabularies is order-independent summation."""

    def test_merge_equals_single_pass(self, sample_corpus):
        first, second = sample_corpus[:4], sample_corpus[4:]

        merged = count_messages(first).merge(count_messages(second))

        assert merged == count_messages(sample_corpus)

    def test_merge_is_commutative(self, sample_corpus):
        a = count_messages(sample_corpus[:3])
        b = count_messages(sample_corpus[3:])

        assert a.merge(b) == b.merge(a)

    def test_merge_is_associative(self, sample_corpus):
        a = count_messages(sample_corpus[:3])
        b = count_messages(sample_corpus[3:6])
        c = count_messages(sample_corpus[6:])

        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_merge_with_empty(self, tiny_pairs):
        vocab = count_messages(tiny_pairs)

        assert vocab.merge(Vocabulary()) == vocab
        assert merge_vocabularies() == Vocabulary()
        assert merge_vocabularies(vocab) == vocab

    def test_workers_match_single_pass(self, sample_corpus):
        single = build_vocabulary(sample_corpus)
        threaded = build_vocabulary(sample_corpus, workers=3)

        assert threaded == single
        assert threaded.tokens == single.tokens
