# =============================================================================
# Probability Estimator Tests
# =============================================================================

import pytest

from sms_bayes.core import Label
from sms_bayes.spam.estimator import (
    ClassPriors,
    ProbabilityTable,
    TokenProbabilities,
    estimate,
    smoothed_probability,
)
from sms_bayes.spam.vocabulary import build_vocabulary


class TestEstimate:
    """Tests for Laplace-smoothed probabilities."""

    def test_tiny_corpus_probabilities(self, tiny_pairs):
        table, _priors = estimate(build_vocabulary(tiny_pairs))

        assert table["win"].spam == pytest.approx(0.25)
        assert table["win"].ham == pytest.approx(1 / 7)
        assert table["hi"].ham == pytest.approx(2 / 7)
        assert table["hi"].spam == pytest.approx(1 / 8)

    def test_custom_smoothing(self, tiny_pairs):
        table, _priors = estimate(build_vocabulary(tiny_pairs), smoothing=0.5)

        assert table["win"].spam == pytest.approx(1.5 / 5.5)
        assert table["win"].ham == pytest.approx(0.5 / 4.5)
        assert table.smoothing == 0.5

    def test_probabilities_in_range(self, sample_corpus):
        table, _priors = estimate(build_vocabulary(sample_corpus))

        for probs in table.probabilities.values():
            assert 0 < probs.ham <= 1
            assert 0 < probs.spam <= 1

    def test_each_class_sums_to_one(self, sample_corpus):
        table, _priors = estimate(build_vocabulary(sample_corpus))

        assert sum(p.ham for p in table.probabilities.values()) == pytest.approx(1.0)
        assert sum(p.spam for p in table.probabilities.values()) == pytest.approx(1.0)

    def test_every_vocabulary_token_in_table(self, sample_corpus):
        vocab = build_vocabulary(sample_corpus)
        table, _priors = estimate(vocab)

        assert set(table.probabilities) == set(vocab.tokens)

    def test_table_is_read_only(self, tiny_pairs):
        table, _priors = estimate(build_vocabulary(tiny_pairs))

        with pytest.raises(TypeError):
            table.probabilities["win"] = TokenProbabilities(0.5, 0.5)

    def test_unknown_token_lookup(self, tiny_pairs):
        table, _priors = estimate(build_vocabulary(tiny_pairs))

        assert table.get("zzz") is None
        assert "zzz" not in table
        assert len(table) == 5

    @pytest.mark.parametrize("smoothing", [0, -1.0])
    def test_smoothing_must_be_positive(self, tiny_pairs, smoothing):
        with pytest.raises(ValueError):
            estimate(build_vocabulary(tiny_pairs), smoothing=smoothing)

    def test_smoothed_probability(self):
        assert smoothed_probability(0, 2, 5, 1.0) == pytest.approx(1 / 7)


class TestPriors:
    """Tests for class priors."""

    def test_tiny_priors(self, tiny_pairs):
        _table, priors = estimate(build_vocabulary(tiny_pairs))

        assert priors == ClassPriors(ham=0.5, spam=0.5)

    def test_priors_follow_message_counts(self, sample_corpus):
        _table, priors = estimate(build_vocabulary(sample_corpus))

        assert priors.ham == pytest.approx(0.6)
        assert priors.spam == pytest.approx(0.4)
        assert priors.total == pytest.approx(1.0)
        assert priors.for_label(Label.SPAM) == priors.spam

    def test_priors_unaffected_by_message_length(self):
        vocab = build_vocabulary([("ham", "hi"), ("spam", "win " * 50)])
        _table, priors = estimate(vocab)

        assert priors == ClassPriors(ham=0.5, spam=0.5)

    def test_single_class_rejected(self):
        with pytest.raises(ValueError):
            estimate(build_vocabulary([("ham", "hi there")]))

    def test_empty_vocabulary_rejected(self):
        with pytest.raises(ValueError):
            estimate(build_vocabulary([]))


def test_spam_share():
    assert TokenProbabilities(ham=0.1, spam=0.3).spam_share == pytest.approx(0.75)


def test_default_table_is_empty():
    assert len(ProbabilityTable()) == 0
