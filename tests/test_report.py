# =============================================================================
# Report Tests
# =============================================================================

import pytest

from sms_bayes.core import Label, Message
from sms_bayes.report import evaluate, top_words
from sms_bayes.spam.classifier import Prediction


def _prediction(label: Label) -> Prediction:
    return Prediction(label=label, ham_score=-1.0, spam_score=-1.0)


class TestEvaluate:
    """Tests for accuracy and the confusion matrix."""

    @pytest.fixture
    def report(self):
        messages = [
            Message("a1", Label.HAM),
            Message("a2", Label.HAM),
            Message("b1", Label.SPAM),
            Message("b2", Label.SPAM),
        ]
        predictions = [
            _prediction(Label.HAM),
            _prediction(Label.SPAM),
            _prediction(Label.SPAM),
            _prediction(Label.UNKNOWN),
        ]
        return evaluate(messages, predictions)

    def test_accuracy(self, report):
        assert report.total == 4
        assert report.accuracy == pytest.approx(0.5)
        assert report.unknown == 1

    def test_confusion_matrix(self, report):
        assert report.count(Label.HAM, Label.HAM) == 1
        assert report.count(Label.HAM, Label.SPAM) == 1
        assert report.count(Label.SPAM, Label.SPAM) == 1
        assert report.count(Label.SPAM, Label.UNKNOWN) == 1
        assert report.matrix[2] == [0, 0, 0]

    def test_format(self, report):
        text = report.format()

        assert "Accuracy:  0.5000" in text
        assert "Unknown:   1" in text
        assert "unknown" in text.splitlines()[4]

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            evaluate([Message("x", Label.HAM)], [])

    def test_empty(self):
        with pytest.raises(ValueError):
            evaluate([], [])


class TestTopWords:
    """Tests for the stopword-filtered word counts."""

    def test_counts_one_class(self):
        messages = [
            Message("Win the cash", Label.SPAM),
            Message("win cash now", Label.SPAM),
            Message("see you at lunch", Label.HAM),
        ]

        assert dict(top_words(messages, Label.SPAM)) == {"win": 2, "cash": 2}
        assert dict(top_words(messages, Label.HAM)) == {"see": 1, "lunch": 1}

    def test_limit(self):
        messages = [Message("alpha beta gamma alpha", Label.HAM)]

        assert top_words(messages, Label.HAM, limit=1) == [("alpha", 2)]
