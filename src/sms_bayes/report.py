# =============================================================================
# Reports
# =============================================================================
# Downstream consumers of the classifier's output. Nothing here feeds back
# into the model.
#
#   - evaluate():  accuracy and confusion matrix of predictions against the
#                  known labels of a held-out split
#   - top_words(): most common words per class, counted on the
#                  stopword-filtered side channel (Message.cleaned_text)
# =============================================================================

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from sklearn.metrics import accuracy_score, confusion_matrix

from sms_bayes.core import Label, Message
from sms_bayes.spam.classifier import Prediction

# Row/column order of the confusion matrix
REPORT_LABELS = [Label.HAM.value, Label.SPAM.value, Label.UNKNOWN.value]


@dataclass
class EvaluationReport:
    """
    Evaluation of predictions on labeled messages.

    Attributes:
        total: Number of messages evaluated.
        accuracy: Fraction predicted correctly ("unknown" counts as wrong).
        matrix: Confusion matrix, rows = actual, columns = predicted, both
                in REPORT_LABELS order. The "unknown" row is always zero.
        unknown: Number of "unknown" predictions.
    """
    total: int
    accuracy: float
    matrix: list[list[int]]
    unknown: int

    def count(self, actual: Label, predicted: Label) -> int:
        """Cell of the confusion matrix."""
        return self.matrix[REPORT_LABELS.index(actual.value)][REPORT_LABELS.index(predicted.value)]

    def format(self) -> str:
        """Plain-text report for the terminal."""
        width = max(len(label) for label in REPORT_LABELS) + 2
        lines = [
            f"Messages:  {self.total}",
            f"Accuracy:  {self.accuracy:.4f}",
            f"Unknown:   {self.unknown}",
            "",
            "actual \\ predicted".ljust(20) + "".join(label.rjust(width) for label in REPORT_LABELS),
        ]
        for label, row in zip(REPORT_LABELS[:2], self.matrix):
            lines.append(label.ljust(20) + "".join(str(n).rjust(width) for n in row))
        return "\n".join(lines)


def evaluate(messages: Sequence[Message], predictions: Sequence[Prediction]) -> EvaluationReport:
    """
    Score predictions against known labels.

    Args:
        messages: Labeled messages.
        predictions: One prediction per message, same order.

    Raises:
        ValueError: If the sequences differ in length or are empty.
    """
    if len(messages) != len(predictions):
        raise ValueError(f"Got {len(messages)} messages but {len(predictions)} predictions")
    if not messages:
        raise ValueError("Nothing to evaluate")

    actual = [message.label.value for message in messages]
    predicted = [prediction.label.value for prediction in predictions]

    matrix = confusion_matrix(actual, predicted, labels=REPORT_LABELS)

    return EvaluationReport(
        total=len(messages),
        accuracy=float(accuracy_score(actual, predicted)),
        matrix=matrix.tolist(),
        unknown=predicted.count(Label.UNKNOWN.value),
    )


def top_words(messages: Sequence[Message], label: Label, limit: int = 20) -> list[tuple[str, int]]:
    """
    Most common stopword-filtered words in one class.

    Words are lowercased for counting; punctuation is left as-is.

    Returns:
        (word, count) pairs, most common first.
    """
    counter: Counter[str] = Counter()
    for message in messages:
        if message.label is label:
            counter.update(word.lower() for word in message.cleaned_text.split())
    return counter.most_common(limit)
