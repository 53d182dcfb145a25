# =============================================================================
# Classify Screen
# =============================================================================
# Interactive classification of typed messages.
#
# Layout:
#   - Input line: type a message and press Enter
#   - Result line: predicted label, both log scores, P(spam)
#   - Token table: how each known token leans
# =============================================================================

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static

from sms_bayes.core import Label
from sms_bayes.spam.classifier import EMPTY_POLICY_UNKNOWN, Prediction, SpamModel
from sms_bayes.ui.widgets.token_table import TokenTable


# Label -> Rich markup color
LABEL_COLORS = {
    Label.HAM: "green",
    Label.SPAM: "red",
    Label.UNKNOWN: "yellow",
}


class ClassifyScreen(Screen):
    """
    Screen for classifying messages one at a time.

    Attributes:
        model: Trained model used for every prediction.
        empty_policy: Policy for messages with no known tokens.
        last_prediction: Most recent prediction, None before the first.
    """

    BINDINGS = [
        Binding("ctrl+l", "clear", "Clear"),
    ]

    CSS = """
    #classify-container {
        padding: 1 2;
    }

    #message-input {
        margin-bottom: 1;
    }

    #prediction {
        height: auto;
        margin-bottom: 1;
    }

    #model-info {
        color: $text-muted;
        margin-bottom: 1;
    }
    """

    def __init__(self, model: SpamModel, empty_policy: str = EMPTY_POLICY_UNKNOWN) -> None:
        """
        Initialize the classify screen.

        Args:
            model: Trained model.
            empty_policy: "unknown" or "prior".
        """
        super().__init__()
        self.model = model
        self.empty_policy = empty_policy
        self.last_prediction: Prediction | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="classify-container"):
            vocabulary = self.model.vocabulary
            yield Static(
                f"{len(vocabulary)} tokens, trained on {vocabulary.ham_messages} ham / "
                f"{vocabulary.spam_messages} spam messages",
                id="model-info",
            )
            yield Input(placeholder="Type a message and press Enter...", id="message-input")
            yield Static("", id="prediction")
            yield TokenTable(id="tokens")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the message input on mount."""
        self.query_one("#message-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Classify the submitted message."""
        if event.input.id == "message-input":
            self.classify_text(event.value)

    def classify_text(self, text: str) -> Prediction:
        """Classify text and update the display."""
        prediction = self.model.classify(text, empty_policy=self.empty_policy)
        self.last_prediction = prediction

        color = LABEL_COLORS[prediction.label]
        self.query_one("#prediction", Static).update(
            f"[bold {color}]{prediction.label.value.upper()}[/]  "
            f"ham={prediction.ham_score:.3f}  spam={prediction.spam_score:.3f}  "
            f"P(spam)={prediction.spam_probability:.3f}  "
            f"({prediction.scored_tokens} known tokens)"
        )
        self.query_one("#tokens", TokenTable).show_tokens(text, self.model.table)
        return prediction

    def action_clear(self) -> None:
        """Clear the input and results."""
        self.query_one("#message-input", Input).value = ""
        self.query_one("#prediction", Static).update("")
        self.query_one("#tokens", TokenTable).clear()
        self.last_prediction = None
