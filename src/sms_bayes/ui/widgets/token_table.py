# =============================================================================
# Token Table Widget
# =============================================================================
# A table of the in-vocabulary tokens of a message and how each one leans.
#
# Columns: token, P(token|ham), P(token|spam), spam share. Tokens that lean
# toward spam (share > 0.5) are shown in red, ham-leaning ones in green.
# Out-of-vocabulary tokens don't appear: they don't affect the decision.
# =============================================================================

from textual.widgets import DataTable

from sms_bayes.spam.classifier import token_contributions
from sms_bayes.spam.estimator import ProbabilityTable


class TokenTable(DataTable):
    """
    A table widget showing per-token probabilities.

    Usage:
        >>> table = TokenTable()
        >>> table.show_tokens("win cash now", model.table)
    """

    # Column configuration
    COLUMNS = [
        ("Token", 0),       # Token (flexible width)
        ("P(t|ham)", 12),
        ("P(t|spam)", 12),
        ("Spam share", 12),
    ]

    def __init__(self, **kwargs) -> None:
        """
        Initialize the token table.

        Args:
            **kwargs: Additional arguments passed to DataTable.
        """
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        for label, width in self.COLUMNS:
            if width > 0:
                self.add_column(label, width=width)
            else:
                self.add_column(label)

    def show_tokens(self, text: str, table: ProbabilityTable) -> int:
        """
        Replace the rows with the tokens of a message.

        Returns:
            Number of rows shown.
        """
        self.clear()

        contributions = token_contributions(text, table)
        for token, share in contributions.items():
            probs = table[token]
            color = "red" if share > 0.5 else "green"
            self.add_row(
                token,
                f"{probs.ham:.6f}",
                f"{probs.spam:.6f}",
                f"[{color}]{share:.3f}[/]",
            )
        return len(contributions)
