# =============================================================================
# Repository - Data Access Layer
# =============================================================================
# High-level operations on training runs and predictions.
#
# It handles:
#   - Converting between models/predictions and database rows
#   - Rebuilding a stored run into a SpamModel
#
# All methods are async for non-blocking database access.
# =============================================================================

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sms_bayes.core import Label, Message
from sms_bayes.spam.classifier import Prediction, SpamModel
from sms_bayes.spam.vocabulary import TokenCounts, Vocabulary

if TYPE_CHECKING:
    from sms_bayes.storage.database import Database


@dataclass
class StoredPrediction:
    """A prediction row, with the message it was made for."""
    message: Message
    prediction: Prediction


class Repository:
    """
    Data access layer for SMS-Bayes.

    Usage:
        >>> repo = Repository(database)
        >>> run_id = await repo.save_run(model)
        >>> model = await repo.load_run(run_id)
        >>> await repo.save_predictions(run_id, messages, predictions)

    Attributes:
        db: Database instance for executing queries.
    """

    def __init__(self, db: "Database") -> None:
        """
        Initialize the repository.

        Args:
            db: Connected Database instance.
        """
        self.db = db

    # =========================================================================
    # Training Runs
    # =========================================================================

    async def save_run(self, model: SpamModel) -> int:
        """
        Store a trained model's counts.

        Args:
            model: Model to store.

        Returns:
            ID of the new run.
        """
        vocabulary = model.vocabulary
        cursor = await self.db.conn.execute(
            """INSERT INTO training_runs (smoothing, ham_messages, spam_messages)
               VALUES (?, ?, ?)""",
            (model.smoothing, vocabulary.ham_messages, vocabulary.spam_messages)
        )
        run_id = cursor.lastrowid

        await self.db.conn.executemany(
            """INSERT INTO vocabulary (run_id, position, token, ham_count, spam_count)
               VALUES (?, ?, ?, ?, ?)""",
            [
                (run_id, position, token, counts.ham, counts.spam)
                for position, (token, counts) in enumerate(vocabulary.counts.items())
            ]
        )
        await self.db.conn.commit()
        return run_id

    async def load_run(self, run_id: int) -> SpamModel | None:
        """
        Rebuild the model of a stored run.

        Args:
            run_id: Primary key of the run.

        Returns:
            SpamModel if the run exists, None otherwise.
        """
        async with self.db.conn.execute(
            "SELECT smoothing, ham_messages, spam_messages FROM training_runs WHERE id = ?",
            (run_id,)
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        smoothing, ham_messages, spam_messages = row

        async with self.db.conn.execute(
            """SELECT token, ham_count, spam_count FROM vocabulary
               WHERE run_id = ? ORDER BY position""",
            (run_id,)
        ) as cursor:
            rows = await cursor.fetchall()

        counts = {token: TokenCounts(ham=ham, spam=spam) for token, ham, spam in rows}
        vocabulary = Vocabulary(
            counts=counts,
            ham_total=sum(c.ham for c in counts.values()),
            spam_total=sum(c.spam for c in counts.values()),
            ham_messages=ham_messages,
            spam_messages=spam_messages,
        )
        return SpamModel.from_vocabulary(vocabulary, smoothing)

    async def latest_run_id(self) -> int | None:
        """ID of the most recent run, None if nothing has been trained."""
        async with self.db.conn.execute(
            "SELECT MAX(id) FROM training_runs"
        ) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else None

    async def delete_run(self, run_id: int) -> None:
        """Delete a run with its vocabulary and predictions."""
        await self.db.conn.execute("DELETE FROM training_runs WHERE id = ?", (run_id,))
        await self.db.conn.commit()

    # =========================================================================
    # Predictions
    # =========================================================================

    async def save_predictions(
        self,
        run_id: int,
        messages: Sequence[Message],
        predictions: Sequence[Prediction],
    ) -> int:
        """
        Store predictions made with a run's model.

        Args:
            run_id: Run whose model made the predictions.
            messages: Classified messages (labels optional).
            predictions: One per message, same order.

        Returns:
            Number of rows written.
        """
        if len(messages) != len(predictions):
            raise ValueError(f"Got {len(messages)} messages but {len(predictions)} predictions")

        await self.db.conn.executemany(
            """INSERT INTO predictions
               (run_id, text, actual, predicted, ham_score, spam_score, scored_tokens)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            [
                (run_id, message.text,
                 message.label.value if message.label else None,
                 prediction.label.value, prediction.ham_score,
                 prediction.spam_score, prediction.scored_tokens)
                for message, prediction in zip(messages, predictions)
            ]
        )
        await self.db.conn.commit()
        return len(predictions)

    async def get_predictions(self, run_id: int) -> list[StoredPrediction]:
        """
        Get a run's predictions in insertion order.

        Args:
            run_id: Run ID.

        Returns:
            List of StoredPrediction.
        """
        async with self.db.conn.execute(
            """SELECT text, actual, predicted, ham_score, spam_score, scored_tokens
               FROM predictions WHERE run_id = ? ORDER BY id""",
            (run_id,)
        ) as cursor:
            rows = await cursor.fetchall()
            return [self._row_to_prediction(row) for row in rows]

    # =========================================================================
    # Row Conversion
    # =========================================================================

    def _row_to_prediction(self, row) -> StoredPrediction:
        """Convert a database row to a StoredPrediction."""
        text, actual, predicted, ham_score, spam_score, scored_tokens = row
        return StoredPrediction(
            message=Message(text=text, label=Label(actual) if actual else None),
            prediction=Prediction(
                label=Label(predicted),
                ham_score=ham_score,
                spam_score=spam_score,
                scored_tokens=scored_tokens,
            ),
        )
