# =============================================================================
# Dataset Loading and Splitting
# =============================================================================
# Reads a labeled message CSV and produces Message objects, then splits them
# into train/test partitions.
#
# Loading:
#   - Bytes that don't decode are replaced (U+FFFD), never fatal
#   - Several text columns can be joined into one message. The common SMS
#     Spam Collection CSV spills long messages into "Unnamed: 2..4".
#   - Labels are stripped and lowercased, and must end up as ham or spam
#
# Splitting is stratified by label with a fixed seed, so the class ratio is
# the same in both partitions and the same split comes back every run.
# =============================================================================

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split

from sms_bayes.core import TRAINING_LABELS, Label, Message

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when a dataset can't be loaded or split."""
    pass


def load_frame(path: Path, *, encoding: str = "utf-8") -> pd.DataFrame:
    """
    Read a CSV as strings, with empty cells as "".

    Raises:
        DatasetError: If the file is missing or isn't parseable CSV.
    """
    if not path.exists():
        raise DatasetError(f"Dataset not found: {path}")

    try:
        return pd.read_csv(
            path,
            encoding=encoding,
            encoding_errors="replace",
            dtype=str,
            keep_default_na=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, LookupError) as e:
        raise DatasetError(f"Could not parse {path}: {e}") from e


def frame_to_messages(
    frame: pd.DataFrame,
    *,
    label_column: str = "v1",
    text_columns: Sequence[str] = ("v2",),
) -> list[Message]:
    """
    Convert a DataFrame into labeled messages.

    Args:
        frame: One row per message.
        label_column: Column with ham/spam labels.
        text_columns: Columns joined (with a space) into the message text.
                      Columns the frame doesn't have are skipped.

    Raises:
        DatasetError: On missing columns, bad labels, or no rows.
    """
    if label_column not in frame.columns:
        raise DatasetError(f"Label column {label_column!r} not found in {list(frame.columns)}")

    present = [column for column in text_columns if column in frame.columns]
    if not present:
        raise DatasetError(f"None of the text columns {list(text_columns)} found in {list(frame.columns)}")

    if frame.empty:
        raise DatasetError("Dataset has no rows")

    labels = frame[label_column].str.strip().str.lower()
    valid = {label.value for label in TRAINING_LABELS}
    bad = sorted(set(labels) - valid)
    if bad:
        raise DatasetError(f"Unexpected labels {bad}, expected only {sorted(valid)}")

    texts = frame[present].apply(
        lambda row: " ".join(value for value in row if value),
        axis=1,
    )

    messages = [
        Message(text=text, label=Label(label))
        for label, text in zip(labels, texts)
    ]
    logger.debug(f"Read {len(messages)} messages from columns {present}")
    return messages


def load_messages(
    path: Path,
    *,
    label_column: str = "v1",
    text_columns: Sequence[str] = ("v2",),
    encoding: str = "utf-8",
) -> list[Message]:
    """
    Load labeled messages from a CSV file.

    Returns:
        Messages in file order.

    Raises:
        DatasetError: If the file can't be read or doesn't look right.
    """
    frame = load_frame(path, encoding=encoding)
    messages = frame_to_messages(frame, label_column=label_column, text_columns=text_columns)

    spam = sum(1 for m in messages if m.label is Label.SPAM)
    logger.info(f"Loaded {len(messages)} messages ({len(messages) - spam} ham, {spam} spam) from {path}")
    return messages


def split_messages(
    messages: Sequence[Message],
    *,
    test_size: float = 0.2,
    random_state: int = 42,
) -> tuple[list[Message], list[Message]]:
    """
    Stratified train/test split.

    Args:
        messages: Labeled messages.
        test_size: Fraction held out for testing.
        random_state: Seed for a reproducible split.

    Returns:
        (train, test)

    Raises:
        DatasetError: If the data can't be stratified (e.g. a class with
                      fewer than two messages).
    """
    labels = [message.label.value for message in messages]

    try:
        train, test = train_test_split(
            list(messages),
            test_size=test_size,
            random_state=random_state,
            stratify=labels,
        )
    except ValueError as e:
        raise DatasetError(f"Could not split dataset: {e}") from e

    logger.info(f"Split {len(messages)} messages into {len(train)} train / {len(test)} test")
    return train, test
