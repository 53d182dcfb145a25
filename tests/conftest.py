# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the SMS-Bayes test suite.
# =============================================================================

import csv
import pytest
import tempfile
from pathlib import Path

from sms_bayes.core import Label, Message
from sms_bayes.spam import SpamModel


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def xdg_home(temp_dir, monkeypatch):
    """Point the XDG config and data directories into a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(temp_dir / "data"))
    return temp_dir


@pytest.fixture
def tiny_pairs():
    """The smallest useful training set: one ham, one spam."""
    return [("ham", "hi there"), ("spam", "win cash now")]


@pytest.fixture
def tiny_model(tiny_pairs):
    """Model trained on tiny_pairs (V=5, ham_total=2, spam_total=3)."""
    return SpamModel.train(tiny_pairs)


@pytest.fixture
def sample_corpus():
    """A small, realistic labeled corpus."""
    ham = [
        "Hey, are we still on for lunch tomorrow?",
        "Ok lar... Joking wif u oni...",
        "I'll call you when I get home tonight",
        "Can you pick up some milk on the way back",
        "Sorry, I'll call later. In a meeting",
        "Happy birthday! Hope you have a great day",
    ]
    spam = [
        "WINNER!! You have won a £1000 cash prize. Call 09061701461 now!",
        "FREE entry in 2 a wkly comp to win FA Cup final tkts. Text FA to 87121",
        "URGENT! Your mobile number has won a prize. Claim at www.claimnow.com",
        "Congratulations, you won a free holiday! Visit http://bit.ly/win now",
    ]
    return (
        [Message(text, Label.HAM) for text in ham]
        + [Message(text, Label.SPAM) for text in spam]
    )


@pytest.fixture
def sample_model(sample_corpus):
    """Model trained on sample_corpus."""
    return SpamModel.train(sample_corpus)


@pytest.fixture
def dataset_csv(temp_dir):
    """
    A dataset CSV in the SMS Spam Collection layout.

    10 ham and 10 spam rows. Every spam row mentions "win cash prize" and
    every ham row "see you at lunch", so any stratified split trains on both.
    """
    path = temp_dir / "spam.csv"
    rows = []
    for i in range(10):
        rows.append(["ham", f"ok see you at lunch {i} today", "", "", ""])
        rows.append(["spam", f"WIN cash prize {i} now!!!", "call 0800123456", "", ""])

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["v1", "v2", "Unnamed: 2", "Unnamed: 3", "Unnamed: 4"])
        writer.writerows(rows)
    return path
