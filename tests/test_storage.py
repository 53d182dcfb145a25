# =============================================================================
# Storage Tests
# =============================================================================

import pytest
import pytest_asyncio

from sms_bayes.core import Label, Message
from sms_bayes.storage import Database, Repository


@pytest_asyncio.fixture
async def database(temp_dir):
    """A connected database in a temp dir."""
    db = Database(temp_dir / "test.db")
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
def repo(database):
    return Repository(database)


@pytest.mark.asyncio
async def test_conn_requires_connect(temp_dir):
    db = Database(temp_dir / "test.db")

    with pytest.raises(RuntimeError):
        db.conn


@pytest.mark.asyncio
async def test_default_path(xdg_home):
    async with Database() as db:
        assert db.db_path.exists()
        assert db.db_path.parent == xdg_home / "data" / "sms-bayes"


@pytest.mark.asyncio
async def test_reconnect_keeps_schema(temp_dir, tiny_model):
    async with Database(temp_dir / "test.db") as db:
        run_id = await Repository(db).save_run(tiny_model)

    async with Database(temp_dir / "test.db") as db:
        assert await Repository(db).load_run(run_id) == tiny_model


class TestRuns:
    """Tests for storing trained models."""

    @pytest.mark.asyncio
    async def test_empty_database(self, repo):
        assert await repo.latest_run_id() is None
        assert await repo.load_run(1) is None

    @pytest.mark.asyncio
    async def test_round_trip(self, repo, sample_model):
        run_id = await repo.save_run(sample_model)
        loaded = await repo.load_run(run_id)

        assert loaded == sample_model
        assert loaded.vocabulary.tokens == sample_model.vocabulary.tokens
        assert loaded.classify("free prize") == sample_model.classify("free prize")

    @pytest.mark.asyncio
    async def test_latest_run(self, repo, tiny_model, sample_model):
        await repo.save_run(tiny_model)
        second = await repo.save_run(sample_model)

        assert await repo.latest_run_id() == second

    @pytest.mark.asyncio
    async def test_delete_cascades(self, repo, tiny_model):
        run_id = await repo.save_run(tiny_model)
        await repo.save_predictions(run_id, [Message("win")], [tiny_model.classify("win")])

        await repo.delete_run(run_id)

        assert await repo.load_run(run_id) is None
        assert await repo.get_predictions(run_id) == []


class TestPredictions:
    """Tests for storing predictions."""

    @pytest.mark.asyncio
    async def test_round_trip(self, repo, tiny_model):
        run_id = await repo.save_run(tiny_model)
        messages = [
            Message("win cash now", Label.SPAM),
            Message("hi there", Label.HAM),
            Message("nothing known"),
        ]
        predictions = [tiny_model.classify(m.text) for m in messages]

        written = await repo.save_predictions(run_id, messages, predictions)
        stored = await repo.get_predictions(run_id)

        assert written == 3
        assert [s.message for s in stored] == messages
        assert [s.prediction for s in stored] == predictions
        assert stored[2].prediction.label is Label.UNKNOWN

    @pytest.mark.asyncio
    async def test_length_mismatch(self, repo, tiny_model):
        run_id = await repo.save_run(tiny_model)

        with pytest.raises(ValueError):
            await repo.save_predictions(run_id, [Message("x")], [])
