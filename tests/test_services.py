import asyncio
import json

import pytest

from app.core.exceptions import NotFound, StorageFailure
from app.db.store import JsonDocumentStore
from app.domains.counter.services import CounterService, HistoryService


@pytest.fixture
def counter_service(store):
    return CounterService(store)


@pytest.fixture
def history_service(store):
    return HistoryService(store)


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, 1, 7, -12, 10**30])
async def test_increment_then_decrement_returns_to_zero(counter_service, amount):
    await counter_service.increment(amount)
    assert await counter_service.decrement(amount) == 0


@pytest.mark.asyncio
async def test_reset_counter_is_idempotent(counter_service):
    await counter_service.increment(9)

    assert await counter_service.reset_counter() == 0
    assert await counter_service.reset_counter() == 0
    assert await counter_service.get_counter() == 0


@pytest.mark.asyncio
async def test_every_operation_reads_latest_file(counter_service, db_path):
    await counter_service.increment(2)
    db_path.write_text(json.dumps({"counter": 40, "history": [], "deletedHistory": []}))

    assert await counter_service.increment(2) == 42


@pytest.mark.asyncio
async def test_snapshot_captures_value_at_call_time(counter_service, history_service):
    await counter_service.increment(5)
    entry = await history_service.save_snapshot()
    await counter_service.increment(3)

    history = await history_service.list_history()
    assert entry.value == 5
    assert [e.value for e in history] == [5]


@pytest.mark.asyncio
async def test_soft_delete_round_trip(history_service):
    entry = await history_service.save_snapshot()

    await history_service.delete_entry(entry.id)
    assert await history_service.list_history() == []
    assert await history_service.list_deleted() == [entry]

    restored = await history_service.restore_last()
    assert restored == entry
    assert await history_service.list_history() == [entry]
    assert await history_service.list_deleted() == []


@pytest.mark.asyncio
async def test_restore_follows_stack_order(history_service):
    a = await history_service.save_snapshot()
    b = await history_service.save_snapshot()
    await history_service.delete_entry(a.id)
    await history_service.delete_entry(b.id)

    assert (await history_service.restore_last()).id == b.id
    assert (await history_service.restore_last()).id == a.id


@pytest.mark.asyncio
async def test_restore_empty_stack_raises_and_does_not_write(history_service, db_path):
    await history_service.list_history()
    before = db_path.read_text()

    with pytest.raises(NotFound):
        await history_service.restore_last()
    assert db_path.read_text() == before


@pytest.mark.asyncio
async def test_delete_unknown_id_is_noop(history_service):
    entry = await history_service.save_snapshot()

    await history_service.delete_entry("does-not-exist")

    assert await history_service.list_history() == [entry]
    assert await history_service.list_deleted() == []


@pytest.mark.asyncio
async def test_clear_history_preserves_order(counter_service, history_service):
    entries = []
    for _ in range(3):
        await counter_service.increment()
        entries.append(await history_service.save_snapshot())

    await history_service.clear_history()

    assert await history_service.list_history() == []
    assert [e.value for e in await history_service.list_deleted()] == [1, 2, 3]


@pytest.mark.asyncio
async def test_reset_all_is_irreversible(counter_service, history_service):
    await counter_service.increment(3)
    first = await history_service.save_snapshot()
    await history_service.save_snapshot()
    await history_service.delete_entry(first.id)

    await counter_service.reset_all()

    assert await counter_service.get_counter() == 0
    assert await history_service.list_history() == []
    assert await history_service.list_deleted() == []
    with pytest.raises(NotFound):
        await history_service.restore_last()


@pytest.mark.asyncio
async def test_scenario(counter_service, history_service, db_path):
    assert await counter_service.increment(4) == 4
    saved = await history_service.save_snapshot()
    assert saved.value == 4
    assert await counter_service.increment(3) == 7

    await history_service.delete_entry(saved.id)
    on_disk = json.loads(db_path.read_text())
    assert on_disk["history"] == []
    assert [(e["id"], e["value"]) for e in on_disk["deletedHistory"]] == [(saved.id, 4)]

    restored = await history_service.restore_last()
    assert (restored.id, restored.value) == (saved.id, 4)
    on_disk = json.loads(db_path.read_text())
    assert [(e["id"], e["value"]) for e in on_disk["history"]] == [(saved.id, 4)]
    assert on_disk["deletedHistory"] == []


@pytest.mark.asyncio
async def test_concurrent_increments_are_serialized(counter_service):
    await asyncio.gather(*(counter_service.increment() for _ in range(20)))

    assert await counter_service.get_counter() == 20


@pytest.mark.asyncio
async def test_invalid_document_shape_raises(counter_service, db_path):
    db_path.write_text(json.dumps({"counter": "many", "history": [], "deletedHistory": []}))

    with pytest.raises(StorageFailure):
        await counter_service.get_counter()


@pytest.mark.asyncio
@pytest.mark.parametrize("legacy", [False, True])
async def test_reads_alongside_mutations(tmp_path, legacy):
    for i in range(30):
        path = tmp_path / f"db{i}.json"
        if legacy:
            path.write_text(json.dumps({"counter": 0, "history": []}))
        store = JsonDocumentStore(path)
        counter_service = CounterService(store)
        history_service = HistoryService(store)

        read, written, deleted = await asyncio.gather(
            counter_service.get_counter(),
            counter_service.increment(5),
            history_service.list_deleted(),
        )

        assert read in (0, 5)
        assert written == 5
        assert deleted == []
        assert json.loads(path.read_text()) == {"counter": 5, "history": [], "deletedHistory": []}
    assert list(tmp_path.glob("*.tmp")) == []
