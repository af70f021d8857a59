"""Unit tests for the ledger_events audit helpers (mock DB)."""
import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

from src.dl_engine.domain.events import Burned, Minted, Staked
from src.dl_engine.infrastructure.event_store import (
    event_from_row,
    list_events,
    load_events,
    payload_for_storage,
    write_event,
    write_events,
)


async def test_write_event_binds_row() -> None:
    db = AsyncMock()
    event = Minted(minter="alice", deposited_value=10**18, units=10**21)

    await write_event(event, db)

    db.execute.assert_awaited_once()
    params = db.execute.call_args.args[1]
    assert params["event_id"] == event.event_id
    assert params["event_type"] == "MINTED"
    assert params["account"] == "alice"
    assert params["created_at"] == event.created_at


async def test_payload_amounts_stored_as_strings() -> None:
    db = AsyncMock()
    await write_event(Burned(burner="bob", units=3 * 10**40, value=7), db)

    payload = json.loads(db.execute.call_args.args[1]["payload"])
    assert payload == {"burner": "bob", "units": str(3 * 10**40), "value": "7"}


async def test_write_events_writes_each_in_order() -> None:
    db = AsyncMock()
    events = [
        Minted(minter="alice", deposited_value=1, units=1000),
        Burned(burner="alice", units=1000, value=1),
    ]
    await write_events(events, db)

    assert db.execute.await_count == 2
    types = [call.args[1]["event_type"] for call in db.execute.call_args_list]
    assert types == ["MINTED", "BURNED"]


async def test_list_events_maps_rows() -> None:
    created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    row = MagicMock(
        event_id="abc",
        event_type="MINTED",
        account="alice",
        payload={"units": "1000"},
        created_at=created,
    )
    result = MagicMock()
    result.fetchall.return_value = [row]
    db = AsyncMock()
    db.execute.return_value = result

    items = await list_events("alice", 5, db)

    assert items == [
        {
            "event_id": "abc",
            "event_type": "MINTED",
            "account": "alice",
            "payload": {"units": "1000"},
            "created_at": created.isoformat(),
        }
    ]
    assert db.execute.call_args.args[1] == {"account": "alice", "limit": 5}


def _stored_row(event, *, payload_as_text: bool = False) -> MagicMock:
    """A ledger_events row as write_event would have stored `event`."""
    stored = payload_for_storage(event)
    return MagicMock(
        event_id=event.event_id,
        event_type=event.event_type.value,
        account=event.account,
        payload=json.dumps(stored) if payload_as_text else stored,
        created_at=event.created_at,
    )


def test_event_from_row_restores_event() -> None:
    event = Staked(staker="alice", units=3 * 10**40, started_at=1_700_000_000)
    assert event_from_row(_stored_row(event)) == event


def test_event_from_row_accepts_text_payload() -> None:
    event = Burned(burner="bob", units=10**21, value=10**18)
    assert event_from_row(_stored_row(event, payload_as_text=True)) == event


async def test_load_events_returns_events_in_row_order() -> None:
    events = [
        Minted(minter="alice", deposited_value=1, units=1000),
        Burned(burner="alice", units=1000, value=1),
    ]
    result = MagicMock()
    result.fetchall.return_value = [_stored_row(e) for e in events]
    db = AsyncMock()
    db.execute.return_value = result

    assert await load_events(db) == events
    sql = str(db.execute.call_args.args[0])
    assert "ORDER BY id ASC" in sql
