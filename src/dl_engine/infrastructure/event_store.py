"""DB helpers for the append-only ledger_events audit table.

Called from the application services inside the engine's unit of work, so
a failed insert also undoes the in-memory ledger change.
"""
import dataclasses
import json
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.enums import EventType
from src.dl_engine.domain.events import EVENT_TYPES, LedgerEvent

_INSERT_EVENT_SQL = text("""
    INSERT INTO ledger_events (event_id, event_type, account, payload, created_at)
    VALUES (:event_id, :event_type, :account, CAST(:payload AS JSONB), :created_at)
""")

_LIST_EVENTS_SQL = text("""
    SELECT event_id, event_type, account, payload, created_at
    FROM ledger_events
    WHERE account = :account
    ORDER BY id DESC
    LIMIT :limit
""")

_LOAD_EVENTS_SQL = text("""
    SELECT event_id, event_type, account, payload, created_at
    FROM ledger_events
    ORDER BY id ASC
""")


def payload_for_storage(event: LedgerEvent) -> dict[str, object]:
    # Amounts are stored as strings; JSON readers parse numbers as doubles
    return {
        k: str(v) if isinstance(v, int) and not isinstance(v, bool) else v
        for k, v in event.payload().items()
    }


def event_to_item(event: LedgerEvent) -> dict[str, object]:
    """Shape an in-memory event like a row returned by list_events."""
    return {
        "event_id": event.event_id,
        "event_type": event.event_type.value,
        "account": event.account,
        "payload": payload_for_storage(event),
        "created_at": event.created_at.isoformat(),
    }


def _encode_payload(event: LedgerEvent) -> str:
    return json.dumps(payload_for_storage(event))


async def write_event(event: LedgerEvent, db: AsyncSession) -> None:
    """Insert one row into ledger_events within the caller's transaction."""
    await db.execute(
        _INSERT_EVENT_SQL,
        {
            "event_id": event.event_id,
            "event_type": event.event_type.value,
            "account": event.account,
            "payload": _encode_payload(event),
            "created_at": event.created_at,
        },
    )


async def write_events(events: Sequence[LedgerEvent], db: AsyncSession) -> None:
    for event in events:
        await write_event(event, db)


async def list_events(account: str, limit: int, db: AsyncSession) -> list[dict[str, object]]:
    rows = (await db.execute(_LIST_EVENTS_SQL, {"account": account, "limit": limit})).fetchall()
    return [
        {
            "event_id": row.event_id,
            "event_type": row.event_type,
            "account": row.account,
            "payload": row.payload,
            "created_at": row.created_at.isoformat() if row.created_at else "",
        }
        for row in rows
    ]


def event_from_row(row: Any) -> LedgerEvent:
    """Rebuild the LedgerEvent a ledger_events row was written from."""
    cls = EVENT_TYPES[EventType(row.event_type)]
    payload = row.payload if isinstance(row.payload, dict) else json.loads(row.payload)
    kwargs: dict[str, object] = {}
    for f in dataclasses.fields(cls):
        if f.name not in payload:
            continue
        value = payload[f.name]
        kwargs[f.name] = int(value) if f.type is int else value
    return cls(event_id=row.event_id, created_at=row.created_at, **kwargs)


async def load_events(db: AsyncSession) -> list[LedgerEvent]:
    """Every committed event, oldest first, for LedgerEngine.replay."""
    rows = (await db.execute(_LOAD_EVENTS_SQL)).fetchall()
    return [event_from_row(row) for row in rows]
