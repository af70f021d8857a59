"""Records emitted by committed ledger operations — frozen dataclasses."""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import ClassVar

from src.dl_common.datetime_utils import utc_now
from src.dl_common.enums import EventType


@dataclass(frozen=True, kw_only=True)
class LedgerEvent:
    event_type: ClassVar[EventType]

    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def account(self) -> str:
        raise NotImplementedError

    def payload(self) -> dict[str, object]:
        data = asdict(self)
        data.pop("event_id")
        data.pop("created_at")
        return data


@dataclass(frozen=True, kw_only=True)
class Minted(LedgerEvent):
    event_type = EventType.MINTED
    minter: str
    deposited_value: int
    units: int

    @property
    def account(self) -> str:
        return self.minter


@dataclass(frozen=True, kw_only=True)
class Burned(LedgerEvent):
    event_type = EventType.BURNED
    burner: str
    units: int
    value: int

    @property
    def account(self) -> str:
        return self.burner


@dataclass(frozen=True, kw_only=True)
class Transferred(LedgerEvent):
    event_type = EventType.TRANSFERRED
    sender: str
    recipient: str
    units: int

    @property
    def account(self) -> str:
        return self.sender


@dataclass(frozen=True, kw_only=True)
class DividendsDistributed(LedgerEvent):
    event_type = EventType.DIVIDENDS_DISTRIBUTED
    caller: str
    value: int

    @property
    def account(self) -> str:
        return self.caller


@dataclass(frozen=True, kw_only=True)
class DividendWithdrawn(LedgerEvent):
    event_type = EventType.DIVIDEND_WITHDRAWN
    holder: str
    value: int

    @property
    def account(self) -> str:
        return self.holder


@dataclass(frozen=True, kw_only=True)
class Staked(LedgerEvent):
    event_type = EventType.STAKED
    staker: str
    units: int
    started_at: int  # unix seconds; rewards accrue from here

    @property
    def account(self) -> str:
        return self.staker


@dataclass(frozen=True, kw_only=True)
class Unstaked(LedgerEvent):
    event_type = EventType.UNSTAKED
    staker: str
    units: int
    unstaked_at: int

    @property
    def account(self) -> str:
        return self.staker


@dataclass(frozen=True, kw_only=True)
class RewardClaimed(LedgerEvent):
    event_type = EventType.REWARD_CLAIMED
    staker: str
    value: int

    @property
    def account(self) -> str:
        return self.staker


@dataclass(frozen=True, kw_only=True)
class RewardPoolFunded(LedgerEvent):
    event_type = EventType.REWARD_POOL_FUNDED
    caller: str
    value: int

    @property
    def account(self) -> str:
        return self.caller


EVENT_TYPES: dict[EventType, type[LedgerEvent]] = {
    cls.event_type: cls
    for cls in (
        Minted,
        Burned,
        Transferred,
        DividendsDistributed,
        DividendWithdrawn,
        Staked,
        Unstaked,
        RewardClaimed,
        RewardPoolFunded,
    )
}
