"""Pydantic schemas for ledger transfers and queries."""

from pydantic import BaseModel, Field

from src.dl_common.amounts import amount_to_display
from src.dl_ledger.domain.models import AccountInfo, LedgerStats


class TransferRequest(BaseModel):
    to: str = Field(..., min_length=1, max_length=128, description="Recipient address")
    units: int = Field(..., description="Units to transfer, in base units")


class TransferResponse(BaseModel):
    sender_balance: int
    recipient_balance: int


class AccountInfoResponse(BaseModel):
    address: str
    balance: int
    balance_display: str
    staked_balance: int
    stake_status: str
    stake_start_time: int
    withdrawable_dividends: int
    accumulated_dividends: int
    withdrawn_dividends: int
    pending_rewards: int

    @classmethod
    def from_info(cls, info: AccountInfo, stake_status: str) -> "AccountInfoResponse":
        return cls(
            address=info.address,
            balance=info.balance,
            balance_display=amount_to_display(info.balance),
            staked_balance=info.staked_balance,
            stake_status=stake_status,
            stake_start_time=info.stake_start_time,
            withdrawable_dividends=info.withdrawable_dividends,
            accumulated_dividends=info.accumulated_dividends,
            withdrawn_dividends=info.withdrawn_dividends,
            pending_rewards=info.pending_rewards,
        )


class StatsResponse(BaseModel):
    name: str
    symbol: str
    total_supply: int
    total_supply_display: str
    total_staked: int
    reserve_balance: int
    staking_reward_pool: int
    total_dividends_distributed: int
    held_value: int

    @classmethod
    def from_stats(cls, stats: LedgerStats) -> "StatsResponse":
        return cls(
            name=stats.name,
            symbol=stats.symbol,
            total_supply=stats.total_supply,
            total_supply_display=amount_to_display(stats.total_supply),
            total_staked=stats.total_staked,
            reserve_balance=stats.reserve_balance,
            staking_reward_pool=stats.staking_reward_pool,
            total_dividends_distributed=stats.total_dividends_distributed,
            held_value=stats.held_value,
        )


class EventItem(BaseModel):
    event_id: str
    event_type: str
    account: str
    payload: dict[str, object]
    created_at: str  # ISO8601 string


class EventListResponse(BaseModel):
    items: list[EventItem]
