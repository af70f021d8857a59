"""Read models returned by ledger queries — pure dataclasses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountInfo:
    address: str
    balance: int                 # units
    staked_balance: int          # units, held by the ledger
    stake_start_time: int        # unix seconds, 0 when nothing staked
    withdrawable_dividends: int  # value
    accumulated_dividends: int   # value, lifetime
    withdrawn_dividends: int     # value
    pending_rewards: int         # value, already capped by the pool


@dataclass(frozen=True)
class LedgerStats:
    name: str
    symbol: str
    total_supply: int
    total_staked: int
    reserve_balance: int
    staking_reward_pool: int
    total_dividends_distributed: int
    held_value: int
