"""LedgerState — the explicit engine context every component operates on.

Pure dataclass, no I/O. All writes go through a Journal so a failed
operation can be undone; components never keep state of their own.
"""
from dataclasses import dataclass, field


@dataclass
class LedgerState:
    # BaseLedger
    balances: dict[str, int] = field(default_factory=dict)
    total_supply: int = 0

    # ReserveAccount (running totals back the reserve invariant)
    reserve_balance: int = 0
    total_minted_value: int = 0
    total_redeemed_value: int = 0

    # DividendAccounting (per-share rate and corrections are magnified)
    magnified_dividend_per_share: int = 0
    total_dividends_distributed: int = 0
    distribution_count: int = 0
    withdrawn_dividends: dict[str, int] = field(default_factory=dict)
    dividend_corrections: dict[str, int] = field(default_factory=dict)

    # StakingLedger
    staked_balances: dict[str, int] = field(default_factory=dict)
    stake_start_times: dict[str, int] = field(default_factory=dict)
    total_staked: int = 0
    staking_reward_pool: int = 0
