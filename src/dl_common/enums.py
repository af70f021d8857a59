"""Global enums — must match the ledger_events CHECK constraint exactly."""

from enum import Enum


class EventType(str, Enum):
    MINTED = "MINTED"
    BURNED = "BURNED"
    TRANSFERRED = "TRANSFERRED"
    DIVIDENDS_DISTRIBUTED = "DIVIDENDS_DISTRIBUTED"
    DIVIDEND_WITHDRAWN = "DIVIDEND_WITHDRAWN"
    STAKED = "STAKED"
    UNSTAKED = "UNSTAKED"
    REWARD_CLAIMED = "REWARD_CLAIMED"
    REWARD_POOL_FUNDED = "REWARD_POOL_FUNDED"


class StakeStatus(str, Enum):
    UNSTAKED = "UNSTAKED"
    STAKED = "STAKED"
