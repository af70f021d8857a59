"""Pydantic schemas for the staking API."""

from pydantic import BaseModel, Field

from src.dl_common.amounts import amount_to_display


class StakeRequest(BaseModel):
    units: int = Field(..., description="Units to lock, in base units")


class FundPoolRequest(BaseModel):
    value: int = Field(..., description="Value added to the staking reward pool")


class StakeResponse(BaseModel):
    staked_balance: int
    stake_start_time: int
    balance: int
    total_staked: int


class UnstakeResponse(BaseModel):
    units_returned: int
    rewards_paid: int
    rewards_paid_display: str
    balance: int
    staking_reward_pool: int


class FundPoolResponse(BaseModel):
    funded: int
    staking_reward_pool: int
    staking_reward_pool_display: str

    @classmethod
    def from_pool(cls, funded: int, pool: int) -> "FundPoolResponse":
        return cls(
            funded=funded,
            staking_reward_pool=pool,
            staking_reward_pool_display=amount_to_display(pool),
        )
