"""Pydantic schemas for the dividend API."""

from pydantic import BaseModel, Field

from src.dl_common.amounts import amount_to_display


class DistributeRequest(BaseModel):
    value: int = Field(..., description="Value distributed to all holders, in base units")


class DistributeResponse(BaseModel):
    distributed: int
    distributed_display: str
    total_dividends_distributed: int
    total_supply: int


class WithdrawResponse(BaseModel):
    withdrawn: int
    withdrawn_display: str
    lifetime_withdrawn: int

    @classmethod
    def from_result(cls, amount: int, lifetime: int) -> "WithdrawResponse":
        return cls(
            withdrawn=amount,
            withdrawn_display=amount_to_display(amount),
            lifetime_withdrawn=lifetime,
        )
