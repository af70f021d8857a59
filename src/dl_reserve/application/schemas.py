"""Pydantic schemas for the reserve API (mint / burn)."""

from pydantic import BaseModel, Field

from src.dl_common.amounts import amount_to_display


class MintRequest(BaseModel):
    value: int = Field(..., description="Value deposited with the call, in base units")


class BurnRequest(BaseModel):
    units: int = Field(..., description="Units to burn, in base units")


class MintResponse(BaseModel):
    deposited_value: int
    units_minted: int
    units_minted_display: str
    balance: int
    reserve_balance: int

    @classmethod
    def from_result(
        cls, deposited: int, units: int, balance: int, reserve: int
    ) -> "MintResponse":
        return cls(
            deposited_value=deposited,
            units_minted=units,
            units_minted_display=amount_to_display(units),
            balance=balance,
            reserve_balance=reserve,
        )


class BurnResponse(BaseModel):
    units_burned: int
    value_returned: int
    value_returned_display: str
    balance: int
    reserve_balance: int

    @classmethod
    def from_result(
        cls, units: int, value: int, balance: int, reserve: int
    ) -> "BurnResponse":
        return cls(
            units_burned=units,
            value_returned=value,
            value_returned_display=amount_to_display(value),
            balance=balance,
            reserve_balance=reserve,
        )
