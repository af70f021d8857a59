"""ReserveAccount — mints units against deposited value, redeems them pro rata.

mint:  units = value * conversion_rate; reserve += value
burn:  value = units * reserve // total_supply; reserve -= value

Burn commits every internal effect (reserve, dividend correction via the
ledger hook, supply) before the payout is attempted. A failed payout
raises PaymentFailedError and the caller's journal transaction undoes the
whole burn.
"""
import logging

from src.dl_common.amounts import validate_positive
from src.dl_common.errors import (
    AmountTooSmallError,
    InsufficientBalanceError,
    InsufficientReserveError,
    PaymentFailedError,
)
from src.dl_common.journal import Journal
from src.dl_ledger.domain.base_ledger import BaseLedger
from src.dl_ledger.domain.state import LedgerState
from src.dl_reserve.domain.constants import DEFAULT_CONVERSION_RATE
from src.dl_treasury.domain.value_transfer import ValueTransfer

logger = logging.getLogger(__name__)


class ReserveAccount:
    def __init__(
        self,
        state: LedgerState,
        journal: Journal,
        ledger: BaseLedger,
        vault: ValueTransfer,
        conversion_rate: int = DEFAULT_CONVERSION_RATE,
    ) -> None:
        if conversion_rate <= 0:
            raise ValueError(f"conversion_rate must be positive, got {conversion_rate}")
        self._state = state
        self._journal = journal
        self._ledger = ledger
        self._vault = vault
        self.conversion_rate = conversion_rate

    def mint(self, caller: str, deposited_value: int) -> int:
        """Credit caller with deposited_value * rate units. Returns units minted."""
        validate_positive(deposited_value, "Must send value to mint")
        units = deposited_value * self.conversion_rate

        self._vault.credit(deposited_value)
        self._journal.set_attr(
            self._state, "reserve_balance", self._state.reserve_balance + deposited_value
        )
        self._journal.set_attr(
            self._state, "total_minted_value", self._state.total_minted_value + deposited_value
        )
        self._ledger.mint(caller, units)
        return units

    def quote_burn(self, units: int) -> int:
        """Value a burn of `units` would pay out at the current reserve ratio."""
        supply = self._ledger.total_supply()
        if supply == 0:
            return 0
        return units * self._state.reserve_balance // supply

    def burn(self, caller: str, units: int) -> int:
        """Destroy caller's units and pay their share of the reserve. Returns value paid."""
        validate_positive(units)
        balance = self._ledger.balance_of(caller)
        if units > balance:
            raise InsufficientBalanceError(units, balance)

        value = self.quote_burn(units)
        if value == 0:
            raise AmountTooSmallError(units)
        held = self._vault.held()
        if held < value:
            raise InsufficientReserveError(value, held)

        self._journal.set_attr(self._state, "reserve_balance", self._state.reserve_balance - value)
        self._journal.set_attr(
            self._state, "total_redeemed_value", self._state.total_redeemed_value + value
        )
        self._ledger.burn(caller, units)
        if not self._vault.pay(caller, value):
            raise PaymentFailedError(caller, value)
        return value
