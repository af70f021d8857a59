"""DividendAccounting — O(1) proportional payouts to every holder.

A distribution never loops over holders. It raises one global rate,
magnified_dividend_per_share, and each account's entitlement is derived on
demand:

    accumulated(a) = (rate * eligible(a) + correction(a)) // MAGNITUDE
    eligible(a)    = balance(a) + staked(a)

When units move, the rate at that instant is folded into the corrections
of both parties (see on_balance_change), so a balance change never alters
what either side had already accumulated. Sender gains +rate * units,
recipient gets -rate * units; the recipient therefore earns nothing from
distributions made before it held the units.

Units held by LEDGER_ADDRESS are staked units. They stay eligible under
their staker, so the ledger address itself is never eligible and moves
to or from it leave every correction untouched. The eligible units of all
accounts still sum to total supply.
"""
import logging

from src.dl_common.amounts import validate_positive
from src.dl_common.errors import (
    NoSupplyError,
    NothingToWithdrawError,
    PaymentFailedError,
    UnauthorizedError,
)
from src.dl_common.journal import Journal
from src.dl_dividend.domain.constants import MAGNITUDE
from src.dl_gateway.auth.access_gate import AccessGate
from src.dl_ledger.domain.base_ledger import BaseLedger
from src.dl_ledger.domain.constants import LEDGER_ADDRESS
from src.dl_ledger.domain.state import LedgerState
from src.dl_treasury.domain.value_transfer import ValueTransfer

logger = logging.getLogger(__name__)


class DividendAccounting:
    def __init__(
        self,
        state: LedgerState,
        journal: Journal,
        ledger: BaseLedger,
        vault: ValueTransfer,
        gate: AccessGate,
    ) -> None:
        self._state = state
        self._journal = journal
        self._ledger = ledger
        self._vault = vault
        self._gate = gate

    # ------------------------------------------------------------------
    # Hook
    # ------------------------------------------------------------------

    def on_balance_change(self, sender: str | None, recipient: str | None, units: int) -> None:
        """Keep accumulated() unchanged for both parties across a balance move."""
        if sender == LEDGER_ADDRESS or recipient == LEDGER_ADDRESS:
            # Stake or unstake: eligibility stays with the staker
            return
        magnified = self._state.magnified_dividend_per_share * units
        if magnified == 0:
            return
        corrections = self._state.dividend_corrections
        if sender is not None:
            self._journal.set_item(corrections, sender, corrections.get(sender, 0) + magnified)
        if recipient is not None:
            self._journal.set_item(
                corrections, recipient, corrections.get(recipient, 0) - magnified
            )
        logger.debug("Dividend correction: %s -> %s, units=%d", sender, recipient, units)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def distribute(self, caller: str, value: int) -> None:
        if not self._gate.is_authorized(caller):
            raise UnauthorizedError(caller)
        validate_positive(value)
        supply = self._ledger.total_supply()
        if supply == 0:
            raise NoSupplyError()

        state = self._state
        self._journal.set_attr(
            state,
            "magnified_dividend_per_share",
            state.magnified_dividend_per_share + value * MAGNITUDE // supply,
        )
        self._journal.set_attr(
            state, "total_dividends_distributed", state.total_dividends_distributed + value
        )
        self._journal.set_attr(state, "distribution_count", state.distribution_count + 1)
        self._vault.credit(value)

    def withdraw(self, account: str) -> int:
        withdrawable = self.withdrawable_dividend_of(account)
        if withdrawable <= 0:
            raise NothingToWithdrawError()

        # Record the withdrawal before paying out
        withdrawn = self._state.withdrawn_dividends
        self._journal.set_item(withdrawn, account, withdrawn.get(account, 0) + withdrawable)
        if not self._vault.pay(account, withdrawable):
            raise PaymentFailedError(account, withdrawable)
        return withdrawable

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def accumulative_dividend_of(self, account: str) -> int:
        raw = (
            self._state.magnified_dividend_per_share * self.eligible_units_of(account)
            + self._state.dividend_corrections.get(account, 0)
        )
        # Negative raw counts as nothing accumulated
        if raw < 0:
            return 0
        return raw // MAGNITUDE

    def eligible_units_of(self, account: str) -> int:
        if account == LEDGER_ADDRESS:
            return 0
        return self._ledger.balance_of(account) + self._state.staked_balances.get(account, 0)

    def withdrawn_dividend_of(self, account: str) -> int:
        return self._state.withdrawn_dividends.get(account, 0)

    def withdrawable_dividend_of(self, account: str) -> int:
        return self.accumulative_dividend_of(account) - self.withdrawn_dividend_of(account)
