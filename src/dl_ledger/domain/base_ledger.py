"""BaseLedger — balances, total supply and the balance-change hook.

Every balance mutation (mint, burn, transfer) notifies the registered hooks
synchronously, inside the caller's journal transaction, before control
returns. `None` stands for "nobody": the mint source and the burn sink.
"""
import logging
from collections.abc import Callable

from src.dl_common.errors import InsufficientBalanceError
from src.dl_common.journal import Journal
from src.dl_ledger.domain.state import LedgerState

logger = logging.getLogger(__name__)

BalanceHook = Callable[[str | None, str | None, int], None]


class BaseLedger:
    def __init__(self, state: LedgerState, journal: Journal) -> None:
        self._state = state
        self._journal = journal
        self._hooks: list[BalanceHook] = []

    def register_hook(self, hook: BalanceHook) -> None:
        self._hooks.append(hook)

    def balance_of(self, account: str) -> int:
        return self._state.balances.get(account, 0)

    def total_supply(self) -> int:
        return self._state.total_supply

    def mint(self, account: str, units: int) -> None:
        self._journal.set_item(self._state.balances, account, self.balance_of(account) + units)
        self._journal.set_attr(self._state, "total_supply", self._state.total_supply + units)
        self._notify(None, account, units)

    def burn(self, account: str, units: int) -> None:
        balance = self.balance_of(account)
        if units > balance:
            raise InsufficientBalanceError(units, balance)
        self._journal.set_item(self._state.balances, account, balance - units)
        self._journal.set_attr(self._state, "total_supply", self._state.total_supply - units)
        self._notify(account, None, units)

    def transfer(self, sender: str, recipient: str, units: int) -> None:
        balance = self.balance_of(sender)
        if units > balance:
            raise InsufficientBalanceError(units, balance)
        self._journal.set_item(self._state.balances, sender, balance - units)
        self._journal.set_item(
            self._state.balances, recipient, self.balance_of(recipient) + units
        )
        self._notify(sender, recipient, units)

    def _notify(self, sender: str | None, recipient: str | None, units: int) -> None:
        for hook in self._hooks:
            hook(sender, recipient, units)
