"""InMemoryVault — process-local ValueTransfer implementation.

Tracks the native value held by the ledger and the total paid out to each
recipient. A recipient may register a receive callback; it runs after the
vault has debited itself, mirroring a payment that hands control to
untrusted code. A callback that returns False or raises makes the payment
report failure, and the vault's own debit is undone.
"""
import logging
from collections.abc import Callable

from src.dl_common.journal import Journal

logger = logging.getLogger(__name__)

ReceiveCallback = Callable[[int], bool | None]


class InMemoryVault:
    def __init__(self, initial_held: int = 0) -> None:
        self._journal = Journal()
        self._held = initial_held
        self.paid: dict[str, int] = {}
        self._receivers: dict[str, ReceiveCallback] = {}

    def attach(self, journal: Journal) -> None:
        self._journal = journal

    def on_receive(self, recipient: str, callback: ReceiveCallback) -> None:
        """Install a callback run whenever `recipient` is paid."""
        self._receivers[recipient] = callback

    def held(self) -> int:
        return self._held

    def paid_to(self, recipient: str) -> int:
        return self.paid.get(recipient, 0)

    def credit(self, amount: int) -> None:
        self._journal.set_attr(self, "_held", self._held + amount)

    def pay(self, recipient: str, amount: int) -> bool:
        if amount > self._held:
            logger.warning("Vault cannot pay %d to %s: holds %d", amount, recipient, self._held)
            return False
        try:
            with self._journal.transaction():
                self._journal.set_attr(self, "_held", self._held - amount)
                self._journal.set_item(self.paid, recipient, self.paid_to(recipient) + amount)
                callback = self._receivers.get(recipient)
                if callback is not None and callback(amount) is False:
                    raise _Refused()
        except Exception as exc:
            # The recipient's failure is reported to the caller as a failed payment
            logger.warning("Payment of %d to %s failed: %r", amount, recipient, exc)
            return False
        return True


class _Refused(Exception):
    def __str__(self) -> str:
        return "recipient refused payment"
