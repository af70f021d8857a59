"""Value-transfer primitive the ledger depends on.

The ledger never moves native value itself: deposits arrive with a call
(`credit`) and payouts go through `pay`, which reports success or failure
instead of raising. Implementations must route their own bookkeeping
through the attached Journal so a rolled-back operation also rolls back
the value movement.
"""
from typing import Protocol

from src.dl_common.journal import Journal


class ValueTransfer(Protocol):
    def attach(self, journal: Journal) -> None: ...

    def held(self) -> int:
        """Native value currently held by the ledger."""
        ...

    def credit(self, amount: int) -> None:
        """Record native value delivered to the ledger with the current call."""
        ...

    def pay(self, recipient: str, amount: int) -> bool:
        """Send native value to recipient. Returns False if the transfer failed."""
        ...
