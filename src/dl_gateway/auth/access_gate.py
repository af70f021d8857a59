"""AccessGate — decides who may run privileged ledger operations.

Privileged operations: distributing dividends and funding the staking
reward pool. The ledger only needs the boolean predicate.
"""
from typing import Protocol


class AccessGate(Protocol):
    def is_authorized(self, caller: str) -> bool: ...


class OwnerGate:
    """Single-owner policy: only the configured owner address is authorized."""

    def __init__(self, owner: str) -> None:
        self.owner = owner

    def is_authorized(self, caller: str) -> bool:
        return caller == self.owner
