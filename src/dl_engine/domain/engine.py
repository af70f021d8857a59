"""LedgerEngine — the context object composing every ledger component.

Owns one LedgerState, one Journal and one ReentrancyGuard, and wires the
BaseLedger balance hook to DividendAccounting. Every public mutating
operation:

  1. refuses LEDGER_ADDRESS as the caller,
  2. enters the reentrancy guard (nested calls fail fast),
  3. opens a journal savepoint (any exception undoes all of its writes,
     including value credits and emitted events),
  4. runs the component logic, then appends its events.

Queries read state directly and never take the guard.

`events` keeps the most recent committed events only (event_log_limit);
the audit table is the full history. replay() rebuilds a fresh engine
from that history.
"""
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TypeVar

from src.dl_common.amounts import validate_positive
from src.dl_common.datetime_utils import unix_now
from src.dl_common.errors import (
    InsufficientPoolError,
    InternalError,
    InvalidRecipientError,
    ReservedAddressError,
)
from src.dl_common.guard import ReentrancyGuard
from src.dl_common.journal import Journal
from src.dl_dividend.domain.accounting import DividendAccounting
from src.dl_dividend.domain.invariants import verify_conservation
from src.dl_engine.domain.events import (
    Burned,
    DividendsDistributed,
    DividendWithdrawn,
    LedgerEvent,
    Minted,
    RewardClaimed,
    RewardPoolFunded,
    Staked,
    Transferred,
    Unstaked,
)
from src.dl_gateway.auth.access_gate import AccessGate, OwnerGate
from src.dl_ledger.domain.base_ledger import BaseLedger
from src.dl_ledger.domain.constants import LEDGER_ADDRESS
from src.dl_ledger.domain.models import AccountInfo, LedgerStats
from src.dl_ledger.domain.state import LedgerState
from src.dl_reserve.domain.constants import DEFAULT_CONVERSION_RATE
from src.dl_reserve.domain.invariants import verify_reserve
from src.dl_reserve.domain.reserve import ReserveAccount
from src.dl_staking.domain.constants import DEFAULT_STAKING_RATE_BPS
from src.dl_staking.domain.staking import Clock, StakingLedger
from src.dl_treasury.domain.value_transfer import ValueTransfer
from src.dl_treasury.infrastructure.memory_vault import InMemoryVault

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_EVENT_LOG_LIMIT = 10_000


@dataclass(frozen=True)
class UnstakeResult:
    units: int
    rewards: int


class LedgerEngine:
    def __init__(
        self,
        owner: str,
        *,
        gate: AccessGate | None = None,
        vault: ValueTransfer | None = None,
        clock: Clock = unix_now,
        conversion_rate: int = DEFAULT_CONVERSION_RATE,
        staking_rate_bps: int = DEFAULT_STAKING_RATE_BPS,
        name: str = "DividendToken",
        symbol: str = "DTK",
        event_log_limit: int = DEFAULT_EVENT_LOG_LIMIT,
    ) -> None:
        self.name = name
        self.symbol = symbol
        self.owner = owner
        self.state = LedgerState()
        self.journal = Journal()
        self.events: list[LedgerEvent] = []
        self.event_log_limit = event_log_limit
        self._guard = ReentrancyGuard()

        self.gate: AccessGate = gate or OwnerGate(owner)
        self.vault: ValueTransfer = vault or InMemoryVault()
        self.vault.attach(self.journal)

        self.ledger = BaseLedger(self.state, self.journal)
        self.dividends = DividendAccounting(
            self.state, self.journal, self.ledger, self.vault, self.gate
        )
        self.reserve = ReserveAccount(
            self.state, self.journal, self.ledger, self.vault, conversion_rate
        )
        self.staking = StakingLedger(
            self.state, self.journal, self.ledger, self.vault, self.gate, clock, staking_rate_bps
        )
        self.ledger.register_hook(self.dividends.on_balance_change)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def unit_of_work(self) -> Iterator[None]:
        """Outer savepoint for callers that must commit more than the ledger.

        The application layer wraps an operation and its audit write in one
        unit of work so a failed write also undoes the ledger change.
        """
        with self.journal.transaction():
            yield
        self._trim_events()

    def _run(self, operation: str, caller: str, body: Callable[[], T]) -> T:
        if caller == LEDGER_ADDRESS:
            raise ReservedAddressError(caller)
        with self._guard.enter(operation), self.journal.transaction():
            result = body()
        self._trim_events()
        return result

    def _emit(self, event: LedgerEvent) -> None:
        self.journal.append(self.events, event)

    def _trim_events(self) -> None:
        # Only outside a transaction: the journal undoes appends by popping
        if not self.journal.active and len(self.events) > self.event_log_limit:
            del self.events[: len(self.events) - self.event_log_limit]

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def mint(self, caller: str, value: int) -> int:
        def body() -> int:
            units = self.reserve.mint(caller, value)
            self._emit(Minted(minter=caller, deposited_value=value, units=units))
            logger.info("Mint: %s deposited %d, minted %d units", caller, value, units)
            return units

        return self._run("mint", caller, body)

    def burn(self, caller: str, units: int) -> int:
        def body() -> int:
            value = self.reserve.burn(caller, units)
            self._emit(Burned(burner=caller, units=units, value=value))
            logger.info("Burn: %s burned %d units for %d", caller, units, value)
            return value

        return self._run("burn", caller, body)

    def transfer(self, caller: str, recipient: str, units: int) -> None:
        def body() -> None:
            validate_positive(units)
            if recipient == LEDGER_ADDRESS or not recipient:
                raise InvalidRecipientError(recipient)
            self.ledger.transfer(caller, recipient, units)
            self._emit(Transferred(sender=caller, recipient=recipient, units=units))
            logger.info("Transfer: %s -> %s, %d units", caller, recipient, units)

        self._run("transfer", caller, body)

    def distribute(self, caller: str, value: int) -> None:
        def body() -> None:
            self.dividends.distribute(caller, value)
            self._emit(DividendsDistributed(caller=caller, value=value))
            logger.info(
                "Distribute: %s distributed %d over supply %d",
                caller, value, self.ledger.total_supply(),
            )

        self._run("distribute", caller, body)

    def withdraw_dividends(self, caller: str) -> int:
        def body() -> int:
            value = self.dividends.withdraw(caller)
            self._emit(DividendWithdrawn(holder=caller, value=value))
            logger.info("Withdraw: %s withdrew %d", caller, value)
            return value

        return self._run("withdraw_dividends", caller, body)

    def stake(self, caller: str, units: int) -> None:
        def body() -> None:
            now = self.staking.now()
            self.staking.stake(caller, units, now)
            self._emit(Staked(staker=caller, units=units, started_at=now))
            logger.info("Stake: %s staked %d units", caller, units)

        self._run("stake", caller, body)

    def unstake(self, caller: str) -> UnstakeResult:
        def body() -> UnstakeResult:
            now = self.staking.now()
            units, due = self.staking.unstake(caller, now)
            self._emit(Unstaked(staker=caller, units=units, unstaked_at=now))
            rewards = self.staking.pay_rewards(caller, due) if due > 0 else 0
            if rewards > 0:
                self._emit(RewardClaimed(staker=caller, value=rewards))
            logger.info("Unstake: %s unstaked %d units, rewards %d", caller, units, rewards)
            return UnstakeResult(units=units, rewards=rewards)

        return self._run("unstake", caller, body)

    def fund_reward_pool(self, caller: str, value: int) -> None:
        def body() -> None:
            self.staking.fund_reward_pool(caller, value)
            self._emit(RewardPoolFunded(caller=caller, value=value))
            logger.info("Fund pool: %s added %d", caller, value)

        self._run("fund_reward_pool", caller, body)

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    def replay(self, events: Iterable[LedgerEvent]) -> int:
        """Re-apply committed events, oldest first, to rebuild state.

        Each event runs in its own savepoint and must reproduce its recorded
        outcome; a divergence raises InternalError and leaves the state as
        of the last good event. Recorded events are kept as they are, no new
        ones are emitted. Value movements only update the vault's own
        bookkeeping. Returns the number of events applied.
        """
        count = 0
        for event in events:
            with self._guard.enter("replay"), self.journal.transaction():
                self._apply(event)
            self.events.append(event)
            self._trim_events()
            count += 1
        logger.info("Replayed %d events", count)
        return count

    def _apply(self, event: LedgerEvent) -> None:
        if isinstance(event, Minted):
            units = self.reserve.mint(event.minter, event.deposited_value)
            self._expect(event, "units", event.units, units)
        elif isinstance(event, Burned):
            value = self.reserve.burn(event.burner, event.units)
            self._expect(event, "value", event.value, value)
        elif isinstance(event, Transferred):
            self.ledger.transfer(event.sender, event.recipient, event.units)
        elif isinstance(event, DividendsDistributed):
            self.dividends.distribute(event.caller, event.value)
        elif isinstance(event, DividendWithdrawn):
            value = self.dividends.withdraw(event.holder)
            self._expect(event, "value", event.value, value)
        elif isinstance(event, Staked):
            self.staking.stake(event.staker, event.units, event.started_at)
        elif isinstance(event, Unstaked):
            units, _ = self.staking.unstake(event.staker, event.unstaked_at)
            self._expect(event, "units", event.units, units)
        elif isinstance(event, RewardClaimed):
            pool = self.state.staking_reward_pool
            if event.value > pool:
                raise InsufficientPoolError(event.value, pool)
            paid = self.staking.pay_rewards(event.staker, event.value)
            self._expect(event, "value", event.value, paid)
        elif isinstance(event, RewardPoolFunded):
            self.staking.fund_reward_pool(event.caller, event.value)
        else:
            raise InternalError(f"Cannot replay event type {event.event_type.value}")

    @staticmethod
    def _expect(event: LedgerEvent, field: str, recorded: int, actual: int) -> None:
        if recorded != actual:
            raise InternalError(
                f"Replay diverged at {event.event_type.value} {event.event_id}: "
                f"{field} recorded {recorded}, replayed {actual}"
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def accumulative_dividend_of(self, account: str) -> int:
        return self.dividends.accumulative_dividend_of(account)

    def withdrawable_dividend_of(self, account: str) -> int:
        return self.dividends.withdrawable_dividend_of(account)

    def withdrawn_dividend_of(self, account: str) -> int:
        return self.dividends.withdrawn_dividend_of(account)

    def compute_rewards(self, account: str) -> int:
        return self.staking.compute_rewards(account)

    def account_info(self, account: str) -> AccountInfo:
        return AccountInfo(
            address=account,
            balance=self.ledger.balance_of(account),
            staked_balance=self.staking.staked_balance_of(account),
            stake_start_time=self.staking.stake_start_time_of(account),
            withdrawable_dividends=self.dividends.withdrawable_dividend_of(account),
            accumulated_dividends=self.dividends.accumulative_dividend_of(account),
            withdrawn_dividends=self.dividends.withdrawn_dividend_of(account),
            pending_rewards=self.staking.compute_rewards(account),
        )

    def stats(self) -> LedgerStats:
        return LedgerStats(
            name=self.name,
            symbol=self.symbol,
            total_supply=self.state.total_supply,
            total_staked=self.state.total_staked,
            reserve_balance=self.state.reserve_balance,
            staking_reward_pool=self.state.staking_reward_pool,
            total_dividends_distributed=self.state.total_dividends_distributed,
            held_value=self.vault.held(),
        )

    # ------------------------------------------------------------------
    # Audit
    # ------------------------------------------------------------------

    def verify_invariants(self, accounts: Iterable[str]) -> list[str]:
        """Run reserve and dividend conservation checks over `accounts`.

        Walks the given accounts, so it is an audit tool, not part of any
        operation.
        """
        violations = verify_reserve(self.state)
        violations += verify_conservation(self.dividends, self.state, accounts)
        return violations
