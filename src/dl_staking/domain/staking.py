"""StakingLedger — locks units with the ledger and pays time-based rewards.

Per-account lifecycle: UNSTAKED --stake--> STAKED --unstake--> UNSTAKED.
Unstaking is all-or-nothing. Staking again while STAKED adds to the
position and restarts the clock for the whole position.

    reward = staked * (elapsed // ONE_DAY) * rate_bps // 10000

Rewards come from a shared pool funded by the owner. compute_rewards caps
the reward at the pool balance, so with several stakers the first to
unstake can drain it and later stakers get nothing. That is the documented
policy. The cap is the only place the pool limit is applied.

Staking moves custody of units to LEDGER_ADDRESS but not their dividend
eligibility, which stays with the staker (see DividendAccounting).
"""
import logging
from collections.abc import Callable

from src.dl_common.amounts import apply_bps, validate_positive
from src.dl_common.enums import StakeStatus
from src.dl_common.errors import (
    InsufficientBalanceError,
    NothingStakedError,
    PaymentFailedError,
    UnauthorizedError,
)
from src.dl_common.journal import Journal
from src.dl_gateway.auth.access_gate import AccessGate
from src.dl_ledger.domain.base_ledger import BaseLedger
from src.dl_ledger.domain.constants import LEDGER_ADDRESS
from src.dl_ledger.domain.state import LedgerState
from src.dl_staking.domain.constants import DEFAULT_STAKING_RATE_BPS, ONE_DAY
from src.dl_treasury.domain.value_transfer import ValueTransfer

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


class StakingLedger:
    def __init__(
        self,
        state: LedgerState,
        journal: Journal,
        ledger: BaseLedger,
        vault: ValueTransfer,
        gate: AccessGate,
        clock: Clock,
        rate_bps: int = DEFAULT_STAKING_RATE_BPS,
    ) -> None:
        self._state = state
        self._journal = journal
        self._ledger = ledger
        self._vault = vault
        self._gate = gate
        self._clock = clock
        self.rate_bps = rate_bps

    def status_of(self, account: str) -> StakeStatus:
        if self.staked_balance_of(account) > 0:
            return StakeStatus.STAKED
        return StakeStatus.UNSTAKED

    def staked_balance_of(self, account: str) -> int:
        return self._state.staked_balances.get(account, 0)

    def stake_start_time_of(self, account: str) -> int:
        return self._state.stake_start_times.get(account, 0)

    def now(self) -> int:
        return self._clock()

    def stake(self, caller: str, units: int, now: int | None = None) -> None:
        validate_positive(units)
        balance = self._ledger.balance_of(caller)
        if units > balance:
            raise InsufficientBalanceError(units, balance)

        state = self._state
        self._ledger.transfer(caller, LEDGER_ADDRESS, units)
        self._journal.set_item(
            state.staked_balances, caller, self.staked_balance_of(caller) + units
        )
        self._journal.set_item(
            state.stake_start_times, caller, self._clock() if now is None else now
        )
        self._journal.set_attr(state, "total_staked", state.total_staked + units)

    def unstake(self, caller: str, now: int | None = None) -> tuple[int, int]:
        """Return the principal to caller. Returns (principal units, reward due).

        The reward is not paid here; see pay_rewards.
        """
        staked = self.staked_balance_of(caller)
        if staked == 0:
            raise NothingStakedError()

        rewards = self.rewards_at(caller, self._clock() if now is None else now)

        state = self._state
        self._journal.set_item(state.staked_balances, caller, 0)
        self._journal.set_item(state.stake_start_times, caller, 0)
        self._journal.set_attr(state, "total_staked", state.total_staked - staked)
        self._ledger.transfer(LEDGER_ADDRESS, caller, staked)
        return staked, rewards

    def pay_rewards(self, caller: str, rewards: int) -> int:
        """Pay `rewards` out of the pool. Returns the value paid, 0 on failure.

        `rewards` must come from rewards_at, which never exceeds the pool.
        """
        # Savepoint: a failed reward payment never undoes the principal return
        try:
            with self._journal.transaction():
                self._journal.set_attr(
                    self._state, "staking_reward_pool", self._state.staking_reward_pool - rewards
                )
                if not self._vault.pay(caller, rewards):
                    raise PaymentFailedError(caller, rewards)
        except PaymentFailedError as exc:
            logger.warning("Reward of %d to %s not paid: %s", rewards, caller, exc.message)
            return 0
        return rewards

    def compute_rewards(self, account: str) -> int:
        return self.rewards_at(account, self._clock())

    def rewards_at(self, account: str, now: int) -> int:
        staked = self.staked_balance_of(account)
        if staked == 0:
            return 0
        elapsed = max(now - self.stake_start_time_of(account), 0)
        days_staked = elapsed // ONE_DAY
        reward = apply_bps(staked * days_staked, self.rate_bps)
        return min(reward, self._state.staking_reward_pool)

    def fund_reward_pool(self, caller: str, value: int) -> None:
        if not self._gate.is_authorized(caller):
            raise UnauthorizedError(caller)
        validate_positive(value)
        self._vault.credit(value)
        self._journal.set_attr(
            self._state, "staking_reward_pool", self._state.staking_reward_pool + value
        )
