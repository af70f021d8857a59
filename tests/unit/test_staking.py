"""Tests for StakingLedger through the engine."""
import pytest

from src.dl_common.enums import StakeStatus
from src.dl_common.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRecipientError,
    NothingStakedError,
    ReservedAddressError,
    UnauthorizedError,
)
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_engine.domain.events import RewardClaimed, Staked, Unstaked
from src.dl_ledger.domain.constants import LEDGER_ADDRESS
from src.dl_staking.domain.constants import ONE_DAY
from src.dl_treasury.infrastructure.memory_vault import InMemoryVault

ETH = 10**18


@pytest.fixture
def funded(engine: LedgerEngine) -> LedgerEngine:
    """Engine with alice holding 1000 units and a 10 ETH reward pool."""
    engine.mint("alice", 1 * ETH)
    engine.fund_reward_pool("owner", 10 * ETH)
    return engine


class TestStake:
    def test_stake_half(self, funded: LedgerEngine, clock) -> None:
        funded.stake("alice", 500 * ETH)
        assert funded.balance_of("alice") == 500 * ETH
        assert funded.staking.staked_balance_of("alice") == 500 * ETH
        assert funded.staking.stake_start_time_of("alice") == clock.now
        assert funded.staking.status_of("alice") == StakeStatus.STAKED
        assert funded.balance_of(LEDGER_ADDRESS) == 500 * ETH
        assert funded.state.total_staked == 500 * ETH
        assert funded.total_supply() == 1000 * ETH

    def test_emits_staked_event(self, funded: LedgerEngine) -> None:
        funded.stake("alice", 500 * ETH)
        event = funded.events[-1]
        assert isinstance(event, Staked)
        assert (event.staker, event.units) == ("alice", 500 * ETH)
        assert event.started_at == funded.staking.stake_start_time_of("alice")

    def test_stake_zero(self, funded: LedgerEngine) -> None:
        with pytest.raises(InvalidAmountError):
            funded.stake("alice", 0)

    def test_stake_over_balance(self, funded: LedgerEngine) -> None:
        with pytest.raises(InsufficientBalanceError):
            funded.stake("alice", 1001 * ETH)
        assert funded.state.total_staked == 0

    def test_staked_units_cannot_be_transferred(self, funded: LedgerEngine) -> None:
        funded.stake("alice", 1000 * ETH)
        with pytest.raises(InsufficientBalanceError):
            funded.transfer("alice", "bob", 1)

    def test_direct_transfer_to_ledger_address_rejected(self, funded: LedgerEngine) -> None:
        with pytest.raises(InvalidRecipientError):
            funded.transfer("alice", LEDGER_ADDRESS, 1 * ETH)
        assert funded.state.total_staked == 0

    def test_restake_restarts_clock_for_whole_position(
        self, funded: LedgerEngine, clock
    ) -> None:
        funded.stake("alice", 500 * ETH)
        clock.advance(5 * ONE_DAY)
        funded.stake("alice", 500 * ETH)
        assert funded.staking.stake_start_time_of("alice") == clock.now
        clock.advance(5 * ONE_DAY)
        # 1000 units * 5 days * 1 bps
        assert funded.compute_rewards("alice") == ETH // 2


class TestRewards:
    def test_no_rewards_before_a_full_day(self, funded: LedgerEngine, clock) -> None:
        funded.stake("alice", 1000 * ETH)
        clock.advance(ONE_DAY - 1)
        assert funded.compute_rewards("alice") == 0

    def test_ten_days_at_one_bps(self, funded: LedgerEngine, clock) -> None:
        funded.stake("alice", 1000 * ETH)
        clock.advance(10 * ONE_DAY)
        assert funded.compute_rewards("alice") == 1 * ETH

    def test_rewards_capped_at_pool(self, engine: LedgerEngine, clock) -> None:
        engine.mint("alice", 1 * ETH)
        engine.fund_reward_pool("owner", ETH // 2)
        engine.stake("alice", 1000 * ETH)
        clock.advance(10 * ONE_DAY)
        assert engine.compute_rewards("alice") == ETH // 2

    def test_no_position_no_rewards(self, funded: LedgerEngine) -> None:
        assert funded.compute_rewards("alice") == 0


class TestUnstake:
    def test_unstake_immediately_returns_principal_only(self, funded: LedgerEngine) -> None:
        funded.stake("alice", 500 * ETH)
        result = funded.unstake("alice")
        assert (result.units, result.rewards) == (500 * ETH, 0)
        assert funded.balance_of("alice") == 1000 * ETH
        assert funded.staking.status_of("alice") == StakeStatus.UNSTAKED
        assert funded.staking.stake_start_time_of("alice") == 0
        assert funded.state.total_staked == 0
        unstaked = funded.events[-1]
        assert isinstance(unstaked, Unstaked)
        assert unstaked.unstaked_at == funded.staking.now()
        assert not any(isinstance(e, RewardClaimed) for e in funded.events)

    def test_unstake_after_ten_days_pays_reward(
        self, funded: LedgerEngine, vault: InMemoryVault, clock
    ) -> None:
        funded.stake("alice", 1000 * ETH)
        clock.advance(10 * ONE_DAY)
        result = funded.unstake("alice")
        assert result.rewards == 1 * ETH
        assert vault.paid_to("alice") == 1 * ETH
        assert funded.state.staking_reward_pool == 9 * ETH
        assert funded.balance_of("alice") == 1000 * ETH
        claimed = funded.events[-1]
        assert isinstance(claimed, RewardClaimed)
        assert (claimed.staker, claimed.value) == ("alice", 1 * ETH)

    def test_nothing_staked(self, funded: LedgerEngine) -> None:
        with pytest.raises(NothingStakedError, match="No tokens staked"):
            funded.unstake("alice")

    def test_first_unstaker_can_drain_pool(self, engine: LedgerEngine, clock) -> None:
        engine.mint("alice", 1 * ETH)
        engine.mint("bob", 1 * ETH)
        engine.fund_reward_pool("owner", ETH * 3 // 2)
        engine.stake("alice", 1000 * ETH)
        engine.stake("bob", 1000 * ETH)
        clock.advance(10 * ONE_DAY)

        assert engine.unstake("alice").rewards == 1 * ETH
        assert engine.unstake("bob").rewards == ETH // 2
        assert engine.state.staking_reward_pool == 0

    def test_failed_reward_payment_still_returns_principal(
        self, funded: LedgerEngine, vault: InMemoryVault, clock
    ) -> None:
        vault.on_receive("alice", lambda amount: False)
        funded.stake("alice", 1000 * ETH)
        clock.advance(10 * ONE_DAY)

        result = funded.unstake("alice")
        assert result == type(result)(units=1000 * ETH, rewards=0)
        assert funded.balance_of("alice") == 1000 * ETH
        assert funded.staking.staked_balance_of("alice") == 0
        assert funded.state.staking_reward_pool == 10 * ETH
        assert vault.paid_to("alice") == 0
        assert not any(isinstance(e, RewardClaimed) for e in funded.events)


class TestFundRewardPool:
    def test_owner_funds(self, engine: LedgerEngine, vault: InMemoryVault) -> None:
        engine.fund_reward_pool("owner", 2 * ETH)
        assert engine.state.staking_reward_pool == 2 * ETH
        assert vault.held() == 2 * ETH

    def test_non_owner_rejected(self, engine: LedgerEngine) -> None:
        with pytest.raises(UnauthorizedError):
            engine.fund_reward_pool("alice", 1 * ETH)
        assert engine.state.staking_reward_pool == 0

    def test_zero_rejected(self, engine: LedgerEngine) -> None:
        with pytest.raises(InvalidAmountError):
            engine.fund_reward_pool("owner", 0)


class TestPayRewards:
    def test_pays_from_pool(self, engine: LedgerEngine, vault: InMemoryVault) -> None:
        engine.fund_reward_pool("owner", 10)
        with engine.unit_of_work():
            assert engine.staking.pay_rewards("alice", 10) == 10
        assert engine.state.staking_reward_pool == 0
        assert vault.paid_to("alice") == 10

    def test_refused_payment_restores_pool(
        self, engine: LedgerEngine, vault: InMemoryVault
    ) -> None:
        vault.on_receive("alice", lambda amount: False)
        engine.fund_reward_pool("owner", 10)
        with engine.unit_of_work():
            assert engine.staking.pay_rewards("alice", 4) == 0
        assert engine.state.staking_reward_pool == 10
        assert vault.paid_to("alice") == 0

    def test_due_reward_never_exceeds_pool(self, engine: LedgerEngine, clock) -> None:
        engine.mint("alice", 1 * ETH)
        engine.fund_reward_pool("owner", 3)
        engine.stake("alice", 1000 * ETH)
        clock.advance(30 * ONE_DAY)
        assert engine.staking.rewards_at("alice", clock.now) == 3
        assert engine.unstake("alice").rewards == 3
        assert engine.state.staking_reward_pool == 0


class TestLedgerAddressCannotAct:
    @pytest.fixture
    def staked(self, funded: LedgerEngine) -> LedgerEngine:
        funded.stake("alice", 1000 * ETH)
        funded.distribute("owner", 1 * ETH)
        return funded

    @pytest.mark.parametrize(
        "action",
        [
            lambda e: e.transfer(LEDGER_ADDRESS, "mallory", 1000 * ETH),
            lambda e: e.burn(LEDGER_ADDRESS, 1000 * ETH),
            lambda e: e.withdraw_dividends(LEDGER_ADDRESS),
            lambda e: e.stake(LEDGER_ADDRESS, 1 * ETH),
            lambda e: e.unstake(LEDGER_ADDRESS),
            lambda e: e.mint(LEDGER_ADDRESS, 1 * ETH),
        ],
        ids=["transfer", "burn", "withdraw", "stake", "unstake", "mint"],
    )
    def test_rejected(self, staked: LedgerEngine, vault: InMemoryVault, action) -> None:
        held = vault.held()
        with pytest.raises(ReservedAddressError):
            action(staked)
        assert staked.balance_of(LEDGER_ADDRESS) == 1000 * ETH
        assert staked.balance_of("mallory") == 0
        assert vault.held() == held

    def test_staker_can_still_unstake(self, staked: LedgerEngine) -> None:
        with pytest.raises(ReservedAddressError):
            staked.transfer(LEDGER_ADDRESS, "mallory", 1000 * ETH)
        assert staked.unstake("alice").units == 1000 * ETH
        assert staked.balance_of("alice") == 1000 * ETH
