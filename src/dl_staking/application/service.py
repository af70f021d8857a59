"""StakingApplicationService — lock, unlock and reward-pool funding."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.amounts import amount_to_display
from src.dl_engine.application.runtime import EngineRuntime, get_runtime
from src.dl_engine.domain.engine import LedgerEngine
from src.dl_staking.application.schemas import (
    FundPoolResponse,
    StakeResponse,
    UnstakeResponse,
)


class StakingApplicationService:
    def __init__(self, runtime: EngineRuntime | None = None) -> None:
        self._runtime = runtime

    @property
    def runtime(self) -> EngineRuntime:
        return self._runtime or get_runtime()

    async def stake(self, db: AsyncSession | None, caller: str, units: int) -> StakeResponse:
        def op(engine: LedgerEngine) -> StakeResponse:
            engine.stake(caller, units)
            return StakeResponse(
                staked_balance=engine.staking.staked_balance_of(caller),
                stake_start_time=engine.staking.stake_start_time_of(caller),
                balance=engine.balance_of(caller),
                total_staked=engine.state.total_staked,
            )

        return await self.runtime.execute(db, op)

    async def unstake(self, db: AsyncSession | None, caller: str) -> UnstakeResponse:
        def op(engine: LedgerEngine) -> UnstakeResponse:
            result = engine.unstake(caller)
            return UnstakeResponse(
                units_returned=result.units,
                rewards_paid=result.rewards,
                rewards_paid_display=amount_to_display(result.rewards),
                balance=engine.balance_of(caller),
                staking_reward_pool=engine.state.staking_reward_pool,
            )

        return await self.runtime.execute(db, op)

    async def fund_reward_pool(
        self, db: AsyncSession | None, caller: str, value: int
    ) -> FundPoolResponse:
        def op(engine: LedgerEngine) -> FundPoolResponse:
            engine.fund_reward_pool(caller, value)
            return FundPoolResponse.from_pool(value, engine.state.staking_reward_pool)

        return await self.runtime.execute(db, op)
