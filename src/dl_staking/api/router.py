"""dl_staking REST API — stake, unstake, and owner pool funding."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.database import get_db_session
from src.dl_common.response import ApiResponse, success_response
from src.dl_gateway.auth.dependencies import get_current_caller
from src.dl_staking.application.schemas import FundPoolRequest, StakeRequest
from src.dl_staking.application.service import StakingApplicationService

router = APIRouter(prefix="/staking", tags=["staking"])

_service = StakingApplicationService()


@router.post("/stake")
async def stake(
    body: StakeRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.stake(db, caller, body.units)
    return success_response(data.model_dump(), request)


@router.post("/unstake")
async def unstake(
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.unstake(db, caller)
    return success_response(data.model_dump(), request)


@router.post("/fund")
async def fund_reward_pool(
    body: FundPoolRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.fund_reward_pool(db, caller, body.value)
    return success_response(data.model_dump(), request)
