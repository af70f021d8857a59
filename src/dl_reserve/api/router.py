"""dl_reserve REST API — mint against deposited value, burn for a pro-rata payout."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.database import get_db_session
from src.dl_common.response import ApiResponse, success_response
from src.dl_gateway.auth.dependencies import get_current_caller
from src.dl_reserve.application.schemas import BurnRequest, MintRequest
from src.dl_reserve.application.service import ReserveApplicationService

router = APIRouter(prefix="/reserve", tags=["reserve"])

_service = ReserveApplicationService()


@router.post("/mint")
async def mint(
    body: MintRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.mint(db, caller, body.value)
    return success_response(data.model_dump(), request)


@router.post("/burn")
async def burn(
    body: BurnRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.burn(db, caller, body.units)
    return success_response(data.model_dump(), request)
