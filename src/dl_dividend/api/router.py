"""dl_dividend REST API — owner distributions and holder withdrawals."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.database import get_db_session
from src.dl_common.response import ApiResponse, success_response
from src.dl_dividend.application.schemas import DistributeRequest
from src.dl_dividend.application.service import DividendApplicationService
from src.dl_gateway.auth.dependencies import get_current_caller

router = APIRouter(prefix="/dividends", tags=["dividends"])

_service = DividendApplicationService()


@router.post("/distribute")
async def distribute(
    body: DistributeRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.distribute(db, caller, body.value)
    return success_response(data.model_dump(), request)


@router.post("/withdraw")
async def withdraw(
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.withdraw(db, caller)
    return success_response(data.model_dump(), request)
