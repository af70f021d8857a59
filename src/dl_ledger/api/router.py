"""dl_ledger REST API — transfers plus public account and ledger queries."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.dl_common.database import get_db_session
from src.dl_common.response import ApiResponse, success_response
from src.dl_gateway.auth.dependencies import get_current_caller
from src.dl_ledger.application.schemas import TransferRequest
from src.dl_ledger.application.service import LedgerApplicationService

router = APIRouter(prefix="/ledger", tags=["ledger"])

_service = LedgerApplicationService()


@router.post("/transfer")
async def transfer(
    body: TransferRequest,
    caller: Annotated[str, Depends(get_current_caller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.transfer(db, caller, body.to, body.units)
    return success_response(data.model_dump(), request)


@router.get("/accounts/{address}")
async def account_info(address: str, request: Request) -> ApiResponse:
    data = _service.account_info(address)
    return success_response(data.model_dump(), request)


@router.get("/accounts/{address}/events")
async def account_events(
    address: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    limit: int = Query(20, ge=1, le=100, description="Most recent events to return"),
) -> ApiResponse:
    data = await _service.list_events(db, address, limit)
    return success_response(data.model_dump(), request)


@router.get("/stats")
async def stats(request: Request) -> ApiResponse:
    data = _service.stats()
    return success_response(data.model_dump(), request)
