"""Transaction read endpoints.

GET /transactions       — caller's transactions, newest first
GET /transactions/stats — platform totals and recent completed transactions
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import Agent
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import get_current_agent
from src.am_settlement.application.transaction_service import TransactionApplicationService

router = APIRouter(prefix="/transactions", tags=["transactions"])

_service = TransactionApplicationService()


@router.get("")
async def list_transactions(
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int = Query(20, ge=1, le=50),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_transactions(db, current_agent.id, cursor, limit)
    resp = success_response(
        [item.to_json_dict() for item in result.items],
        meta={"nextCursor": result.next_cursor, "hasMore": result.has_more},
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/stats")
async def platform_stats(
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.platform_stats(db)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
