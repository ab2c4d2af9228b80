"""am_order REST endpoints.

POST /orders                     — place an order against a listing (verified agents, rate limited)
GET  /orders                     — caller's orders, newest first
GET  /orders/{order_id}          — order detail (parties only)
POST /orders/{order_id}/verify   — caller attests to the order
POST /orders/{order_id}/complete — finalize and record the transaction
POST /orders/{order_id}/cancel   — cancel (any status except COMPLETED)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.am_agent.domain.models import Agent
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import get_current_agent
from src.am_gateway.middleware.rate_limit import order_rate_limit
from src.am_order.application.schemas import CreateOrderRequest
from src.am_order.application.service import OrderApplicationService
from src.am_order.domain.pricing import FeePolicy

router = APIRouter(prefix="/orders", tags=["orders"])

_service = OrderApplicationService(FeePolicy(settings.PLATFORM_FEE_PERCENT))


@router.post("", status_code=201)
async def create_order(
    body: CreateOrderRequest,
    request: Request,
    current_agent: Annotated[Agent, Depends(order_rate_limit)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_order(db, current_agent.id, body)
    resp = success_response(
        result.to_json_dict(),
        message="Order placed. Both parties must verify before completion.",
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_orders(
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: str | None = Query(None),
    limit: int = Query(20, ge=1, le=50),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_orders(db, current_agent.id, status, cursor, limit)
    resp = success_response(
        [item.to_json_dict() for item in result.items],
        meta={"nextCursor": result.next_cursor, "hasMore": result.has_more},
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_order(db, order_id, current_agent.id)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/verify")
async def verify_order(
    order_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify_order(db, order_id, current_agent.id)
    resp = success_response(result.to_json_dict(), message="Order verified")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/complete")
async def complete_order(
    order_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.complete_order(db, order_id, current_agent.id)
    resp = success_response(result.to_json_dict(), message="Order completed")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{order_id}/cancel")
async def cancel_order(
    order_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.cancel_order(db, order_id, current_agent.id)
    resp = success_response(result.to_json_dict(), message="Order cancelled")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
