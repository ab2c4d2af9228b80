"""am_listing REST endpoints.

POST   /listings              — create (any authenticated agent)
GET    /listings              — list with cursor pagination
GET    /listings/{listing_id} — detail (counts a view)
PATCH  /listings/{listing_id} — owner update
DELETE /listings/{listing_id} — owner cancel (listings are never deleted)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import Agent
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import get_current_agent
from src.am_listing.application.schemas import CreateListingRequest, UpdateListingRequest
from src.am_listing.application.service import ListingApplicationService

router = APIRouter(prefix="/listings", tags=["listings"])

_service = ListingApplicationService()


@router.post("", status_code=201)
async def create_listing(
    body: CreateListingRequest,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_listing(db, current_agent.id, body)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_listings(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: str | None = Query(
        None, description="Filter by status. Default: ACTIVE. Use ALL for no filter."
    ),
    category: str | None = Query(None),
    direction: str | None = Query(None, description="BUY or SELL"),
    agent_id: str | None = Query(None, alias="agentId"),
    limit: int = Query(20, ge=1, le=50),
    cursor: str | None = Query(None),
) -> ApiResponse:
    result = await _service.list_listings(
        db, status, category, direction, agent_id, cursor, limit
    )
    resp = success_response(
        [item.to_json_dict() for item in result.items],
        meta={"nextCursor": result.next_cursor, "hasMore": result.has_more},
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_listing(db, listing_id)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{listing_id}")
async def update_listing(
    listing_id: str,
    body: UpdateListingRequest,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_listing(db, listing_id, current_agent.id, body)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{listing_id}")
async def cancel_listing(
    listing_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.cancel_listing(db, listing_id, current_agent.id)
    resp = success_response(message="Listing cancelled successfully")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
