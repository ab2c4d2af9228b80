"""ListingApplicationService: owner-scoped CRUD over the listing store.

Write operations commit on success and roll back on any error; the caller
(router) passes the request-scoped session.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.enums import ListingStatus
from src.am_common.errors import (
    BadRequestError,
    ListingNotFoundError,
    NotListingOwnerError,
)
from src.am_common.id_generator import generate_id
from src.am_common.schemas import cursor_decode, cursor_encode
from src.am_listing.application.schemas import (
    CreateListingRequest,
    ListingListResponse,
    ListingResponse,
    UpdateListingRequest,
)
from src.am_listing.domain.models import Listing
from src.am_listing.domain.repository import ListingRepositoryProtocol
from src.am_listing.infrastructure.persistence import ListingRepository

logger = logging.getLogger(__name__)

_FINAL_STATUSES = (ListingStatus.SOLD.value, ListingStatus.CANCELLED.value)


class ListingApplicationService:
    def __init__(self, repo: ListingRepositoryProtocol | None = None) -> None:
        self._repo: ListingRepositoryProtocol = repo or ListingRepository()

    async def create_listing(
        self, db: AsyncSession, agent_id: str, req: CreateListingRequest
    ) -> ListingResponse:
        listing = Listing(
            id=generate_id(),
            agent_id=agent_id,
            title=req.title,
            description=req.description,
            category=req.category.value,
            direction=req.direction,
            price=req.price,
            currency=req.currency.upper(),
            tags=req.tags,
            metadata=req.metadata,
            status=ListingStatus.ACTIVE.value,
            expires_at=req.expires_at,
        )
        try:
            await self._repo.save(db, listing)
            saved = await self._repo.get_by_id(db, listing.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Listing created: id=%s owner=%s %s", listing.id, agent_id, listing.direction)
        return ListingResponse.from_domain(saved or listing)

    async def get_listing(self, db: AsyncSession, listing_id: str) -> ListingResponse:
        """Fetch a listing and count the view."""
        try:
            listing = await self._repo.get_by_id(db, listing_id)
            if listing is None:
                raise ListingNotFoundError(listing_id)
            await self._repo.increment_view_count(db, listing_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        listing.view_count += 1
        return ListingResponse.from_domain(listing)

    async def update_listing(
        self, db: AsyncSession, listing_id: str, agent_id: str, req: UpdateListingRequest
    ) -> ListingResponse:
        try:
            listing = await self._load_owned(db, listing_id, agent_id)
            if listing.status in _FINAL_STATUSES:
                raise BadRequestError(
                    f"Listing {listing_id} is {listing.status} and can no longer be edited", 3004
                )
            if req.title is not None:
                listing.title = req.title
            if req.description is not None:
                listing.description = req.description
            if req.price is not None:
                listing.price = req.price
            if req.tags is not None:
                listing.tags = req.tags
            if req.metadata is not None:
                listing.metadata = req.metadata
            if req.status is not None:
                listing.status = req.status
            await self._repo.update(db, listing)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ListingResponse.from_domain(listing)

    async def cancel_listing(self, db: AsyncSession, listing_id: str, agent_id: str) -> None:
        try:
            listing = await self._load_owned(db, listing_id, agent_id)
            if listing.status == ListingStatus.SOLD.value:
                raise BadRequestError(f"Listing {listing_id} is already sold", 3005)
            await self._repo.set_status(db, listing_id, ListingStatus.CANCELLED.value)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Listing cancelled: id=%s owner=%s", listing_id, agent_id)

    async def list_listings(
        self,
        db: AsyncSession,
        status: str | None,
        category: str | None,
        direction: str | None,
        agent_id: str | None,
        cursor: str | None,
        limit: int,
    ) -> ListingListResponse:
        # status=None → default ACTIVE; status='ALL' → no filter
        sql_status = None if status == "ALL" else (status or "ACTIVE")
        cursor_ts, cursor_id = cursor_decode(cursor)

        # Fetch limit+1 to detect has_more without COUNT(*)
        listings = await self._repo.list_listings(
            db, sql_status, category, direction, agent_id, cursor_ts, cursor_id, limit + 1
        )
        has_more = len(listings) > limit
        page = listings[:limit]

        next_cursor = None
        if has_more and page and page[-1].created_at is not None:
            next_cursor = cursor_encode(page[-1].created_at, page[-1].id)
        return ListingListResponse(
            items=[ListingResponse.from_domain(item) for item in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def _load_owned(self, db: AsyncSession, listing_id: str, agent_id: str) -> Listing:
        listing = await self._repo.get_for_update(db, listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        if not listing.is_owned_by(agent_id):
            raise NotListingOwnerError()
        return listing
