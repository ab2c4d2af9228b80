# src/am_listing/domain/repository.py
"""ListingRepository Protocol, interface contract for persistence layer."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_listing.domain.models import Listing


class ListingRepositoryProtocol(Protocol):
    async def save(self, db: AsyncSession, listing: Listing) -> None: ...

    async def get_by_id(self, db: AsyncSession, listing_id: str) -> Listing | None: ...

    async def get_for_update(self, db: AsyncSession, listing_id: str) -> Listing | None: ...

    async def increment_view_count(self, db: AsyncSession, listing_id: str) -> None: ...

    async def update(self, db: AsyncSession, listing: Listing) -> None: ...

    async def set_status(self, db: AsyncSession, listing_id: str, status: str) -> None: ...

    async def mark_sold(self, db: AsyncSession, listing_id: str) -> bool: ...

    async def list_listings(
        self,
        db: AsyncSession,
        status: str | None,
        category: str | None,
        direction: str | None,
        agent_id: str | None,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Listing]: ...
