"""ListingRepository: raw SQL persistence implementation.

asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
JSONB comes back from asyncpg as a str unless a codec is registered, so the
row mapper decodes it.
"""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_listing.domain.models import Listing

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_INSERT_LISTING_SQL = text("""
    INSERT INTO listings (id, agent_id, title, description, category, direction,
        price, currency, tags, metadata, status, expires_at)
    VALUES (:id, :agent_id, :title, :description, :category, :direction,
        :price, :currency, CAST(:tags AS TEXT[]), CAST(:metadata AS JSONB),
        :status, :expires_at)
""")

_SELECT_COLUMNS = """
    l.id, l.agent_id, l.title, l.description, l.category, l.direction,
    l.price, l.currency, l.tags, l.metadata, l.status, l.view_count,
    l.expires_at, l.created_at, l.updated_at, a.name AS agent_name
"""

_GET_LISTING_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM listings l JOIN agents a ON a.id = l.agent_id
    WHERE l.id = :id
""")

_GET_LISTING_FOR_UPDATE_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM listings l JOIN agents a ON a.id = l.agent_id
    WHERE l.id = :id
    FOR UPDATE OF l
""")

_INCREMENT_VIEWS_SQL = text("""
    UPDATE listings SET view_count = view_count + 1 WHERE id = :id
""")

_UPDATE_LISTING_SQL = text("""
    UPDATE listings
    SET title = :title, description = :description, price = :price,
        tags = CAST(:tags AS TEXT[]), metadata = CAST(:metadata AS JSONB),
        status = :status, updated_at = NOW()
    WHERE id = :id
""")

_SET_STATUS_SQL = text("""
    UPDATE listings SET status = :status, updated_at = NOW() WHERE id = :id
""")

# SOLD is entered exactly once; a second completed order on the same listing
# leaves it untouched.
_MARK_SOLD_SQL = text("""
    UPDATE listings SET status = 'SOLD', updated_at = NOW()
    WHERE id = :id AND status <> 'SOLD'
    RETURNING id
""")

_LIST_LISTINGS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM listings l JOIN agents a ON a.id = l.agent_id
    WHERE
        (CAST(:status AS TEXT) IS NULL OR l.status = CAST(:status AS TEXT))
        AND (CAST(:category AS TEXT) IS NULL OR l.category = CAST(:category AS TEXT))
        AND (CAST(:direction AS TEXT) IS NULL OR l.direction = CAST(:direction AS TEXT))
        AND (CAST(:agent_id AS TEXT) IS NULL OR l.agent_id = CAST(:agent_id AS TEXT))
        AND (
            CAST(:cursor_ts AS TIMESTAMPTZ) IS NULL
            OR l.created_at < CAST(:cursor_ts AS TIMESTAMPTZ)
            OR (
                l.created_at = CAST(:cursor_ts AS TIMESTAMPTZ)
                AND l.id < CAST(:cursor_id AS TEXT)
            )
        )
    ORDER BY l.created_at DESC, l.id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _decode_metadata(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, str):
        return dict(json.loads(value))
    return dict(value)


def _row_to_listing(row: Any) -> Listing:
    return Listing(
        id=str(row.id),
        agent_id=str(row.agent_id),
        title=row.title,
        description=row.description,
        category=row.category,
        direction=row.direction,
        price=row.price,
        currency=row.currency,
        tags=list(row.tags or []),
        metadata=_decode_metadata(row.metadata),
        status=row.status,
        view_count=row.view_count,
        expires_at=row.expires_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
        agent_name=row.agent_name,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ListingRepository:
    """Concrete implementation of ListingRepositoryProtocol using raw SQL."""

    async def save(self, db: AsyncSession, listing: Listing) -> None:
        await db.execute(
            _INSERT_LISTING_SQL,
            {
                "id": listing.id,
                "agent_id": listing.agent_id,
                "title": listing.title,
                "description": listing.description,
                "category": listing.category,
                "direction": listing.direction,
                "price": listing.price,
                "currency": listing.currency,
                "tags": listing.tags,
                "metadata": json.dumps(listing.metadata),
                "status": listing.status,
                "expires_at": listing.expires_at,
            },
        )

    async def get_by_id(self, db: AsyncSession, listing_id: str) -> Listing | None:
        result = await db.execute(_GET_LISTING_SQL, {"id": listing_id})
        row = result.fetchone()
        return _row_to_listing(row) if row else None

    async def get_for_update(self, db: AsyncSession, listing_id: str) -> Listing | None:
        """Row-locked read; holds until the caller's transaction ends."""
        result = await db.execute(_GET_LISTING_FOR_UPDATE_SQL, {"id": listing_id})
        row = result.fetchone()
        return _row_to_listing(row) if row else None

    async def increment_view_count(self, db: AsyncSession, listing_id: str) -> None:
        await db.execute(_INCREMENT_VIEWS_SQL, {"id": listing_id})

    async def update(self, db: AsyncSession, listing: Listing) -> None:
        await db.execute(
            _UPDATE_LISTING_SQL,
            {
                "id": listing.id,
                "title": listing.title,
                "description": listing.description,
                "price": listing.price,
                "tags": listing.tags,
                "metadata": json.dumps(listing.metadata),
                "status": listing.status,
            },
        )

    async def set_status(self, db: AsyncSession, listing_id: str, status: str) -> None:
        await db.execute(_SET_STATUS_SQL, {"id": listing_id, "status": status})

    async def mark_sold(self, db: AsyncSession, listing_id: str) -> bool:
        """Flip the listing to SOLD. Returns False if it already was."""
        result = await db.execute(_MARK_SOLD_SQL, {"id": listing_id})
        return result.fetchone() is not None

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
    ) -> list[Listing]:
        result = await db.execute(
            _LIST_LISTINGS_SQL,
            {
                "status": status,
                "category": category,
                "direction": direction,
                "agent_id": agent_id,
                "cursor_ts": cursor_ts,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        rows = result.fetchall()
        return [_row_to_listing(row) for row in rows]
