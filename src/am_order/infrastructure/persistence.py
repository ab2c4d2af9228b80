# src/am_order/infrastructure/persistence.py
"""OrderRepository: raw SQL persistence implementation.

Status changes are conditional UPDATE ... RETURNING statements. A missing row
in the result means the guard in the WHERE clause rejected the change, which
the service reports as a business-rule error.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import AgentSummary
from src.am_order.domain.models import ListingSummary, Order

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_INSERT_ORDER_SQL = text("""
    INSERT INTO orders (id, listing_id, buyer_id, seller_id,
        amount, platform_fee, total_amount, status,
        buyer_verified, seller_verified, notes, verification_hash, created_at)
    VALUES (:id, :listing_id, :buyer_id, :seller_id,
        :amount, :platform_fee, :total_amount, :status,
        :buyer_verified, :seller_verified, :notes, :verification_hash, :created_at)
""")

_SELECT_COLUMNS = """
    o.id, o.listing_id, o.buyer_id, o.seller_id,
    o.amount, o.platform_fee, o.total_amount, o.status,
    o.buyer_verified, o.seller_verified, o.notes, o.verification_hash,
    o.completed_at, o.created_at, o.updated_at,
    l.title AS listing_title, l.category AS listing_category,
    l.direction AS listing_direction,
    b.name AS buyer_name, b.wallet_address AS buyer_wallet,
    s.name AS seller_name, s.wallet_address AS seller_wallet
"""

_FROM_JOINED = """
    FROM orders o
    JOIN listings l ON l.id = o.listing_id
    JOIN agents b ON b.id = o.buyer_id
    JOIN agents s ON s.id = o.seller_id
"""

_GET_ORDER_SQL = text(f"SELECT {_SELECT_COLUMNS} {_FROM_JOINED} WHERE o.id = :id")

_GET_ORDER_FOR_UPDATE_SQL = text(f"""
    SELECT {_SELECT_COLUMNS} {_FROM_JOINED}
    WHERE o.id = :id
    FOR UPDATE OF o
""")

# Flag update and the "both verified -> VERIFIED" promotion in one statement.
# The CASE reads the other party's flag from the pre-update row.
_VERIFY_AS_BUYER_SQL = text("""
    UPDATE orders
    SET buyer_verified = TRUE,
        status = CASE WHEN seller_verified THEN 'VERIFIED' ELSE status END,
        updated_at = NOW()
    WHERE id = :id
      AND buyer_verified = FALSE
      AND status IN ('PENDING_VERIFICATION', 'VERIFIED')
    RETURNING id
""")

_VERIFY_AS_SELLER_SQL = text("""
    UPDATE orders
    SET seller_verified = TRUE,
        status = CASE WHEN buyer_verified THEN 'VERIFIED' ELSE status END,
        updated_at = NOW()
    WHERE id = :id
      AND seller_verified = FALSE
      AND status IN ('PENDING_VERIFICATION', 'VERIFIED')
    RETURNING id
""")

_COMPLETE_ORDER_SQL = text("""
    UPDATE orders
    SET status = 'COMPLETED', completed_at = :completed_at, updated_at = NOW()
    WHERE id = :id
      AND status IN ('VERIFIED', 'IN_PROGRESS')
      AND buyer_verified AND seller_verified
    RETURNING id
""")

_CANCEL_ORDER_SQL = text("""
    UPDATE orders
    SET status = 'CANCELLED', updated_at = NOW()
    WHERE id = :id AND status <> 'COMPLETED'
    RETURNING id
""")

_LIST_ORDERS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS} {_FROM_JOINED}
    WHERE (o.buyer_id = :agent_id OR o.seller_id = :agent_id)
      AND (CAST(:status AS TEXT) IS NULL OR o.status = CAST(:status AS TEXT))
      AND (
          CAST(:cursor_ts AS TIMESTAMPTZ) IS NULL
          OR o.created_at < CAST(:cursor_ts AS TIMESTAMPTZ)
          OR (
              o.created_at = CAST(:cursor_ts AS TIMESTAMPTZ)
              AND o.id < CAST(:cursor_id AS TEXT)
          )
      )
    ORDER BY o.created_at DESC, o.id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_order(row: Any) -> Order:
    return Order(
        id=str(row.id),
        listing_id=str(row.listing_id),
        buyer_id=str(row.buyer_id),
        seller_id=str(row.seller_id),
        amount=row.amount,
        platform_fee=row.platform_fee,
        total_amount=row.total_amount,
        status=row.status,
        buyer_verified=bool(row.buyer_verified),
        seller_verified=bool(row.seller_verified),
        notes=row.notes,
        verification_hash=row.verification_hash,
        completed_at=row.completed_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
        listing=ListingSummary(
            id=str(row.listing_id),
            title=row.listing_title,
            category=row.listing_category,
            direction=row.listing_direction,
        ),
        buyer=AgentSummary(
            id=str(row.buyer_id), name=row.buyer_name, wallet_address=row.buyer_wallet
        ),
        seller=AgentSummary(
            id=str(row.seller_id), name=row.seller_name, wallet_address=row.seller_wallet
        ),
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete repository, caller owns the transaction."""

    async def save(self, db: AsyncSession, order: Order) -> None:
        await db.execute(
            _INSERT_ORDER_SQL,
            {
                "id": order.id,
                "listing_id": order.listing_id,
                "buyer_id": order.buyer_id,
                "seller_id": order.seller_id,
                "amount": order.amount,
                "platform_fee": order.platform_fee,
                "total_amount": order.total_amount,
                "status": order.status,
                "buyer_verified": order.buyer_verified,
                "seller_verified": order.seller_verified,
                "notes": order.notes,
                "verification_hash": order.verification_hash,
                "created_at": order.created_at,
            },
        )

    async def get_by_id(self, db: AsyncSession, order_id: str) -> Order | None:
        result = await db.execute(_GET_ORDER_SQL, {"id": order_id})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def get_for_update(self, db: AsyncSession, order_id: str) -> Order | None:
        """SELECT ... FOR UPDATE OF o, serializes concurrent writers on one order."""
        result = await db.execute(_GET_ORDER_FOR_UPDATE_SQL, {"id": order_id})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def mark_verified(self, db: AsyncSession, order_id: str, role: str) -> bool:
        sql = _VERIFY_AS_BUYER_SQL if role == "BUYER" else _VERIFY_AS_SELLER_SQL
        result = await db.execute(sql, {"id": order_id})
        return result.fetchone() is not None

    async def mark_completed(
        self, db: AsyncSession, order_id: str, completed_at: datetime
    ) -> bool:
        result = await db.execute(
            _COMPLETE_ORDER_SQL, {"id": order_id, "completed_at": completed_at}
        )
        return result.fetchone() is not None

    async def mark_cancelled(self, db: AsyncSession, order_id: str) -> bool:
        result = await db.execute(_CANCEL_ORDER_SQL, {"id": order_id})
        return result.fetchone() is not None

    async def list_by_party(
        self,
        db: AsyncSession,
        agent_id: str,
        status: str | None,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Order]:
        result = await db.execute(
            _LIST_ORDERS_SQL,
            {
                "agent_id": agent_id,
                "status": status,
                "cursor_ts": cursor_ts,
                "cursor_id": cursor_id,
                "limit": limit,
            },
        )
        return [_row_to_order(row) for row in result.fetchall()]
