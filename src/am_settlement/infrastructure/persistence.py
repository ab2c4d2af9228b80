"""TransactionRepository: raw SQL persistence implementation."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_settlement.domain.models import PlatformStats, Transaction

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_INSERT_TX_SQL = text("""
    INSERT INTO transactions (id, order_id, amount, platform_fee, net_amount, status,
        tx_signature, fee_tx_signature, payment_method, processed_at, created_at)
    VALUES (:id, :order_id, :amount, :platform_fee, :net_amount, :status,
        :tx_signature, :fee_tx_signature, :payment_method, :processed_at,
        COALESCE(CAST(:created_at AS TIMESTAMPTZ), NOW()))
""")

_TX_COLUMNS = """
    t.id, t.order_id, t.amount, t.platform_fee, t.net_amount, t.status,
    t.tx_signature, t.fee_tx_signature, t.payment_method, t.processed_at, t.created_at
"""

_GET_BY_ORDER_SQL = text(f"SELECT {_TX_COLUMNS} FROM transactions t WHERE t.order_id = :order_id")

_GET_BY_ORDER_FOR_UPDATE_SQL = text(f"""
    SELECT {_TX_COLUMNS} FROM transactions t
    WHERE t.order_id = :order_id
    FOR UPDATE
""")

# Proof fields are attached once; an existing signature is never overwritten.
_MARK_COMPLETED_SQL = text(f"""
    UPDATE transactions t
    SET status = 'COMPLETED',
        processed_at = :processed_at,
        tx_signature = COALESCE(t.tx_signature, CAST(:tx_signature AS TEXT)),
        fee_tx_signature = COALESCE(t.fee_tx_signature, CAST(:fee_tx_signature AS TEXT)),
        payment_method = COALESCE(t.payment_method, CAST(:payment_method AS TEXT))
    WHERE t.id = :id
    RETURNING {_TX_COLUMNS}
""")

_JOINED_COLUMNS = f"""
    {_TX_COLUMNS},
    l.title AS listing_title, b.name AS buyer_name, s.name AS seller_name
"""

_FROM_JOINED = """
    FROM transactions t
    JOIN orders o ON o.id = t.order_id
    JOIN listings l ON l.id = o.listing_id
    JOIN agents b ON b.id = o.buyer_id
    JOIN agents s ON s.id = o.seller_id
"""

_LIST_BY_PARTY_SQL = text(f"""
    SELECT {_JOINED_COLUMNS} {_FROM_JOINED}
    WHERE (o.buyer_id = :agent_id OR o.seller_id = :agent_id)
      AND (
          CAST(:cursor_ts AS TIMESTAMPTZ) IS NULL
          OR t.created_at < CAST(:cursor_ts AS TIMESTAMPTZ)
          OR (
              t.created_at = CAST(:cursor_ts AS TIMESTAMPTZ)
              AND t.id < CAST(:cursor_id AS TEXT)
          )
      )
    ORDER BY t.created_at DESC, t.id DESC
    LIMIT :limit
""")

_STATS_SQL = text("""
    SELECT COUNT(*) AS total_transactions,
           COALESCE(SUM(amount), 0) AS total_volume,
           COALESCE(SUM(platform_fee), 0) AS platform_revenue
    FROM transactions
    WHERE status = 'COMPLETED'
""")

_RECENT_COMPLETED_SQL = text(f"""
    SELECT {_JOINED_COLUMNS} {_FROM_JOINED}
    WHERE t.status = 'COMPLETED'
    ORDER BY t.created_at DESC, t.id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_tx(row: Any) -> Transaction:
    return Transaction(
        id=str(row.id),
        order_id=str(row.order_id),
        amount=row.amount,
        platform_fee=row.platform_fee,
        net_amount=row.net_amount,
        status=row.status,
        tx_signature=row.tx_signature,
        fee_tx_signature=row.fee_tx_signature,
        payment_method=row.payment_method,
        processed_at=row.processed_at,
        created_at=row.created_at,
        listing_title=getattr(row, "listing_title", None),
        buyer_name=getattr(row, "buyer_name", None),
        seller_name=getattr(row, "seller_name", None),
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TransactionRepository:
    """Concrete repository, caller owns the transaction."""

    async def save(self, db: AsyncSession, tx: Transaction) -> None:
        await db.execute(
            _INSERT_TX_SQL,
            {
                "id": tx.id,
                "order_id": tx.order_id,
                "amount": tx.amount,
                "platform_fee": tx.platform_fee,
                "net_amount": tx.net_amount,
                "status": tx.status,
                "tx_signature": tx.tx_signature,
                "fee_tx_signature": tx.fee_tx_signature,
                "payment_method": tx.payment_method,
                "processed_at": tx.processed_at,
                "created_at": tx.created_at,
            },
        )

    async def get_by_order_id(self, db: AsyncSession, order_id: str) -> Transaction | None:
        result = await db.execute(_GET_BY_ORDER_SQL, {"order_id": order_id})
        row = result.fetchone()
        return _row_to_tx(row) if row else None

    async def get_by_order_id_for_update(
        self, db: AsyncSession, order_id: str
    ) -> Transaction | None:
        result = await db.execute(_GET_BY_ORDER_FOR_UPDATE_SQL, {"order_id": order_id})
        row = result.fetchone()
        return _row_to_tx(row) if row else None

    async def mark_completed(
        self,
        db: AsyncSession,
        tx_id: str,
        processed_at: datetime,
        tx_signature: str | None,
        fee_tx_signature: str | None,
        payment_method: str | None,
    ) -> Transaction | None:
        result = await db.execute(
            _MARK_COMPLETED_SQL,
            {
                "id": tx_id,
                "processed_at": processed_at,
                "tx_signature": tx_signature,
                "fee_tx_signature": fee_tx_signature,
                "payment_method": payment_method,
            },
        )
        row = result.fetchone()
        return _row_to_tx(row) if row else None

    async def list_by_party(
        self,
        db: AsyncSession,
        agent_id: str,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Transaction]:
        result = await db.execute(
            _LIST_BY_PARTY_SQL,
            {"agent_id": agent_id, "cursor_ts": cursor_ts, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_tx(row) for row in result.fetchall()]

    async def stats(self, db: AsyncSession) -> PlatformStats:
        result = await db.execute(_STATS_SQL)
        row = result.fetchone()
        return PlatformStats(
            total_transactions=int(row.total_transactions),
            total_volume=Decimal(row.total_volume),
            platform_revenue=Decimal(row.platform_revenue),
        )

    async def list_recent_completed(self, db: AsyncSession, limit: int) -> list[Transaction]:
        result = await db.execute(_RECENT_COMPLETED_SQL, {"limit": limit})
        return [_row_to_tx(row) for row in result.fetchall()]
