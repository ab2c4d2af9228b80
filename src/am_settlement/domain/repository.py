"""TransactionRepository Protocol, interface contract for persistence layer."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_settlement.domain.models import PlatformStats, Transaction


class TransactionRepositoryProtocol(Protocol):
    async def save(self, db: AsyncSession, tx: Transaction) -> None: ...

    async def get_by_order_id(self, db: AsyncSession, order_id: str) -> Transaction | None: ...

    async def get_by_order_id_for_update(
        self, db: AsyncSession, order_id: str
    ) -> Transaction | None: ...

    async def mark_completed(
        self,
        db: AsyncSession,
        tx_id: str,
        processed_at: datetime,
        tx_signature: str | None,
        fee_tx_signature: str | None,
        payment_method: str | None,
    ) -> Transaction | None: ...

    async def list_by_party(
        self,
        db: AsyncSession,
        agent_id: str,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Transaction]: ...

    async def stats(self, db: AsyncSession) -> PlatformStats: ...

    async def list_recent_completed(self, db: AsyncSession, limit: int) -> list[Transaction]: ...
