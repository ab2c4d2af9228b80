# src/am_order/domain/repository.py
"""OrderRepository Protocol, interface contract for persistence layer."""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_order.domain.models import Order


class OrderRepositoryProtocol(Protocol):
    async def save(self, db: AsyncSession, order: Order) -> None: ...

    async def get_by_id(self, db: AsyncSession, order_id: str) -> Order | None: ...

    async def get_for_update(self, db: AsyncSession, order_id: str) -> Order | None: ...

    async def mark_verified(self, db: AsyncSession, order_id: str, role: str) -> bool: ...

    async def mark_completed(
        self, db: AsyncSession, order_id: str, completed_at: datetime
    ) -> bool: ...

    async def mark_cancelled(self, db: AsyncSession, order_id: str) -> bool: ...

    async def list_by_party(
        self,
        db: AsyncSession,
        agent_id: str,
        status: str | None,
        cursor_ts: datetime | None,
        cursor_id: str | None,
        limit: int,
    ) -> list[Order]: ...
