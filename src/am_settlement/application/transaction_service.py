"""TransactionApplicationService: read side of settlement."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_common.schemas import cursor_decode, cursor_encode
from src.am_settlement.application.schemas import (
    PlatformStatsResponse,
    TransactionListResponse,
    TransactionResponse,
)
from src.am_settlement.domain.repository import TransactionRepositoryProtocol
from src.am_settlement.infrastructure.persistence import TransactionRepository

RECENT_TRANSACTIONS_LIMIT = 10


class TransactionApplicationService:
    def __init__(self, repo: TransactionRepositoryProtocol | None = None) -> None:
        self._repo: TransactionRepositoryProtocol = repo or TransactionRepository()

    async def list_transactions(
        self, db: AsyncSession, agent_id: str, cursor: str | None, limit: int
    ) -> TransactionListResponse:
        cursor_ts, cursor_id = cursor_decode(cursor)
        rows = await self._repo.list_by_party(db, agent_id, cursor_ts, cursor_id, limit + 1)
        has_more = len(rows) > limit
        page = rows[:limit]

        next_cursor = None
        if has_more and page and page[-1].created_at is not None:
            next_cursor = cursor_encode(page[-1].created_at, page[-1].id)
        return TransactionListResponse(
            items=[TransactionResponse.from_domain(tx) for tx in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def platform_stats(self, db: AsyncSession) -> PlatformStatsResponse:
        """Completed count, volume, revenue and the latest completed transactions."""
        stats = await self._repo.stats(db)
        recent = await self._repo.list_recent_completed(db, RECENT_TRANSACTIONS_LIMIT)
        return PlatformStatsResponse(
            total_transactions=stats.total_transactions,
            total_volume=stats.total_volume,
            platform_revenue=stats.platform_revenue,
            recent_transactions=[TransactionResponse.from_domain(tx) for tx in recent],
        )
