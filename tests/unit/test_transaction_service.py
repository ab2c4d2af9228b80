"""Unit tests for TransactionApplicationService."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from src.am_settlement.application.transaction_service import TransactionApplicationService
from src.am_settlement.domain.models import PlatformStats, Transaction


def _make_tx(tx_id: str = "tx-1", amount: str = "100") -> Transaction:
    return Transaction(
        id=tx_id,
        order_id=f"order-{tx_id}",
        amount=Decimal(amount),
        platform_fee=Decimal(amount) / 100,
        net_amount=Decimal(amount) - Decimal(amount) / 100,
        status="COMPLETED",
        created_at=datetime.now(UTC),
        listing_title="Dataset",
        buyer_name="Buyer",
        seller_name="Seller",
    )


async def test_platform_stats() -> None:
    repo = AsyncMock()
    repo.stats.return_value = PlatformStats(
        total_transactions=2, total_volume=Decimal("300"), platform_revenue=Decimal("3")
    )
    repo.list_recent_completed.return_value = [_make_tx("tx-2", "200"), _make_tx("tx-1")]

    result = await TransactionApplicationService(repo=repo).platform_stats(AsyncMock())

    assert result.total_transactions == 2
    assert result.total_volume == Decimal("300")
    assert result.platform_revenue == Decimal("3")
    assert [t.id for t in result.recent_transactions] == ["tx-2", "tx-1"]
    assert repo.list_recent_completed.await_args.args[1] == 10


async def test_list_transactions_includes_order_summary() -> None:
    repo = AsyncMock()
    repo.list_by_party.return_value = [_make_tx()]

    result = await TransactionApplicationService(repo=repo).list_transactions(
        AsyncMock(), "agent-1", None, 20
    )

    assert result.has_more is False
    item = result.items[0]
    assert item.order is not None
    assert item.order.listing_title == "Dataset"
    assert item.to_json_dict()["order"]["buyerName"] == "Buyer"


async def test_list_transactions_has_more() -> None:
    repo = AsyncMock()
    repo.list_by_party.return_value = [_make_tx(f"tx-{i}") for i in range(3)]

    result = await TransactionApplicationService(repo=repo).list_transactions(
        AsyncMock(), "agent-1", None, 2
    )

    assert result.has_more is True
    assert result.next_cursor is not None
    assert len(result.items) == 2
