"""Pydantic schemas for transaction reads."""

from datetime import datetime
from decimal import Decimal

from src.am_common.schemas import CamelModel
from src.am_settlement.domain.models import Transaction


class TransactionOrderSummary(CamelModel):
    listing_title: str | None
    buyer_name: str | None
    seller_name: str | None


class TransactionResponse(CamelModel):
    id: str
    order_id: str
    amount: Decimal
    platform_fee: Decimal
    net_amount: Decimal
    status: str
    tx_signature: str | None
    fee_tx_signature: str | None
    payment_method: str | None
    processed_at: datetime | None
    created_at: datetime | None
    order: TransactionOrderSummary | None = None

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionResponse":
        summary = None
        if tx.listing_title is not None:
            summary = TransactionOrderSummary(
                listing_title=tx.listing_title,
                buyer_name=tx.buyer_name,
                seller_name=tx.seller_name,
            )
        return cls(
            id=tx.id,
            order_id=tx.order_id,
            amount=tx.amount,
            platform_fee=tx.platform_fee,
            net_amount=tx.net_amount,
            status=tx.status,
            tx_signature=tx.tx_signature,
            fee_tx_signature=tx.fee_tx_signature,
            payment_method=tx.payment_method,
            processed_at=tx.processed_at,
            created_at=tx.created_at,
            order=summary,
        )


class TransactionListResponse(CamelModel):
    items: list[TransactionResponse]
    next_cursor: str | None
    has_more: bool


class PlatformStatsResponse(CamelModel):
    total_transactions: int
    total_volume: Decimal
    platform_revenue: Decimal
    recent_transactions: list[TransactionResponse]
