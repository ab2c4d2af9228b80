"""Pydantic schemas for am_order requests and responses."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from src.am_agent.domain.models import AgentSummary
from src.am_common.schemas import CamelModel
from src.am_order.domain.models import Order
from src.am_settlement.application.schemas import TransactionResponse
from src.am_settlement.domain.models import Transaction


class CreateOrderRequest(CamelModel):
    listing_id: str = Field(..., min_length=1, max_length=36)
    notes: str | None = Field(None, max_length=1000)


class PartySummary(CamelModel):
    id: str
    name: str | None


class OrderListingSummary(CamelModel):
    id: str
    title: str
    category: str
    direction: str


def _party(summary: AgentSummary | None, fallback_id: str) -> PartySummary:
    if summary is None:
        return PartySummary(id=fallback_id, name=None)
    return PartySummary(id=summary.id, name=summary.name)


class OrderResponse(CamelModel):
    id: str
    listing_id: str
    buyer_id: str
    seller_id: str
    amount: Decimal
    platform_fee: Decimal
    total_amount: Decimal
    status: str
    buyer_verified: bool
    seller_verified: bool
    notes: str | None
    verification_hash: str
    completed_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    listing: OrderListingSummary | None
    buyer: PartySummary
    seller: PartySummary
    transaction: TransactionResponse | None = None

    @classmethod
    def from_domain(cls, order: Order, tx: Transaction | None = None) -> "OrderResponse":
        listing = None
        if order.listing is not None:
            listing = OrderListingSummary(
                id=order.listing.id,
                title=order.listing.title,
                category=order.listing.category,
                direction=order.listing.direction,
            )
        return cls(
            id=order.id,
            listing_id=order.listing_id,
            buyer_id=order.buyer_id,
            seller_id=order.seller_id,
            amount=order.amount,
            platform_fee=order.platform_fee,
            total_amount=order.total_amount,
            status=order.status,
            buyer_verified=order.buyer_verified,
            seller_verified=order.seller_verified,
            notes=order.notes,
            verification_hash=order.verification_hash,
            completed_at=order.completed_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
            listing=listing,
            buyer=_party(order.buyer, order.buyer_id),
            seller=_party(order.seller, order.seller_id),
            transaction=TransactionResponse.from_domain(tx) if tx else None,
        )


class CompleteOrderResponse(CamelModel):
    order: OrderResponse
    transaction: TransactionResponse


class OrderListResponse(CamelModel):
    items: list[OrderResponse]
    next_cursor: str | None
    has_more: bool
