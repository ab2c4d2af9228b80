# src/am_order/application/service.py
"""OrderApplicationService: order lifecycle: create, cross-verify, complete, cancel.

Every mutating operation locks the order row first (SELECT ... FOR UPDATE),
re-checks the business rule on the locked row, then applies a conditional
UPDATE. The service owns the DB transaction: commit on success, rollback on
any exception.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.repository import AgentRepositoryProtocol
from src.am_agent.infrastructure.persistence import AgentRepository
from src.am_common.datetime_utils import utc_now
from src.am_common.errors import (
    AlreadyVerifiedError,
    ListingNotAvailableError,
    ListingNotFoundError,
    NotOrderPartyError,
    OrderNotCancellableError,
    OrderNotFoundError,
    OrderNotVerifiableError,
)
from src.am_common.id_generator import generate_id
from src.am_common.schemas import cursor_decode, cursor_encode
from src.am_listing.domain.repository import ListingRepositoryProtocol
from src.am_listing.infrastructure.persistence import ListingRepository
from src.am_order.application.schemas import (
    CompleteOrderResponse,
    CreateOrderRequest,
    OrderListResponse,
    OrderResponse,
)
from src.am_order.domain.models import Order
from src.am_order.domain.parties import resolve_parties, verification_hash
from src.am_order.domain.pricing import FeePolicy
from src.am_order.domain.repository import OrderRepositoryProtocol
from src.am_order.domain.state import can_cancel, can_verify
from src.am_order.infrastructure.persistence import OrderRepository
from src.am_settlement.application.schemas import TransactionResponse
from src.am_settlement.domain.completion import settle_order
from src.am_settlement.domain.repository import TransactionRepositoryProtocol
from src.am_settlement.infrastructure.persistence import TransactionRepository

logger = logging.getLogger(__name__)


class OrderApplicationService:
    def __init__(
        self,
        fee_policy: FeePolicy,
        orders: OrderRepositoryProtocol | None = None,
        listings: ListingRepositoryProtocol | None = None,
        agents: AgentRepositoryProtocol | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
    ) -> None:
        self._fee_policy = fee_policy
        self._orders: OrderRepositoryProtocol = orders or OrderRepository()
        self._listings: ListingRepositoryProtocol = listings or ListingRepository()
        self._agents: AgentRepositoryProtocol = agents or AgentRepository()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    async def create_order(
        self, db: AsyncSession, requester_id: str, req: CreateOrderRequest
    ) -> OrderResponse:
        try:
            listing = await self._listings.get_for_update(db, req.listing_id)
            if listing is None:
                raise ListingNotFoundError(req.listing_id)
            if not listing.is_available:
                raise ListingNotAvailableError(listing.id, listing.status)

            buyer_id, seller_id = resolve_parties(listing, requester_id)
            quote = self._fee_policy.quote(listing.price)
            created_at = utc_now()
            order = Order(
                id=generate_id(),
                listing_id=listing.id,
                buyer_id=buyer_id,
                seller_id=seller_id,
                amount=quote.amount,
                platform_fee=quote.platform_fee,
                total_amount=quote.total_amount,
                notes=req.notes,
                verification_hash=verification_hash(
                    buyer_id, seller_id, listing.id, quote.amount, created_at
                ),
                created_at=created_at,
            )
            await self._orders.save(db, order)
            saved = await self._orders.get_by_id(db, order.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Order created: id=%s listing=%s buyer=%s seller=%s total=%s",
            order.id, listing.id, buyer_id, seller_id, order.total_amount,
        )
        return OrderResponse.from_domain(saved or order)

    # ------------------------------------------------------------------
    # verify
    # ------------------------------------------------------------------

    async def verify_order(self, db: AsyncSession, order_id: str, agent_id: str) -> OrderResponse:
        """Record the caller's attestation. Both attestations promote to VERIFIED."""
        try:
            order = await self._load_for_party(db, order_id, agent_id)
            role = order.role_of(agent_id)
            if not can_verify(order.status):
                raise OrderNotVerifiableError(order.id, order.status)
            if order.has_verified(role):
                raise AlreadyVerifiedError()
            if not await self._orders.mark_verified(db, order.id, role):
                raise AlreadyVerifiedError()
            updated = await self._orders.get_by_id(db, order.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Order verified: id=%s by=%s role=%s status=%s",
            order_id, agent_id, role, updated.status if updated else "?",
        )
        return OrderResponse.from_domain(updated or order)

    # ------------------------------------------------------------------
    # complete
    # ------------------------------------------------------------------

    async def complete_order(
        self, db: AsyncSession, order_id: str, agent_id: str
    ) -> CompleteOrderResponse:
        try:
            order = await self._load_for_party(db, order_id, agent_id)
            tx = await settle_order(
                db,
                order,
                orders=self._orders,
                transactions=self._transactions,
                listings=self._listings,
                agents=self._agents,
                now=utc_now(),
            )
            updated = await self._orders.get_by_id(db, order.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Order completed: id=%s by=%s tx=%s", order_id, agent_id, tx.id)
        return CompleteOrderResponse(
            order=OrderResponse.from_domain(updated or order, tx),
            transaction=TransactionResponse.from_domain(tx),
        )

    # ------------------------------------------------------------------
    # cancel
    # ------------------------------------------------------------------

    async def cancel_order(self, db: AsyncSession, order_id: str, agent_id: str) -> OrderResponse:
        """Cancel from any status except COMPLETED. Listing and agents are untouched."""
        try:
            order = await self._load_for_party(db, order_id, agent_id)
            if not can_cancel(order.status):
                raise OrderNotCancellableError(order.id, order.status)
            if not await self._orders.mark_cancelled(db, order.id):
                raise OrderNotCancellableError(order.id, order.status)
            updated = await self._orders.get_by_id(db, order.id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Order cancelled: id=%s by=%s from=%s", order_id, agent_id, order.status)
        return OrderResponse.from_domain(updated or order)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    async def get_order(self, db: AsyncSession, order_id: str, agent_id: str) -> OrderResponse:
        order = await self._orders.get_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.is_party(agent_id):
            raise NotOrderPartyError()
        tx = await self._transactions.get_by_order_id(db, order_id)
        return OrderResponse.from_domain(order, tx)

    async def list_orders(
        self,
        db: AsyncSession,
        agent_id: str,
        status: str | None,
        cursor: str | None,
        limit: int,
    ) -> OrderListResponse:
        cursor_ts, cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without COUNT(*)
        orders = await self._orders.list_by_party(
            db, agent_id, status, cursor_ts, cursor_id, limit + 1
        )
        has_more = len(orders) > limit
        page = orders[:limit]

        next_cursor = None
        if has_more and page and page[-1].created_at is not None:
            next_cursor = cursor_encode(page[-1].created_at, page[-1].id)
        return OrderListResponse(
            items=[OrderResponse.from_domain(o) for o in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def _load_for_party(self, db: AsyncSession, order_id: str, agent_id: str) -> Order:
        order = await self._orders.get_for_update(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.is_party(agent_id):
            raise NotOrderPartyError()
        return order
