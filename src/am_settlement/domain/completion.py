"""Order completion bundle.

Completing an order touches four tables: the order goes COMPLETED, its
transaction is created (or an existing one finalized), both agents' trade
counters go up by one, and the listing goes SOLD. ``settle_order`` issues all
of it on the caller's session; the caller commits or rolls back the whole
bundle.

The first statement is the order's status compare-and-swap. When two requests
race to complete the same order, the second one matches zero rows there and
raises before any other write, so the rest of the bundle runs at most once.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.repository import AgentRepositoryProtocol
from src.am_common.enums import PaymentMethod, TransactionStatus
from src.am_common.errors import OrderNotCompletableError, PaymentAlreadySubmittedError
from src.am_common.id_generator import generate_id
from src.am_common.money import calculate_net
from src.am_listing.domain.repository import ListingRepositoryProtocol
from src.am_order.domain.models import Order
from src.am_order.domain.repository import OrderRepositoryProtocol
from src.am_order.domain.state import can_complete
from src.am_settlement.domain.models import PaymentProof, Transaction
from src.am_settlement.domain.repository import TransactionRepositoryProtocol

logger = logging.getLogger(__name__)


async def settle_order(
    db: AsyncSession,
    order: Order,
    *,
    orders: OrderRepositoryProtocol,
    transactions: TransactionRepositoryProtocol,
    listings: ListingRepositoryProtocol,
    agents: AgentRepositoryProtocol,
    now: datetime,
    proof: PaymentProof | None = None,
) -> Transaction:
    """Run the completion bundle for ``order`` and return its transaction.

    ``order`` must have been read with ``get_for_update`` in the same session.
    Raises OrderNotCompletableError when the order is not VERIFIED/IN_PROGRESS
    with both flags set, including when a concurrent completion won the race.
    """
    if not can_complete(order.status, order.buyer_verified, order.seller_verified):
        raise OrderNotCompletableError(order.id, order.status)

    # Step 1: status CAS. Zero rows means someone else completed it first.
    if not await orders.mark_completed(db, order.id, now):
        raise OrderNotCompletableError(order.id, order.status)

    # Step 2: transaction row
    payment_method = PaymentMethod.USDC_SOLANA.value if proof else None
    tx_signature = proof.tx_signature if proof else None
    fee_tx_signature = proof.fee_tx_signature if proof else None

    existing = await transactions.get_by_order_id_for_update(db, order.id)
    if existing is None:
        tx = Transaction(
            id=generate_id(),
            order_id=order.id,
            amount=order.amount,
            platform_fee=order.platform_fee,
            net_amount=calculate_net(order.amount, order.platform_fee),
            status=TransactionStatus.COMPLETED.value,
            tx_signature=tx_signature,
            fee_tx_signature=fee_tx_signature,
            payment_method=payment_method,
            processed_at=now,
            created_at=now,
        )
        await transactions.save(db, tx)
    else:
        if proof is not None and existing.has_payment_proof:
            raise PaymentAlreadySubmittedError(order.id)
        updated = await transactions.mark_completed(
            db, existing.id, now, tx_signature, fee_tx_signature, payment_method
        )
        tx = updated or existing

    # Step 3: trade counters, one per party
    await agents.increment_trade_count(db, order.buyer_id)
    await agents.increment_trade_count(db, order.seller_id)

    # Step 4: listing leaves the market
    await listings.mark_sold(db, order.listing_id)

    logger.info(
        "Order settled: order=%s tx=%s amount=%s fee=%s proof=%s",
        order.id, tx.id, order.amount, order.platform_fee, proof is not None,
    )
    return tx
