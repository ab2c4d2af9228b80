"""PaymentService: USDC-on-Solana payment instructions and payment proof.

No funds move through the platform. The buyer pays the seller and the
platform wallet directly, then submits the transfer signatures, which are
recorded as-is and complete the order.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.repository import AgentRepositoryProtocol
from src.am_agent.infrastructure.persistence import AgentRepository
from src.am_common.datetime_utils import utc_now
from src.am_common.errors import (
    AgentNotFoundError,
    InvalidWalletAddressError,
    NotOrderBuyerError,
    NotOrderPartyError,
    OrderNotFoundError,
    OrderNotPayableError,
    PaymentAlreadySubmittedError,
)
from src.am_common.money import calculate_net
from src.am_listing.domain.repository import ListingRepositoryProtocol
from src.am_listing.infrastructure.persistence import ListingRepository
from src.am_order.application.schemas import OrderResponse
from src.am_order.domain.repository import OrderRepositoryProtocol
from src.am_order.domain.state import PAYABLE_STATUSES
from src.am_order.infrastructure.persistence import OrderRepository
from src.am_settlement.application.payment_schemas import (
    PaidSignatures,
    PartyWallet,
    PaymentBreakdown,
    PaymentDetails,
    PaymentInstructionsResponse,
    PaymentOrderRef,
    PaymentReceipt,
    PayoutInstruction,
    PlatformInfoResponse,
    SubmitPaymentRequest,
    SubmitPaymentResponse,
    WalletResponse,
)
from src.am_settlement.domain.completion import settle_order
from src.am_settlement.domain.models import SOLSCAN_BASE, PaymentProof
from src.am_settlement.domain.repository import TransactionRepositoryProtocol
from src.am_settlement.domain.wallet import is_valid_solana_address
from src.am_settlement.infrastructure.persistence import TransactionRepository

logger = logging.getLogger(__name__)

PAYMENT_CURRENCY = "USDC"
PAYMENT_NETWORK = "Solana"
PLATFORM_NAME = "AgentMarket Platform"


@dataclass(frozen=True)
class PaymentRail:
    """Static payment-rail settings shown to buyers."""

    fee_percent: Decimal
    platform_wallet: str
    network_id: str
    usdc_mint: str


class PaymentService:
    def __init__(
        self,
        rail: PaymentRail,
        orders: OrderRepositoryProtocol | None = None,
        transactions: TransactionRepositoryProtocol | None = None,
        listings: ListingRepositoryProtocol | None = None,
        agents: AgentRepositoryProtocol | None = None,
    ) -> None:
        self._rail = rail
        self._orders: OrderRepositoryProtocol = orders or OrderRepository()
        self._transactions: TransactionRepositoryProtocol = (
            transactions or TransactionRepository()
        )
        self._listings: ListingRepositoryProtocol = listings or ListingRepository()
        self._agents: AgentRepositoryProtocol = agents or AgentRepository()

    def get_platform_info(self) -> PlatformInfoResponse:
        return PlatformInfoResponse(
            currency=PAYMENT_CURRENCY,
            network=PAYMENT_NETWORK,
            network_id=self._rail.network_id,
            usdc_mint=self._rail.usdc_mint,
            platform_fee_percent=self._rail.fee_percent,
            platform_wallet=self._rail.platform_wallet or None,
            explorer_base=SOLSCAN_BASE,
        )

    async def get_instructions(
        self, db: AsyncSession, order_id: str, agent_id: str
    ) -> PaymentInstructionsResponse:
        """Who the buyer pays and how much. Read-only."""
        order = await self._orders.get_by_id(db, order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not order.is_party(agent_id):
            raise NotOrderPartyError()
        tx = await self._transactions.get_by_order_id(db, order_id)

        seller_amount = calculate_net(order.amount, order.platform_fee)
        seller_wallet = order.seller.wallet_address if order.seller else None
        platform_wallet = self._rail.platform_wallet or None

        instructions = [
            PayoutInstruction(
                label="Pay seller",
                to=seller_wallet,
                to_name=order.seller.name if order.seller else None,
                amount=seller_amount,
                currency=PAYMENT_CURRENCY,
                note=None if seller_wallet else "Seller has not set up their wallet yet",
            ),
            PayoutInstruction(
                label=f"Platform fee ({self._rail.fee_percent}%)",
                to=platform_wallet,
                to_name=PLATFORM_NAME,
                amount=order.platform_fee,
                currency=PAYMENT_CURRENCY,
                note=None if platform_wallet else "Platform wallet not configured",
            ),
        ]

        already_paid = None
        if tx is not None and tx.has_payment_proof:
            already_paid = PaidSignatures(
                tx_signature=tx.tx_signature, fee_tx_signature=tx.fee_tx_signature
            )

        return PaymentInstructionsResponse(
            order=PaymentOrderRef(
                id=order.id,
                status=order.status,
                listing=order.listing.title if order.listing else None,
            ),
            payment=PaymentDetails(
                currency=PAYMENT_CURRENCY,
                network=PAYMENT_NETWORK,
                total_amount=order.total_amount,
                breakdown=PaymentBreakdown(
                    seller_amount=seller_amount,
                    platform_fee=order.platform_fee,
                    fee_percent=self._rail.fee_percent,
                ),
                instructions=instructions,
            ),
            buyer=PartyWallet(
                name=order.buyer.name if order.buyer else None,
                wallet_address=order.buyer.wallet_address if order.buyer else None,
            ),
            seller=PartyWallet(
                name=order.seller.name if order.seller else None,
                wallet_address=seller_wallet,
            ),
            already_paid=already_paid,
        )

    async def submit_payment(
        self, db: AsyncSession, order_id: str, agent_id: str, req: SubmitPaymentRequest
    ) -> SubmitPaymentResponse:
        """Record the buyer's payment proof and complete the order in one transaction."""
        proof = PaymentProof(tx_signature=req.tx_signature, fee_tx_signature=req.fee_tx_signature)
        try:
            order = await self._orders.get_for_update(db, order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            if order.buyer_id != agent_id:
                raise NotOrderBuyerError()
            existing = await self._transactions.get_by_order_id(db, order_id)
            if existing is not None and existing.has_payment_proof:
                raise PaymentAlreadySubmittedError(order_id)
            if order.status not in PAYABLE_STATUSES:
                raise OrderNotPayableError(order_id, order.status)

            tx = await settle_order(
                db,
                order,
                orders=self._orders,
                transactions=self._transactions,
                listings=self._listings,
                agents=self._agents,
                now=utc_now(),
                proof=proof,
            )
            updated = await self._orders.get_by_id(db, order_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Payment recorded: order=%s tx=%s sig=%s", order_id, tx.id, proof.tx_signature)
        return SubmitPaymentResponse(
            order=OrderResponse.from_domain(updated or order, tx),
            payment=PaymentReceipt(
                status="completed",
                tx_signature=proof.tx_signature,
                fee_tx_signature=proof.fee_tx_signature,
                explorer_url=proof.explorer_url,
            ),
        )

    async def set_wallet_address(
        self, db: AsyncSession, agent_id: str, wallet_address: str
    ) -> WalletResponse:
        if not is_valid_solana_address(wallet_address):
            raise InvalidWalletAddressError()
        try:
            agent = await self._agents.set_wallet_address(db, agent_id, wallet_address)
            if agent is None:
                raise AgentNotFoundError(agent_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Wallet set: agent=%s", agent_id)
        return WalletResponse(id=agent.id, name=agent.name, wallet_address=agent.wallet_address)
