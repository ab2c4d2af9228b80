"""Unit tests for PaymentService using mock repositories."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.am_agent.domain.models import Agent, AgentSummary
from src.am_common.errors import (
    AgentNotFoundError,
    BadRequestError,
    ForbiddenError,
    InvalidWalletAddressError,
    NotOrderBuyerError,
    NotOrderPartyError,
    OrderNotFoundError,
    OrderNotPayableError,
    PaymentAlreadySubmittedError,
)
from src.am_order.domain.models import ListingSummary, Order
from src.am_settlement.application.payment_schemas import SubmitPaymentRequest
from src.am_settlement.application.payment_service import PaymentRail, PaymentService
from src.am_settlement.domain.models import Transaction

SIG = "5" * 88
FEE_SIG = "6" * 88
WALLET = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"


def _make_order(
    status: str = "VERIFIED", seller_wallet: str | None = None, buyer_wallet: str | None = None
) -> Order:
    return Order(
        id="order-1",
        listing_id="listing-1",
        buyer_id="buyer-1",
        seller_id="seller-1",
        amount=Decimal("100"),
        platform_fee=Decimal("1"),
        total_amount=Decimal("101"),
        status=status,
        buyer_verified=status != "PENDING_VERIFICATION",
        seller_verified=status != "PENDING_VERIFICATION",
        verification_hash="ef" * 32,
        created_at=datetime.now(UTC),
        listing=ListingSummary(id="listing-1", title="Scraper API", category="API_SERVICE", direction="SELL"),
        buyer=AgentSummary(id="buyer-1", name="Buyer Bot", wallet_address=buyer_wallet),
        seller=AgentSummary(id="seller-1", name="Seller Bot", wallet_address=seller_wallet),
    )


def _make_tx(tx_signature: str | None = None) -> Transaction:
    return Transaction(
        id="tx-1",
        order_id="order-1",
        amount=Decimal("100"),
        platform_fee=Decimal("1"),
        net_amount=Decimal("99"),
        status="COMPLETED" if tx_signature else "PENDING",
        tx_signature=tx_signature,
        fee_tx_signature=FEE_SIG if tx_signature else None,
    )


class _Repos:
    def __init__(self) -> None:
        self.orders = AsyncMock()
        self.transactions = AsyncMock()
        self.listings = AsyncMock()
        self.agents = AsyncMock()

    def service(self, platform_wallet: str = "") -> PaymentService:
        rail = PaymentRail(
            fee_percent=Decimal("1"),
            platform_wallet=platform_wallet,
            network_id="mainnet-beta",
            usdc_mint="EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
        )
        return PaymentService(
            rail,
            orders=self.orders,
            transactions=self.transactions,
            listings=self.listings,
            agents=self.agents,
        )


@pytest.fixture
def repos() -> _Repos:
    return _Repos()


@pytest.fixture
def db() -> AsyncMock:
    return AsyncMock()


class TestPlatformInfo:
    def test_without_platform_wallet(self, repos: _Repos) -> None:
        info = repos.service().get_platform_info()
        assert info.currency == "USDC"
        assert info.network == "Solana"
        assert info.network_id == "mainnet-beta"
        assert info.platform_fee_percent == Decimal("1")
        assert info.platform_wallet is None
        assert info.explorer_base == "https://solscan.io"

    def test_with_platform_wallet(self, repos: _Repos) -> None:
        assert repos.service(WALLET).get_platform_info().platform_wallet == WALLET


class TestInstructions:
    async def test_breakdown_and_missing_wallet_notes(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_by_id.return_value = _make_order()
        repos.transactions.get_by_order_id.return_value = None

        result = await repos.service().get_instructions(db, "order-1", "buyer-1")

        assert result.payment.total_amount == Decimal("101")
        assert result.payment.breakdown.seller_amount == Decimal("99")
        assert result.payment.breakdown.platform_fee == Decimal("1")
        seller_leg, fee_leg = result.payment.instructions
        assert seller_leg.label == "Pay seller"
        assert seller_leg.to is None
        assert seller_leg.amount == Decimal("99")
        assert seller_leg.note == "Seller has not set up their wallet yet"
        assert fee_leg.label == "Platform fee (1%)"
        assert fee_leg.to is None
        assert fee_leg.amount == Decimal("1")
        assert fee_leg.note == "Platform wallet not configured"
        assert result.already_paid is None
        assert result.order.listing == "Scraper API"

    async def test_wallets_present(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_by_id.return_value = _make_order(seller_wallet=WALLET)
        repos.transactions.get_by_order_id.return_value = None

        result = await repos.service(platform_wallet=WALLET).get_instructions(
            db, "order-1", "seller-1"
        )

        seller_leg, fee_leg = result.payment.instructions
        assert seller_leg.to == WALLET and seller_leg.note is None
        assert fee_leg.to == WALLET and fee_leg.note is None
        assert result.seller.wallet_address == WALLET
        assert result.buyer.wallet_address is None

    async def test_already_paid(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_by_id.return_value = _make_order(status="COMPLETED")
        repos.transactions.get_by_order_id.return_value = _make_tx(SIG)

        result = await repos.service().get_instructions(db, "order-1", "buyer-1")

        assert result.already_paid is not None
        assert result.already_paid.tx_signature == SIG
        assert result.already_paid.fee_tx_signature == FEE_SIG

    async def test_outsider_is_forbidden(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_by_id.return_value = _make_order()
        with pytest.raises(NotOrderPartyError):
            await repos.service().get_instructions(db, "order-1", "stranger")

    async def test_missing_order(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_by_id.return_value = None
        with pytest.raises(OrderNotFoundError):
            await repos.service().get_instructions(db, "order-1", "buyer-1")


class TestSubmitPayment:
    def _ready(self, repos: _Repos) -> None:
        repos.orders.get_for_update.return_value = _make_order()
        repos.orders.mark_completed.return_value = True
        repos.orders.get_by_id.return_value = _make_order(status="COMPLETED")
        repos.transactions.get_by_order_id.return_value = None
        repos.transactions.get_by_order_id_for_update.return_value = None

    async def test_records_proof_and_completes(self, repos: _Repos, db: AsyncMock) -> None:
        self._ready(repos)

        result = await repos.service().submit_payment(
            db,
            "order-1",
            "buyer-1",
            SubmitPaymentRequest(tx_signature=SIG, fee_tx_signature=FEE_SIG),
        )

        saved: Transaction = repos.transactions.save.call_args[0][1]
        assert saved.tx_signature == SIG
        assert saved.fee_tx_signature == FEE_SIG
        assert saved.payment_method == "USDC_SOLANA"
        assert saved.status == "COMPLETED"
        assert saved.net_amount == Decimal("99")
        assert repos.agents.increment_trade_count.await_count == 2
        repos.listings.mark_sold.assert_awaited_once_with(db, "listing-1")
        db.commit.assert_awaited_once()

        assert result.order.status == "COMPLETED"
        assert result.payment.status == "completed"
        assert result.payment.explorer_url == f"https://solscan.io/tx/{SIG}"
        assert result.order.transaction is not None

    async def test_attaches_proof_to_existing_transaction(
        self, repos: _Repos, db: AsyncMock
    ) -> None:
        self._ready(repos)
        repos.transactions.get_by_order_id.return_value = _make_tx()
        repos.transactions.get_by_order_id_for_update.return_value = _make_tx()
        repos.transactions.mark_completed.return_value = _make_tx(SIG)

        await repos.service().submit_payment(
            db, "order-1", "buyer-1", SubmitPaymentRequest(tx_signature=SIG)
        )

        repos.transactions.save.assert_not_awaited()
        args = repos.transactions.mark_completed.await_args.args
        assert args[1] == "tx-1"
        assert args[3] == SIG
        assert args[5] == "USDC_SOLANA"

    async def test_only_buyer_may_pay(self, repos: _Repos, db: AsyncMock) -> None:
        self._ready(repos)

        with pytest.raises(NotOrderBuyerError) as exc_info:
            await repos.service().submit_payment(
                db, "order-1", "seller-1", SubmitPaymentRequest(tx_signature=SIG)
            )

        assert isinstance(exc_info.value, ForbiddenError)
        repos.orders.mark_completed.assert_not_awaited()
        db.rollback.assert_awaited_once()

    async def test_second_proof_rejected(self, repos: _Repos, db: AsyncMock) -> None:
        self._ready(repos)
        repos.orders.get_for_update.return_value = _make_order(status="COMPLETED")
        repos.transactions.get_by_order_id.return_value = _make_tx(SIG)

        with pytest.raises(PaymentAlreadySubmittedError) as exc_info:
            await repos.service().submit_payment(
                db, "order-1", "buyer-1", SubmitPaymentRequest(tx_signature=SIG)
            )
        assert isinstance(exc_info.value, BadRequestError)
        repos.transactions.save.assert_not_awaited()

    @pytest.mark.parametrize("status", ["PENDING_VERIFICATION", "CANCELLED", "COMPLETED"])
    async def test_order_must_be_payable(
        self, repos: _Repos, db: AsyncMock, status: str
    ) -> None:
        self._ready(repos)
        repos.orders.get_for_update.return_value = _make_order(status=status)

        with pytest.raises(OrderNotPayableError):
            await repos.service().submit_payment(
                db, "order-1", "buyer-1", SubmitPaymentRequest(tx_signature=SIG)
            )
        repos.orders.mark_completed.assert_not_awaited()

    async def test_missing_order(self, repos: _Repos, db: AsyncMock) -> None:
        repos.orders.get_for_update.return_value = None
        with pytest.raises(OrderNotFoundError):
            await repos.service().submit_payment(
                db, "order-1", "buyer-1", SubmitPaymentRequest(tx_signature=SIG)
            )


class TestSetWallet:
    async def test_valid_address_saved(self, repos: _Repos, db: AsyncMock) -> None:
        repos.agents.set_wallet_address.return_value = Agent(
            id="agent-1", name="Bot", status="VERIFIED", wallet_address=WALLET
        )

        result = await repos.service().set_wallet_address(db, "agent-1", WALLET)

        assert result.wallet_address == WALLET
        repos.agents.set_wallet_address.assert_awaited_once_with(db, "agent-1", WALLET)
        db.commit.assert_awaited_once()

    @pytest.mark.parametrize(
        "address",
        [
            "0" * 40,  # '0' is not base58
            "O" * 40,  # neither is 'O'
            "abc",
            "1" * 45,
            "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAs!",
        ],
    )
    async def test_invalid_address_rejected(
        self, repos: _Repos, db: AsyncMock, address: str
    ) -> None:
        with pytest.raises(InvalidWalletAddressError):
            await repos.service().set_wallet_address(db, "agent-1", address)
        repos.agents.set_wallet_address.assert_not_awaited()

    async def test_unknown_agent(self, repos: _Repos, db: AsyncMock) -> None:
        repos.agents.set_wallet_address.return_value = None
        with pytest.raises(AgentNotFoundError):
            await repos.service().set_wallet_address(db, "ghost", WALLET)
        db.rollback.assert_awaited_once()
