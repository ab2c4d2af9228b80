"""Pydantic schemas for the USDC-on-Solana payment endpoints."""

from decimal import Decimal

from pydantic import Field

from src.am_common.schemas import CamelModel
from src.am_order.application.schemas import OrderResponse


class SetWalletRequest(CamelModel):
    wallet_address: str = Field(..., min_length=32, max_length=44)


class WalletResponse(CamelModel):
    id: str
    name: str
    wallet_address: str | None


class SubmitPaymentRequest(CamelModel):
    tx_signature: str = Field(..., min_length=80, max_length=100)
    fee_tx_signature: str | None = Field(None, min_length=80, max_length=100)


class PlatformInfoResponse(CamelModel):
    currency: str
    network: str
    network_id: str
    usdc_mint: str
    platform_fee_percent: Decimal
    platform_wallet: str | None
    explorer_base: str


class PaymentOrderRef(CamelModel):
    id: str
    status: str
    listing: str | None


class PaymentBreakdown(CamelModel):
    seller_amount: Decimal
    platform_fee: Decimal
    fee_percent: Decimal


class PayoutInstruction(CamelModel):
    label: str
    to: str | None
    to_name: str | None
    amount: Decimal
    currency: str
    note: str | None = None


class PaymentDetails(CamelModel):
    currency: str
    network: str
    total_amount: Decimal
    breakdown: PaymentBreakdown
    instructions: list[PayoutInstruction]


class PartyWallet(CamelModel):
    name: str | None
    wallet_address: str | None


class PaidSignatures(CamelModel):
    tx_signature: str
    fee_tx_signature: str | None


class PaymentInstructionsResponse(CamelModel):
    order: PaymentOrderRef
    payment: PaymentDetails
    buyer: PartyWallet
    seller: PartyWallet
    already_paid: PaidSignatures | None


class PaymentReceipt(CamelModel):
    status: str
    tx_signature: str
    fee_tx_signature: str | None
    explorer_url: str


class SubmitPaymentResponse(CamelModel):
    order: OrderResponse
    payment: PaymentReceipt
