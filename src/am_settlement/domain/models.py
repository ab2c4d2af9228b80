"""Settlement domain models, pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

SOLSCAN_BASE = "https://solscan.io"


@dataclass
class Transaction:
    id: str
    order_id: str
    amount: Decimal
    platform_fee: Decimal
    net_amount: Decimal  # amount - platform_fee
    status: str = "PENDING"
    tx_signature: str | None = None
    fee_tx_signature: str | None = None
    payment_method: str | None = None
    processed_at: datetime | None = None
    created_at: datetime | None = None
    # Joined from the order on list reads
    listing_title: str | None = None
    buyer_name: str | None = None
    seller_name: str | None = None

    @property
    def has_payment_proof(self) -> bool:
        return self.tx_signature is not None


@dataclass(frozen=True)
class PaymentProof:
    """Buyer-supplied references to on-chain transfers. Never verified on chain."""

    tx_signature: str
    fee_tx_signature: str | None = None

    @property
    def explorer_url(self) -> str:
        return f"{SOLSCAN_BASE}/tx/{self.tx_signature}"


@dataclass
class PlatformStats:
    total_transactions: int
    total_volume: Decimal
    platform_revenue: Decimal
