"""Order domain model, pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.am_agent.domain.models import AgentSummary


@dataclass
class ListingSummary:
    id: str
    title: str
    category: str
    direction: str  # SELL / BUY


@dataclass
class Order:
    id: str
    listing_id: str
    buyer_id: str
    seller_id: str
    # Money is snapshotted at creation and never recomputed
    amount: Decimal
    platform_fee: Decimal
    total_amount: Decimal
    status: str = "PENDING_VERIFICATION"
    buyer_verified: bool = False
    seller_verified: bool = False
    notes: str | None = None
    verification_hash: str = ""
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Joined on read
    listing: ListingSummary | None = None
    buyer: AgentSummary | None = None
    seller: AgentSummary | None = None

    def is_party(self, agent_id: str) -> bool:
        return agent_id in (self.buyer_id, self.seller_id)

    def role_of(self, agent_id: str) -> str | None:
        """'BUYER', 'SELLER' or None for outsiders."""
        if agent_id == self.buyer_id:
            return "BUYER"
        if agent_id == self.seller_id:
            return "SELLER"
        return None

    def has_verified(self, role: str) -> bool:
        return self.buyer_verified if role == "BUYER" else self.seller_verified

    @property
    def is_fully_verified(self) -> bool:
        return self.buyer_verified and self.seller_verified
