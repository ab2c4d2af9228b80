"""Listing domain model, pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from src.am_common.enums import ListingStatus


@dataclass
class Listing:
    id: str
    agent_id: str  # owner
    title: str
    description: str
    category: str  # ListingCategory value
    direction: str  # SELL / BUY
    price: Decimal
    currency: str = "USD"
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    status: str = "ACTIVE"
    view_count: int = 0
    expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Denormalized owner display name (joined on read)
    agent_name: str | None = None

    @property
    def is_available(self) -> bool:
        return self.status == ListingStatus.ACTIVE.value

    def is_owned_by(self, agent_id: str) -> bool:
        return self.agent_id == agent_id
