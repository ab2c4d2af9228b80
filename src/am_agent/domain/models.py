"""Domain models for am_agent, pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.am_common.enums import AgentStatus


@dataclass
class Agent:
    id: str
    name: str
    status: str  # AgentStatus value
    total_trades: int = 0
    wallet_address: str | None = None
    email: str | None = None
    verified_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_verified(self) -> bool:
        return self.status == AgentStatus.VERIFIED.value

    @property
    def is_suspended(self) -> bool:
        return self.status == AgentStatus.SUSPENDED.value


@dataclass
class AgentSummary:
    """Denormalized agent view embedded in orders and listings."""

    id: str
    name: str
    wallet_address: str | None = None
