"""Pydantic schemas for am_agent responses."""

from datetime import datetime

from src.am_agent.domain.models import Agent
from src.am_common.schemas import CamelModel


class AgentProfile(CamelModel):
    id: str
    name: str
    status: str
    total_trades: int
    wallet_address: str | None
    verified_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, agent: Agent) -> "AgentProfile":
        return cls(
            id=agent.id,
            name=agent.name,
            status=agent.status,
            total_trades=agent.total_trades,
            wallet_address=agent.wallet_address,
            verified_at=agent.verified_at,
            created_at=agent.created_at,
        )
