# src/am_agent/domain/repository.py
"""AgentRepository Protocol, the order core's view of the agent directory.

The order engine only reads status/wallet and bumps trade counters.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import Agent


class AgentRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, agent_id: str) -> Agent | None: ...

    async def get_by_api_key(self, db: AsyncSession, api_key: str) -> Agent | None: ...

    async def increment_trade_count(self, db: AsyncSession, agent_id: str) -> int: ...

    async def set_wallet_address(
        self, db: AsyncSession, agent_id: str, wallet_address: str
    ) -> Agent | None: ...
