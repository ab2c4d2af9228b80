"""AgentRepository: concrete implementation of AgentRepositoryProtocol.

Trade-counter increments are atomic UPDATE ... RETURNING statements issued
inside the caller's transaction (the order completion bundle).
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import Agent
from src.am_common.errors import AgentNotFoundError

_SELECT_COLUMNS = """
    id, name, email, status, total_trades, wallet_address,
    verified_at, created_at, updated_at
"""

_GET_AGENT_SQL = text(f"SELECT {_SELECT_COLUMNS} FROM agents WHERE id = :agent_id")

_GET_AGENT_BY_API_KEY_SQL = text(f"SELECT {_SELECT_COLUMNS} FROM agents WHERE api_key = :api_key")

_INCREMENT_TRADES_SQL = text("""
    UPDATE agents
    SET total_trades = total_trades + 1,
        updated_at = NOW()
    WHERE id = :agent_id
    RETURNING total_trades
""")

_SET_WALLET_SQL = text(f"""
    UPDATE agents
    SET wallet_address = :wallet_address,
        updated_at = NOW()
    WHERE id = :agent_id
    RETURNING {_SELECT_COLUMNS}
""")


def _row_to_agent(row: Any) -> Agent:
    return Agent(
        id=str(row.id),
        name=row.name,
        email=row.email,
        status=row.status,
        total_trades=row.total_trades,
        wallet_address=row.wallet_address,
        verified_at=row.verified_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class AgentRepository:
    """Concrete repository, all statements run in the caller's transaction."""

    async def get_by_id(self, db: AsyncSession, agent_id: str) -> Agent | None:
        result = await db.execute(_GET_AGENT_SQL, {"agent_id": agent_id})
        row = result.fetchone()
        return _row_to_agent(row) if row else None

    async def get_by_api_key(self, db: AsyncSession, api_key: str) -> Agent | None:
        result = await db.execute(_GET_AGENT_BY_API_KEY_SQL, {"api_key": api_key})
        row = result.fetchone()
        return _row_to_agent(row) if row else None

    async def increment_trade_count(self, db: AsyncSession, agent_id: str) -> int:
        """Bump total_trades by one and return the new value."""
        result = await db.execute(_INCREMENT_TRADES_SQL, {"agent_id": agent_id})
        row = result.fetchone()
        if row is None:
            raise AgentNotFoundError(agent_id)
        return int(row.total_trades)

    async def set_wallet_address(
        self, db: AsyncSession, agent_id: str, wallet_address: str
    ) -> Agent | None:
        result = await db.execute(
            _SET_WALLET_SQL, {"agent_id": agent_id, "wallet_address": wallet_address}
        )
        row = result.fetchone()
        return _row_to_agent(row) if row else None
