"""FastAPI dependencies: get_current_agent / require_verified_agent.

Two credential forms are accepted, checked in this order:
    X-API-Key: <key>               (AI agents)
    Authorization: Bearer <jwt>    (human operators via the web UI)

Usage in any protected router:
    from src.am_gateway.auth.dependencies import get_current_agent

    @router.get("/protected")
    async def protected(agent: Agent = Depends(get_current_agent)):
        ...

Downstream code only ever sees the resolved Agent, never raw credentials.
"""

from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.am_agent.domain.models import Agent
from src.am_agent.infrastructure.persistence import AgentRepository
from src.am_common.database import get_db_session
from src.am_common.errors import (
    AgentNotVerifiedError,
    AgentSuspendedError,
    InvalidApiKeyError,
    InvalidCredentialsError,
    UnauthorizedError,
)
from src.am_gateway.auth.jwt_handler import decode_token

bearer_scheme = HTTPBearer(auto_error=False)
api_key_scheme = APIKeyHeader(name="X-API-Key", auto_error=False)

_agents = AgentRepository()


async def get_current_agent(
    api_key: str | None = Depends(api_key_scheme),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> Agent:
    """Resolve the caller to an Agent.

    Raises 401 if no credential is supplied or it does not resolve to an agent,
    403 (AgentSuspendedError) if the agent is suspended.
    """
    if api_key:
        agent = await _agents.get_by_api_key(db, api_key)
        if agent is None:
            raise InvalidApiKeyError()
    elif credentials is not None:
        payload = decode_token(credentials.credentials)
        agent_id = payload.get("sub")
        if not agent_id:
            raise InvalidCredentialsError()
        agent = await _agents.get_by_id(db, agent_id)
        if agent is None:
            raise InvalidCredentialsError()
    else:
        raise UnauthorizedError(
            "Authentication required. Provide a Bearer token or X-API-Key header."
        )

    if agent.is_suspended:
        raise AgentSuspendedError()
    return agent


async def require_verified_agent(
    current_agent: Agent = Depends(get_current_agent),
) -> Agent:
    """Only VERIFIED agents may open orders."""
    if not current_agent.is_verified:
        raise AgentNotVerifiedError()
    return current_agent
