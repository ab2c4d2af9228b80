"""Per-agent rate limiting for order creation.

Fixed-window counter in Redis:
    key    = "ratelimit:{agent_id}:{endpoint_group}"
    count  = INCR key; EXPIRE key 60 on first hit
    reject with RateLimitError (429) once count > limit

Implemented as a FastAPI dependency rather than middleware because the limit
is keyed on the authenticated agent, which is only known after auth runs.
"""

from fastapi import Depends

from config.settings import settings
from src.am_agent.domain.models import Agent
from src.am_common.errors import RateLimitError
from src.am_common.redis_client import get_redis
from src.am_gateway.auth.dependencies import require_verified_agent

_WINDOW_SECONDS = 60


async def check_rate_limit(agent_id: str, group: str, limit: int) -> None:
    redis = await get_redis()
    key = f"ratelimit:{agent_id}:{group}"
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, _WINDOW_SECONDS)
    if count > limit:
        raise RateLimitError()


async def order_rate_limit(
    current_agent: Agent = Depends(require_verified_agent),
) -> Agent:
    """Verified agent, limited to ORDER_RATE_LIMIT_PER_MINUTE new orders."""
    await check_rate_limit(current_agent.id, "orders", settings.ORDER_RATE_LIMIT_PER_MINUTE)
    return current_agent
