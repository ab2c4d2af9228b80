"""am_agent REST endpoints.

GET /agents/me — the authenticated agent's own profile
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.am_agent.application.schemas import AgentProfile
from src.am_agent.domain.models import Agent
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import get_current_agent

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("/me")
async def get_me(
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
) -> ApiResponse:
    resp = success_response(AgentProfile.from_domain(current_agent).to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
