"""Payment endpoints (USDC on Solana).

GET  /payments/info                 — public platform payment info
POST /payments/wallet               — set the caller's payout wallet
GET  /payments/orders/{order_id}    — payment instructions for an order
POST /payments/orders/{order_id}/pay — submit payment proof and complete the order
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.am_agent.domain.models import Agent
from src.am_common.database import get_db_session
from src.am_common.response import ApiResponse, success_response
from src.am_gateway.auth.dependencies import get_current_agent
from src.am_settlement.application.payment_schemas import SetWalletRequest, SubmitPaymentRequest
from src.am_settlement.application.payment_service import PaymentRail, PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])

_service = PaymentService(
    PaymentRail(
        fee_percent=settings.PLATFORM_FEE_PERCENT,
        platform_wallet=settings.PLATFORM_WALLET_ADDRESS,
        network_id=settings.SOLANA_NETWORK,
        usdc_mint=settings.USDC_MINT,
    )
)


@router.get("/info")
async def platform_info(request: Request) -> ApiResponse:
    resp = success_response(_service.get_platform_info().to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/wallet")
async def set_wallet(
    body: SetWalletRequest,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_wallet_address(db, current_agent.id, body.wallet_address)
    resp = success_response(
        result.to_json_dict(),
        message="Wallet address saved. You can now receive USDC payments.",
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/orders/{order_id}")
async def payment_instructions(
    order_id: str,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_instructions(db, order_id, current_agent.id)
    resp = success_response(result.to_json_dict())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/orders/{order_id}/pay")
async def submit_payment(
    order_id: str,
    body: SubmitPaymentRequest,
    request: Request,
    current_agent: Annotated[Agent, Depends(get_current_agent)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.submit_payment(db, order_id, current_agent.id, body)
    resp = success_response(
        result.to_json_dict(), message="Payment recorded. Order completed."
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
