"""End-to-end flow: list → order → cross-verify → complete / pay / cancel.

Every test creates its own listing so runs do not interfere. Trade counters on
the seeded agents accumulate across runs, so assertions compare deltas.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio(loop_scope="session")

# API keys seeded by migration 005
ALPHA = {"X-API-Key": "am_dev_alpha_key"}
BETA = {"X-API-Key": "am_dev_beta_key"}
GAMMA = {"X-API-Key": "am_dev_gamma_key"}  # PENDING agent


async def _create_listing(
    client: AsyncClient, headers: dict[str, str], direction: str = "SELL", price: str = "100"
) -> str:
    resp = await client.post(
        "/api/listings",
        json={
            "title": "Integration dataset",
            "description": "Rows produced by the integration suite",
            "category": "DATA",
            "direction": direction,
            "price": price,
            "tags": ["test"],
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return str(resp.json()["data"]["id"])


async def _place_order(client: AsyncClient, listing_id: str, headers: dict[str, str]) -> dict:
    resp = await client.post("/api/orders", json={"listingId": listing_id}, headers=headers)
    assert resp.status_code == 201, resp.text
    return dict(resp.json()["data"])


async def _trades(client: AsyncClient, headers: dict[str, str]) -> int:
    resp = await client.get("/api/agents/me", headers=headers)
    return int(resp.json()["data"]["totalTrades"])


async def test_full_sell_flow(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    alpha_before = await _trades(client, ALPHA)
    beta_before = await _trades(client, BETA)

    order = await _place_order(client, listing_id, BETA)
    assert order["buyerId"] != order["sellerId"]
    assert Decimal(order["amount"]) == Decimal("100")
    assert Decimal(order["platformFee"]) == Decimal("1")
    assert Decimal(order["totalAmount"]) == Decimal("101")
    order_id = order["id"]

    # completing before verification fails
    resp = await client.post(f"/api/orders/{order_id}/complete", headers=BETA)
    assert resp.status_code == 400

    resp = await client.post(f"/api/orders/{order_id}/verify", headers=BETA)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "PENDING_VERIFICATION"

    resp = await client.post(f"/api/orders/{order_id}/verify", headers=BETA)
    assert resp.status_code == 400

    resp = await client.post(f"/api/orders/{order_id}/verify", headers=ALPHA)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "VERIFIED"

    resp = await client.post(f"/api/orders/{order_id}/complete", headers=ALPHA)
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["order"]["status"] == "COMPLETED"
    assert Decimal(data["transaction"]["netAmount"]) == Decimal("99")

    resp = await client.post(f"/api/orders/{order_id}/complete", headers=BETA)
    assert resp.status_code == 400

    resp = await client.get(f"/api/listings/{listing_id}")
    assert resp.json()["data"]["status"] == "SOLD"

    assert await _trades(client, ALPHA) == alpha_before + 1
    assert await _trades(client, BETA) == beta_before + 1

    resp = await client.post(f"/api/orders/{order_id}/cancel", headers=ALPHA)
    assert resp.status_code == 400


async def test_buy_listing_inverts_roles(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA, direction="BUY", price="500")
    me = (await client.get("/api/agents/me", headers=ALPHA)).json()["data"]

    order = await _place_order(client, listing_id, BETA)

    assert order["buyerId"] == me["id"]
    assert Decimal(order["totalAmount"]) == Decimal("505")


async def test_self_trade_rejected(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    resp = await client.post("/api/orders", json={"listingId": listing_id}, headers=ALPHA)
    assert resp.status_code == 400


async def test_pending_agent_cannot_order(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    resp = await client.post("/api/orders", json={"listingId": listing_id}, headers=GAMMA)
    assert resp.status_code == 403


async def test_outsider_cannot_touch_order(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    order = await _place_order(client, listing_id, BETA)

    resp = await client.post(f"/api/orders/{order['id']}/verify", headers=GAMMA)
    assert resp.status_code == 403
    resp = await client.get(f"/api/orders/{order['id']}", headers=GAMMA)
    assert resp.status_code == 403


async def test_cancel_leaves_listing_active(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    order = await _place_order(client, listing_id, BETA)

    resp = await client.post(f"/api/orders/{order['id']}/cancel", headers=BETA)
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "CANCELLED"

    resp = await client.get(f"/api/listings/{listing_id}")
    assert resp.json()["data"]["status"] == "ACTIVE"


async def test_payment_proof_completes_order(client: AsyncClient) -> None:
    listing_id = await _create_listing(client, ALPHA)
    order = await _place_order(client, listing_id, BETA)
    order_id = order["id"]
    for headers in (ALPHA, BETA):
        resp = await client.post(f"/api/orders/{order_id}/verify", headers=headers)
        assert resp.status_code == 200

    resp = await client.get(f"/api/payments/orders/{order_id}", headers=BETA)
    assert resp.status_code == 200
    assert resp.json()["data"]["alreadyPaid"] is None

    sig = "2" * 88
    resp = await client.post(
        f"/api/payments/orders/{order_id}/pay", json={"txSignature": sig}, headers=ALPHA
    )
    assert resp.status_code == 403  # seller may not pay

    resp = await client.post(
        f"/api/payments/orders/{order_id}/pay", json={"txSignature": sig}, headers=BETA
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["payment"]["explorerUrl"].endswith(sig)

    resp = await client.post(
        f"/api/payments/orders/{order_id}/pay", json={"txSignature": sig}, headers=BETA
    )
    assert resp.status_code == 400

    resp = await client.get(f"/api/payments/orders/{order_id}", headers=ALPHA)
    assert resp.json()["data"]["alreadyPaid"]["txSignature"] == sig
