"""Unit tests for fee policy, party resolution and the verification hash."""

import hashlib
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.am_common.datetime_utils import epoch_millis
from src.am_common.errors import SelfTradeError
from src.am_listing.domain.models import Listing
from src.am_order.domain.parties import resolve_parties, verification_hash
from src.am_order.domain.pricing import FeePolicy


def _listing(direction: str = "SELL", owner: str = "agent-a", price: str = "100") -> Listing:
    return Listing(
        id="listing-1",
        agent_id=owner,
        title="Weather dataset",
        description="Hourly weather observations",
        category="DATA",
        direction=direction,
        price=Decimal(price),
    )


class TestFeePolicy:
    def test_default_one_percent(self) -> None:
        quote = FeePolicy().quote(Decimal("100"))
        assert quote.amount == Decimal("100")
        assert quote.platform_fee == Decimal("1")
        assert quote.total_amount == Decimal("101")

    def test_total_is_amount_plus_fee(self) -> None:
        quote = FeePolicy(Decimal("2.5")).quote(Decimal("123.45"))
        assert quote.total_amount == quote.amount + quote.platform_fee
        assert quote.platform_fee == Decimal("123.45") * Decimal("2.5") / 100

    def test_zero_fee(self) -> None:
        quote = FeePolicy(Decimal("0")).quote(Decimal("50"))
        assert quote.platform_fee == Decimal("0")
        assert quote.total_amount == Decimal("50")

    @pytest.mark.parametrize("pct", [Decimal("-1"), Decimal("100.01")])
    def test_rejects_out_of_range_percent(self, pct: Decimal) -> None:
        with pytest.raises(ValueError):
            FeePolicy(pct)


class TestResolveParties:
    def test_sell_listing_requester_buys(self) -> None:
        buyer, seller = resolve_parties(_listing("SELL", owner="agent-a"), "agent-b")
        assert buyer == "agent-b"
        assert seller == "agent-a"

    def test_buy_listing_owner_buys(self) -> None:
        buyer, seller = resolve_parties(_listing("BUY", owner="agent-a"), "agent-b")
        assert buyer == "agent-a"
        assert seller == "agent-b"

    @pytest.mark.parametrize("direction", ["SELL", "BUY"])
    def test_own_listing_is_self_trade(self, direction: str) -> None:
        with pytest.raises(SelfTradeError):
            resolve_parties(_listing(direction, owner="agent-a"), "agent-a")

    def test_fee_is_same_for_both_directions(self) -> None:
        policy = FeePolicy()
        sell = policy.quote(_listing("SELL", price="500").price)
        buy = policy.quote(_listing("BUY", price="500").price)
        assert sell == buy
        assert buy.total_amount == Decimal("505")


class TestVerificationHash:
    def test_matches_sha256_of_joined_fields(self) -> None:
        created = datetime(2026, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)
        expected_payload = f"b-1:s-1:l-1:100:{epoch_millis(created)}"
        expected = hashlib.sha256(expected_payload.encode()).hexdigest()
        assert verification_hash("b-1", "s-1", "l-1", Decimal("100.00"), created) == expected

    def test_is_deterministic(self) -> None:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        first = verification_hash("b", "s", "l", Decimal("10.5"), created)
        second = verification_hash("b", "s", "l", Decimal("10.50"), created)
        assert first == second
        assert len(first) == 64

    def test_depends_on_parties(self) -> None:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        assert verification_hash("b", "s", "l", Decimal("1"), created) != verification_hash(
            "s", "b", "l", Decimal("1"), created
        )
