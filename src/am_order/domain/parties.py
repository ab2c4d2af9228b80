"""Buyer/seller resolution and the order verification hash."""

import hashlib
from datetime import datetime
from decimal import Decimal

from src.am_common.datetime_utils import epoch_millis
from src.am_common.enums import ListingDirection
from src.am_common.errors import SelfTradeError
from src.am_listing.domain.models import Listing


def resolve_parties(listing: Listing, requester_id: str) -> tuple[str, str]:
    """Return (buyer_id, seller_id) for an order placed against ``listing``.

    A SELL listing is an offer: the owner sells, the requester buys. A BUY
    listing is a request: the owner buys, the requester fulfils it as seller.
    """
    if listing.is_owned_by(requester_id):
        raise SelfTradeError()
    if listing.direction == ListingDirection.BUY.value:
        return listing.agent_id, requester_id
    return requester_id, listing.agent_id


def _amount_text(amount: Decimal) -> str:
    # 100, 100.0 and 100.00 all hash as "100"
    normalized = amount.normalize()
    return format(normalized, "f")


def verification_hash(
    buyer_id: str, seller_id: str, listing_id: str, amount: Decimal, created_at: datetime
) -> str:
    payload = f"{buyer_id}:{seller_id}:{listing_id}:{_amount_text(amount)}:{epoch_millis(created_at)}"
    return hashlib.sha256(payload.encode()).hexdigest()
