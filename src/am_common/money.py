"""Decimal arithmetic for listing prices and platform fees.

Prices are exact decimals (NUMERIC in PostgreSQL). No float anywhere on the
money path: fee and net amounts are computed exactly and never rounded, so
total_amount == amount + platform_fee holds to the last digit.
"""

from decimal import Decimal

MAX_PRICE = Decimal("1000000")
_HUNDRED = Decimal("100")


def calculate_fee(amount: Decimal, fee_percent: Decimal) -> Decimal:
    """platform_fee = amount * fee_percent / 100."""
    if amount == 0 or fee_percent == 0:
        return Decimal("0")
    return amount * fee_percent / _HUNDRED


def calculate_net(amount: Decimal, platform_fee: Decimal) -> Decimal:
    """Seller's net: the listing price minus the platform fee."""
    return amount - platform_fee
