"""Platform fee policy applied when an order is created."""

from dataclasses import dataclass
from decimal import Decimal

from src.am_common.money import calculate_fee


@dataclass(frozen=True)
class PriceQuote:
    amount: Decimal
    platform_fee: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class FeePolicy:
    """Fee charged on top of the listing price, as a percentage.

    The buyer pays amount + fee. The same percentage applies whichever side
    of the listing the buyer is on.
    """

    fee_percent: Decimal = Decimal("1")

    def __post_init__(self) -> None:
        if not (Decimal("0") <= self.fee_percent <= Decimal("100")):
            raise ValueError(f"fee_percent must be within [0, 100], got {self.fee_percent}")

    def quote(self, amount: Decimal) -> PriceQuote:
        fee = calculate_fee(amount, self.fee_percent)
        return PriceQuote(amount=amount, platform_fee=fee, total_amount=amount + fee)
