"""Order status transition rules.

    PENDING_VERIFICATION --(both parties verify)--> VERIFIED
    VERIFIED / IN_PROGRESS --(complete or payment proof)--> COMPLETED
    anything but COMPLETED --(cancel)--> CANCELLED

IN_PROGRESS, DISPUTED and REFUNDED are valid stored values, but no operation
moves an order into them.
"""

from src.am_common.enums import OrderStatus

VERIFIABLE_STATUSES = frozenset({
    OrderStatus.PENDING_VERIFICATION.value,
    OrderStatus.VERIFIED.value,
})

COMPLETABLE_STATUSES = frozenset({
    OrderStatus.VERIFIED.value,
    OrderStatus.IN_PROGRESS.value,
})

# Payment proof is accepted exactly when the order could be completed
PAYABLE_STATUSES = COMPLETABLE_STATUSES

TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.PENDING_VERIFICATION.value: frozenset({
        OrderStatus.VERIFIED.value, OrderStatus.CANCELLED.value,
    }),
    OrderStatus.VERIFIED.value: frozenset({
        OrderStatus.COMPLETED.value, OrderStatus.CANCELLED.value,
    }),
    OrderStatus.IN_PROGRESS.value: frozenset({
        OrderStatus.COMPLETED.value, OrderStatus.CANCELLED.value,
    }),
    OrderStatus.COMPLETED.value: frozenset(),
    OrderStatus.CANCELLED.value: frozenset({OrderStatus.CANCELLED.value}),
    OrderStatus.DISPUTED.value: frozenset({OrderStatus.CANCELLED.value}),
    OrderStatus.REFUNDED.value: frozenset({OrderStatus.CANCELLED.value}),
}


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def can_verify(status: str) -> bool:
    return status in VERIFIABLE_STATUSES


def can_complete(status: str, buyer_verified: bool, seller_verified: bool) -> bool:
    return status in COMPLETABLE_STATUSES and buyer_verified and seller_verified


def can_cancel(status: str) -> bool:
    return status != OrderStatus.COMPLETED.value
