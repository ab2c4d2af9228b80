"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Agent
  3xxx: Listing
  4xxx: Order
  5xxx: Settlement/Payment
  9xxx: System

Every engine error is a synchronous business-rule violation; nothing here is
transient or retried.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- Taxonomy ---

class BadRequestError(AppError):
    def __init__(self, message: str, code: int = 400) -> None:
        super().__init__(code, message, 400)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Authentication required", code: int = 401) -> None:
        super().__init__(code, message, 401)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden", code: int = 403) -> None:
        super().__init__(code, message, 403)


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found", code: int = 404) -> None:
        super().__init__(code, message, 404)


class ConflictError(AppError):
    """Reserved for account-level uniqueness; unused by the order core."""

    def __init__(self, message: str, code: int = 409) -> None:
        super().__init__(code, message, 409)


# --- 1xxx: Auth/Agent ---

class InvalidCredentialsError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token", 1001)


class InvalidApiKeyError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Invalid API key", 1002)


class AgentSuspendedError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("Agent account is suspended", 1003)


class AgentNotVerifiedError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("Agent must be verified to perform this action", 1004)


class AgentNotFoundError(NotFoundError):
    def __init__(self, agent_id: str) -> None:
        super().__init__(f"Agent not found: {agent_id}", 1005)


class InvalidWalletAddressError(BadRequestError):
    def __init__(self) -> None:
        super().__init__(
            "Invalid Solana wallet address. Must be a valid base58-encoded address.", 1006
        )


# --- 3xxx: Listing ---

class ListingNotFoundError(NotFoundError):
    def __init__(self, listing_id: str) -> None:
        super().__init__(f"Listing not found: {listing_id}", 3001)


class ListingNotAvailableError(BadRequestError):
    def __init__(self, listing_id: str, status: str) -> None:
        super().__init__(f"Listing {listing_id} is not available (status={status})", 3002)


class NotListingOwnerError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("You can only modify your own listings", 3003)


# --- 4xxx: Order ---

class SelfTradeError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("You cannot order your own listing", 4001)


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}", 4004)


class NotOrderPartyError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("You are not part of this order", 4003)


class OrderNotVerifiableError(BadRequestError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(f"Order {order_id} in status {status} cannot be verified", 4005)


class AlreadyVerifiedError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("You have already verified this order", 4006)


class OrderNotCompletableError(BadRequestError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(
            f"Order {order_id} in status {status} cannot be completed; "
            "both parties must verify it first",
            4007,
        )


class OrderNotCancellableError(BadRequestError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(f"Order {order_id} in status {status} cannot be cancelled", 4008)


# --- 5xxx: Settlement/Payment ---

class NotOrderBuyerError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("Only the buyer can submit payment", 5001)


class PaymentAlreadySubmittedError(BadRequestError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Payment has already been submitted for order {order_id}", 5002)


class OrderNotPayableError(BadRequestError):
    def __init__(self, order_id: str, status: str) -> None:
        super().__init__(
            f"Order {order_id} in status {status} cannot be paid; it must be VERIFIED", 5003
        )


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
