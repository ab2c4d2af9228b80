"""Unit tests for the error hierarchy and the response envelope."""

import pytest

from src.am_common.errors import (
    AgentSuspendedError,
    AlreadyVerifiedError,
    AppError,
    BadRequestError,
    ForbiddenError,
    InternalError,
    ListingNotAvailableError,
    NotFoundError,
    NotOrderBuyerError,
    NotOrderPartyError,
    OrderNotCompletableError,
    OrderNotFoundError,
    PaymentAlreadySubmittedError,
    RateLimitError,
    SelfTradeError,
    UnauthorizedError,
)
from src.am_common.response import error_response, success_response


@pytest.mark.parametrize(
    ("exc", "base", "code", "status"),
    [
        (OrderNotFoundError("o-1"), NotFoundError, 4004, 404),
        (SelfTradeError(), BadRequestError, 4001, 400),
        (AlreadyVerifiedError(), BadRequestError, 4006, 400),
        (NotOrderPartyError(), ForbiddenError, 4003, 403),
        (OrderNotCompletableError("o-1", "PENDING_VERIFICATION"), BadRequestError, 4007, 400),
        (ListingNotAvailableError("l-1", "SOLD"), BadRequestError, 3002, 400),
        (NotOrderBuyerError(), ForbiddenError, 5001, 403),
        (PaymentAlreadySubmittedError("o-1"), BadRequestError, 5002, 400),
        (AgentSuspendedError(), ForbiddenError, 1003, 403),
        (UnauthorizedError(), AppError, 401, 401),
        (RateLimitError(), AppError, 9001, 429),
        (InternalError(), AppError, 9002, 500),
    ],
)
def test_error_taxonomy(exc: AppError, base: type, code: int, status: int) -> None:
    assert isinstance(exc, base)
    assert exc.code == code
    assert exc.http_status == status


def test_error_message_is_exception_text() -> None:
    exc = OrderNotCompletableError("o-9", "VERIFIED")
    assert "o-9" in exc.message
    assert str(exc) == exc.message


class TestEnvelope:
    def test_success_response_defaults(self) -> None:
        resp = success_response({"id": "x"})
        body = resp.model_dump(by_alias=True)
        assert body["success"] is True
        assert body["data"] == {"id": "x"}
        assert body["requestId"].startswith("req_")

    def test_error_response_carries_code_in_meta(self) -> None:
        body = error_response("nope", 4001).model_dump(by_alias=True)
        assert body["success"] is False
        assert body["message"] == "nope"
        assert body["data"] is None
        assert body["meta"] == {"code": 4001}

    def test_error_response_without_code(self) -> None:
        assert error_response("nope").meta is None
