"""Unified API response wrapper.

All API endpoints return this format:
{
    "success": true,
    "message": "Order completed",   // optional
    "data": { ... },                // null on error
    "meta": { ... },                // pagination, list endpoints only
    "requestId": "req_..."
}
"""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str | None = None
    data: Any = None
    meta: dict[str, Any] | None = None
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def success_response(
    data: Any = None, message: str | None = None, meta: dict[str, Any] | None = None
) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data, meta=meta)


def error_response(message: str, code: int | None = None) -> ApiResponse:
    meta = {"code": code} if code is not None else None
    return ApiResponse(success=False, message=message, data=None, meta=meta)
