"""Shared pydantic base and pagination cursor helpers.

The public JSON contract is camelCase; Python code stays snake_case. Request
models accept either spelling, responses are dumped with by_alias=True.
"""

import base64
import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def cursor_encode(created_at: datetime, row_id: str) -> str:
    """Encode composite (created_at, id) cursor as Base64 JSON."""
    payload = {"ts": created_at.isoformat(), "id": row_id}
    return base64.b64encode(json.dumps(payload).encode()).decode()


def cursor_decode(cursor: str | None) -> tuple[datetime | None, str | None]:
    """Decode composite cursor -> (created_at, id), or (None, None) on error."""
    if cursor is None:
        return None, None
    try:
        data = json.loads(base64.b64decode(cursor.encode()).decode())
        return datetime.fromisoformat(data["ts"]), data["id"]
    except (ValueError, KeyError, TypeError):
        return None, None
