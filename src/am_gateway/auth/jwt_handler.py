"""JWT access token creation and verification.

Token issuance (login/registration) lives outside this service; the marketplace
only needs to resolve a Bearer token to an agent id. create_access_token is
kept for operator tooling and tests that need to mint a token for an agent.

HS256 (symmetric HMAC) with the shared JWT_SECRET.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.am_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(agent_id: str, email: str = "") -> str:
    """Issue an access token for an agent (default lifetime: 7 days)."""
    now = datetime.now(UTC)
    payload = {
        "sub": agent_id,
        "email": email,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: signature invalid, token expired, or not an
            access token.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access":
        raise InvalidCredentialsError()
    return payload
