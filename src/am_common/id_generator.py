"""Business identifiers.

Agents, listings, orders and transactions are keyed by UUIDv4 strings so that
ids handed out over the API are not guessable or sequential.
"""

import uuid


def generate_id() -> str:
    """Generate a new random UUID string."""
    return str(uuid.uuid4())
