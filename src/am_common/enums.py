"""Global enums, must match DB CHECK constraints exactly.

See alembic/versions/002_create_agents.py .. 005_create_transactions.py
"""

from enum import Enum


class AgentStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    SUSPENDED = "SUSPENDED"


class ListingCategory(str, Enum):
    DATA = "DATA"
    API_SERVICE = "API_SERVICE"
    MODEL = "MODEL"
    COMPUTE = "COMPUTE"
    STORAGE = "STORAGE"
    AUTOMATION = "AUTOMATION"
    ANALYSIS = "ANALYSIS"
    CONTENT = "CONTENT"
    OTHER = "OTHER"


class ListingDirection(str, Enum):
    """SELL = an offer to sell; BUY = a request to buy."""
    SELL = "SELL"
    BUY = "BUY"


class ListingStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    SOLD = "SOLD"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class OrderStatus(str, Enum):
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    VERIFIED = "VERIFIED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    # Declared for future dispute/refund flows; nothing transitions into these yet.
    DISPUTED = "DISPUTED"
    REFUNDED = "REFUNDED"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    USDC_SOLANA = "USDC_SOLANA"
