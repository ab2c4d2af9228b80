"""SQLAlchemy ORM model for the transactions table (DDL reference only, queries use raw SQL)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.am_common.database import Base


class TransactionORM(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id"), nullable=False, unique=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    net_amount: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    tx_signature: Mapped[str | None] = mapped_column(String(100))
    fee_tx_signature: Mapped[str | None] = mapped_column(String(100))
    payment_method: Mapped[str | None] = mapped_column(String(20))
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
