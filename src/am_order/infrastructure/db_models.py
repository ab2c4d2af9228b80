"""SQLAlchemy ORM model for the orders table (DDL reference only, queries use raw SQL)."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.am_common.database import Base


class OrderORM(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    listing_id: Mapped[str] = mapped_column(ForeignKey("listings.id"), nullable=False)
    buyer_id: Mapped[str] = mapped_column(ForeignKey("agents.id"), nullable=False)
    seller_id: Mapped[str] = mapped_column(ForeignKey("agents.id"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="PENDING_VERIFICATION"
    )
    buyer_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    seller_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text)
    verification_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
