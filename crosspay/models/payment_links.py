"""
Payment link models.

This module defines the SQLAlchemy models for payment links and the
attempts made against them.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crosspay.core.clock import utcnow
from crosspay.core.constants import PAYMENT_STATUS_PENDING
from crosspay.core.database import Base


class PaymentLink(Base):
    """Shareable request for a specific recipient to pay a specific amount."""

    __tablename__ = "payment_links"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payment_id: Mapped[str] = mapped_column(
        String(36), unique=True, index=True, nullable=False, default=lambda: str(uuid4())
    )
    creator_address: Mapped[str] = mapped_column(String(42), index=True, nullable=False)
    recipient_address: Mapped[str] = mapped_column(String(42), index=True, nullable=False)
    amount: Mapped[str] = mapped_column(String(78), nullable=False)  # base units
    solver_fee: Mapped[str] = mapped_column(String(78), nullable=False)  # base units
    source_chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    destination_chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), index=True, nullable=False, default=PAYMENT_STATUS_PENDING
    )  # pending, paid
    created_at: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False, default=utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    paid_at: Mapped[datetime | None] = mapped_column(DateTime)
    transaction_hash: Mapped[str | None] = mapped_column(String(66))
    extra_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, name="metadata", default=dict)

    attempts: Mapped[list["PaymentAttempt"]] = relationship(
        back_populates="payment_link",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PaymentAttempt.attempt_timestamp.desc()",
    )

    def __repr__(self) -> str:
        return f"<PaymentLink(payment_id={self.payment_id}, amount={self.amount}, status='{self.status}')>"


class PaymentAttempt(Base):
    """One recorded try, successful or not, at paying a link."""

    __tablename__ = "payment_attempts"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    payment_id: Mapped[str] = mapped_column(
        ForeignKey("payment_links.payment_id", ondelete="CASCADE"), index=True, nullable=False
    )
    attempt_address: Mapped[str] = mapped_column(String(42), index=True, nullable=False)
    attempt_chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    attempt_timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    error_message: Mapped[str | None] = mapped_column(Text)
    transaction_hash: Mapped[str | None] = mapped_column(String(66))

    payment_link: Mapped[PaymentLink] = relationship(back_populates="attempts")

    def __repr__(self) -> str:
        return f"<PaymentAttempt(id={self.id}, payment_id={self.payment_id}, success={self.success})>"
