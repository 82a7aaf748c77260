"""
Transaction ledger model.

Direct sends and same-owner cross-chain swaps, recorded independently of
payment links.
"""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crosspay.core.clock import utcnow
from crosspay.core.database import Base


class Transaction(Base):
    """Append-only record of one attempted on-chain send or swap."""

    __tablename__ = "transactions"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    type: Mapped[str] = mapped_column(String(10), index=True, nullable=False)  # send, swap
    wallet_address: Mapped[str] = mapped_column(String(42), index=True, nullable=False)
    from_chain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    to_chain_id: Mapped[int | None] = mapped_column(Integer)
    amount: Mapped[str | None] = mapped_column(String(78))
    recipient_address: Mapped[str | None] = mapped_column(String(42), index=True)
    token_in: Mapped[str | None] = mapped_column(String(42))
    token_out: Mapped[str | None] = mapped_column(String(42))
    success: Mapped[bool] = mapped_column(Boolean, index=True, nullable=False, default=False)
    error_message: Mapped[str | None] = mapped_column(Text)
    transaction_hash: Mapped[str | None] = mapped_column(String(66))
    timestamp: Mapped[datetime] = mapped_column(DateTime, index=True, nullable=False, default=utcnow)
    extra_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, name="metadata", default=dict)

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type='{self.type}', success={self.success})>"
