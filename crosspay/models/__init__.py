"""
Database models package.

This package contains SQLAlchemy ORM models for the CrossPay backend.
"""

from crosspay.core.database import Base
from crosspay.models.payment_links import PaymentAttempt, PaymentLink
from crosspay.models.transactions import Transaction

__all__ = [
    "Base",
    "PaymentLink",
    "PaymentAttempt",
    "Transaction",
]
