"""
API routes package.

This package contains the FastAPI route modules organized by domain.
"""

from . import payment_links, transactions

__all__ = ["payment_links", "transactions"]
