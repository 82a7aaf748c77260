"""
API module containing FastAPI routes and endpoints.

This module provides the main API router that includes the payment link
and transaction ledger sub-routers.
"""

from fastapi import APIRouter

from crosspay.api.routes import payment_links, transactions

router = APIRouter()

router.include_router(payment_links.router, prefix="/payment", tags=["Payment Links"])
router.include_router(transactions.router, prefix="/transaction", tags=["Transactions"])

__all__ = ["router"]
