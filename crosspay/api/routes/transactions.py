"""
Transaction ledger API routes.

This module provides endpoints for recording direct sends and swaps and
for listing a wallet's history.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from crosspay.core.config import Settings, get_settings
from crosspay.core.database import get_db
from crosspay.schemas.common import ApiResponse, Pagination
from crosspay.schemas.transactions import (
    RecordTransactionRequest,
    TransactionList,
    TransactionRecord,
)
from crosspay.services.transaction_service import TransactionService, display_type

router = APIRouter()
logger = logging.getLogger(__name__)


def get_transaction_service(
    db: AsyncSession = Depends(get_db),
    config: Settings = Depends(get_settings),
) -> TransactionService:
    """Build the request-scoped transaction service."""
    return TransactionService(db, config)


@router.post(
    "",
    response_model=ApiResponse[TransactionRecord],
    summary="Record transaction",
    description="Record a direct send or a same-owner cross-chain swap.",
)
async def record_transaction(
    request: RecordTransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionRecord]:
    transaction = await service.record_transaction(
        type=request.type,
        wallet_address=request.wallet_address,
        from_chain_id=request.from_chain_id,
        to_chain_id=request.to_chain_id,
        amount=request.amount,
        recipient_address=request.recipient_address,
        token_in=request.token_in,
        token_out=request.token_out,
        success=request.success,
        error_message=request.error_message,
        transaction_hash=request.transaction_hash,
        metadata=request.metadata,
    )
    return ApiResponse(data=TransactionRecord.from_model(transaction))


@router.get(
    "/wallet/{address}",
    response_model=ApiResponse[TransactionList],
    summary="List wallet transactions",
    description="List sends and swaps made by a wallet and sends it received.",
)
async def list_wallet_transactions(
    address: str,
    transaction_type: str | None = Query(
        default=None, alias="type", description="send, swap, or received"
    ),
    success: bool | None = Query(default=None, description="Filter by outcome"),
    direction: str | None = Query(default=None, description="sent or received; both when omitted"),
    limit: int | None = Query(default=None, description="Page size, capped by configuration"),
    offset: int = Query(default=0, ge=0),
    service: TransactionService = Depends(get_transaction_service),
) -> ApiResponse[TransactionList]:
    """
    List a wallet's ledger rows, newest first.

    Incoming sends are reported with type ``received``.
    """
    result = await service.list_by_wallet(
        address=address,
        type=transaction_type,
        success=success,
        direction=direction,
        limit=limit,
        offset=offset,
    )

    records = [
        TransactionRecord.from_model(transaction, type=display_type(transaction, address))
        for transaction in result["transactions"]
    ]
    return ApiResponse(
        data=TransactionList(
            transactions=records,
            pagination=Pagination.build(result["total"], result["limit"], result["offset"]),
        )
    )
