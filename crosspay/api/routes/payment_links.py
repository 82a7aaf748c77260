"""
Payment link API routes.

This module provides endpoints for creating payment links, validating the
recipient, recording payment attempts and listing a creator's links.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from crosspay.core.config import Settings, get_settings
from crosspay.core.database import get_db
from crosspay.schemas.common import ApiResponse, Pagination
from crosspay.schemas.payment_links import (
    CreatePaymentLinkRequest,
    PaymentAttemptRecord,
    PaymentLinkCreated,
    PaymentLinkDetail,
    PaymentLinkItem,
    PaymentLinkList,
    PaymentLinkPublic,
    RecordAttemptRequest,
    ValidatePaymentLinkRequest,
)
from crosspay.services.payment_link_service import PaymentLinkService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_payment_link_service(
    db: AsyncSession = Depends(get_db),
    config: Settings = Depends(get_settings),
) -> PaymentLinkService:
    """Build the request-scoped payment link service."""
    return PaymentLinkService(db, config)


@router.post(
    "/create",
    response_model=ApiResponse[PaymentLinkCreated],
    summary="Create payment link",
    description="Create a pending payment link for a designated recipient.",
)
async def create_payment_link(
    request: CreatePaymentLinkRequest,
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> ApiResponse[PaymentLinkCreated]:
    link = await service.create_payment_link(
        creator_address=request.creator_address,
        recipient_address=request.recipient_address,
        amount=request.amount,
        solver_fee=request.solver_fee,
        source_chain_id=request.source_chain_id,
        destination_chain_id=request.destination_chain_id,
        expires_in_hours=request.expires_in_hours,
    )

    return ApiResponse(
        data=PaymentLinkCreated(
            payment_id=link.payment_id,
            payment_link=service.payment_url(link),
            expires_at=link.expires_at,
            status=link.status,
        )
    )


@router.post(
    "/validate",
    response_model=ApiResponse[PaymentLinkDetail],
    summary="Validate payment recipient",
    description="Check that the connected wallet may pay the link and return its details.",
)
async def validate_payment_link(
    request: ValidatePaymentLinkRequest,
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> ApiResponse[PaymentLinkDetail]:
    """
    Validate a payment link for the requesting wallet.

    Fails with 404 for an unknown link, 400 when the link is paid or
    expired, and 403 when the wallet is not the designated recipient.
    """
    link = await service.validate_payment_link(
        payment_id=request.payment_id,
        requesting_address=request.recipient_address,
    )
    return ApiResponse(data=PaymentLinkDetail.from_model(link))


@router.post(
    "/attempt",
    response_model=ApiResponse[PaymentAttemptRecord],
    summary="Record payment attempt",
    description="Record the outcome of an on-chain payment attempt.",
)
async def record_payment_attempt(
    request: RecordAttemptRequest,
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> ApiResponse[PaymentAttemptRecord]:
    attempt = await service.record_attempt(
        payment_id=request.payment_id,
        attempt_address=request.attempt_address,
        attempt_chain_id=request.attempt_chain_id,
        success=request.success,
        transaction_hash=request.transaction_hash,
        error_message=request.error_message,
    )
    return ApiResponse(data=PaymentAttemptRecord.from_model(attempt))


@router.get(
    "/creator/{address}",
    response_model=ApiResponse[PaymentLinkList],
    summary="List creator's payment links",
    description="List payment links created by a wallet, with derived status and attempt history.",
)
async def list_payment_links_by_creator(
    address: str,
    status: str | None = Query(
        default=None, description="Filter by stored status (pending, paid)"
    ),
    limit: int | None = Query(default=None, description="Page size, capped by configuration"),
    offset: int = Query(default=0, ge=0),
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> ApiResponse[PaymentLinkList]:
    result = await service.list_by_creator(
        creator_address=address,
        status=status,
        limit=limit,
        offset=offset,
    )

    items = [
        PaymentLinkItem.from_model(link, summary, service.payment_url(link))
        for link, summary in result["links"]
    ]
    return ApiResponse(
        data=PaymentLinkList(
            payment_links=items,
            pagination=Pagination.build(result["total"], result["limit"], result["offset"]),
        )
    )


@router.get(
    "/{payment_id}",
    response_model=ApiResponse[PaymentLinkPublic],
    summary="Get public payment details",
    description="Get a payment link without creator or recipient addresses.",
)
async def get_payment_link(
    payment_id: str,
    service: PaymentLinkService = Depends(get_payment_link_service),
) -> ApiResponse[PaymentLinkPublic]:
    link = await service.get_public_payment_link(payment_id)
    return ApiResponse(data=PaymentLinkPublic.from_model(link))
