"""
Pydantic schemas for payment links.

This module defines the request bodies accepted by the payment link
endpoints and the shapes they respond with.
"""
from datetime import datetime
from typing import Any

from pydantic import Field

from crosspay.models.payment_links import PaymentAttempt, PaymentLink
from crosspay.schemas.common import CamelModel, Pagination
from crosspay.services.payment_status import PaymentLinkSummary


class CreatePaymentLinkRequest(CamelModel):
    """Body of POST /api/payment/create."""
    creator_address: str = Field(..., description="Wallet creating the request")
    recipient_address: str = Field(..., description="Only wallet allowed to pay the link")
    amount: str = Field(..., description="Amount in token base units")
    solver_fee: str = Field(..., description="Solver fee in token base units")
    source_chain_id: int = Field(..., description="Chain the payer sends from")
    destination_chain_id: int = Field(..., description="Chain the funds settle on")
    expires_in_hours: float | None = Field(
        None, description="Lifetime of the link in hours; server default when omitted"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "creatorAddress": "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa1",
                    "recipientAddress": "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb2",
                    "amount": "1000000000000000000",
                    "solverFee": "10000000000000000",
                    "sourceChainId": 84532,
                    "destinationChainId": 43113,
                    "expiresInHours": 24,
                }
            ]
        }
    }


class ValidatePaymentLinkRequest(CamelModel):
    """Body of POST /api/payment/validate."""
    payment_id: str = Field(..., description="Payment link identifier (UUID)")
    recipient_address: str = Field(..., description="Wallet asking to pay the link")


class RecordAttemptRequest(CamelModel):
    """Body of POST /api/payment/attempt."""
    payment_id: str
    attempt_address: str
    attempt_chain_id: int
    success: bool = False
    transaction_hash: str | None = None
    error_message: str | None = None


class PaymentLinkCreated(CamelModel):
    """Response of a successful create."""
    payment_id: str
    payment_link: str
    expires_at: datetime
    status: str


class PaymentLinkDetail(CamelModel):
    """Payment details revealed to the validated recipient."""
    payment_id: str
    amount: str
    solver_fee: str
    source_chain_id: int
    destination_chain_id: int
    creator_address: str
    expires_at: datetime
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_model(cls, link: PaymentLink) -> "PaymentLinkDetail":
        return cls(
            payment_id=link.payment_id,
            amount=link.amount,
            solver_fee=link.solver_fee,
            source_chain_id=link.source_chain_id,
            destination_chain_id=link.destination_chain_id,
            creator_address=link.creator_address,
            expires_at=link.expires_at,
            metadata=link.extra_data,
        )


class PaymentLinkPublic(CamelModel):
    """Pre-authentication view of a link, without any addresses."""
    payment_id: str
    amount: str
    solver_fee: str
    source_chain_id: int
    destination_chain_id: int
    status: str
    expires_at: datetime
    created_at: datetime

    @classmethod
    def from_model(cls, link: PaymentLink) -> "PaymentLinkPublic":
        return cls(
            payment_id=link.payment_id,
            amount=link.amount,
            solver_fee=link.solver_fee,
            source_chain_id=link.source_chain_id,
            destination_chain_id=link.destination_chain_id,
            status=link.status,
            expires_at=link.expires_at,
            created_at=link.created_at,
        )


class PaymentAttemptRecord(CamelModel):
    """Stored attempt row as returned by POST /api/payment/attempt."""
    id: str
    payment_id: str
    attempt_address: str
    attempt_chain_id: int
    attempt_timestamp: datetime
    success: bool
    error_message: str | None = None
    transaction_hash: str | None = None

    @classmethod
    def from_model(cls, attempt: PaymentAttempt) -> "PaymentAttemptRecord":
        return cls(
            id=str(attempt.id),
            payment_id=attempt.payment_id,
            attempt_address=attempt.attempt_address,
            attempt_chain_id=attempt.attempt_chain_id,
            attempt_timestamp=attempt.attempt_timestamp,
            success=attempt.success,
            error_message=attempt.error_message,
            transaction_hash=attempt.transaction_hash,
        )


class AttemptInfo(CamelModel):
    """Attempt as listed in a link's history."""
    timestamp: datetime
    address: str
    chain_id: int
    success: bool
    error_message: str | None = None
    transaction_hash: str | None = None


class AttemptHistoryEntry(AttemptInfo):
    id: str


class CompletionDetails(CamelModel):
    completed_at: datetime | None = None
    transaction_hash: str | None = None
    attempt_address: str
    attempt_chain_id: int | str


class PaymentLinkItem(CamelModel):
    """Payment link as listed for its creator, with derived status."""
    payment_id: str
    creator_address: str
    recipient_address: str
    amount: str
    solver_fee: str
    source_chain_id: int
    destination_chain_id: int
    status: str = Field(..., description="Derived: pending, completed, expired, failed")
    original_status: str = Field(..., description="Stored: pending or paid")
    created_at: datetime
    expires_at: datetime
    paid_at: datetime | None = None
    transaction_hash: str | None = None
    metadata: dict[str, Any] | None = None
    payment_url: str
    attempt_count: int
    successful_attempts: int
    failed_attempts: int
    last_attempt: AttemptInfo | None = None
    completion_details: CompletionDetails | None = None
    all_attempts: list[AttemptHistoryEntry]

    @classmethod
    def from_model(
        cls,
        link: PaymentLink,
        summary: PaymentLinkSummary,
        payment_url: str,
    ) -> "PaymentLinkItem":
        history = [
            AttemptHistoryEntry(
                id=str(attempt.id),
                timestamp=attempt.attempt_timestamp,
                address=attempt.attempt_address,
                chain_id=attempt.attempt_chain_id,
                success=attempt.success,
                error_message=attempt.error_message,
                transaction_hash=attempt.transaction_hash,
            )
            for attempt in sorted(
                link.attempts, key=lambda attempt: attempt.attempt_timestamp, reverse=True
            )
        ]
        last = summary.last_attempt

        return cls(
            payment_id=link.payment_id,
            creator_address=link.creator_address,
            recipient_address=link.recipient_address,
            amount=link.amount,
            solver_fee=link.solver_fee,
            source_chain_id=link.source_chain_id,
            destination_chain_id=link.destination_chain_id,
            status=summary.status,
            original_status=link.status,
            created_at=link.created_at,
            expires_at=link.expires_at,
            paid_at=link.paid_at,
            transaction_hash=link.transaction_hash,
            metadata=link.extra_data,
            payment_url=payment_url,
            attempt_count=summary.attempt_count,
            successful_attempts=summary.successful_attempts,
            failed_attempts=summary.failed_attempts,
            last_attempt=AttemptInfo(
                timestamp=last.attempt_timestamp,
                address=last.attempt_address,
                chain_id=last.attempt_chain_id,
                success=last.success,
                error_message=last.error_message,
                transaction_hash=last.transaction_hash,
            ) if last else None,
            completion_details=(
                CompletionDetails(**summary.completion_details)
                if summary.completion_details else None
            ),
            all_attempts=history,
        )


class PaymentLinkList(CamelModel):
    payment_links: list[PaymentLinkItem]
    pagination: Pagination
