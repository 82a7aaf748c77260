"""
Payment link service.

This service creates shareable payment links, authorizes the designated
recipient, records payment attempts and lists a creator's links together
with their derived status.
"""

import logging
from datetime import timedelta
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crosspay.core import clock
from crosspay.core.config import Settings
from crosspay.core.constants import (
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
    STORED_PAYMENT_STATUSES,
)
from crosspay.core.errors import (
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from crosspay.core.validators import (
    validate_address,
    validate_base_units,
    validate_chain_id,
    validate_expires_in_hours,
    validate_page_limit,
)
from crosspay.models.payment_links import PaymentAttempt, PaymentLink
from crosspay.services.payment_status import PaymentLinkSummary, summarize_payment_link

logger = logging.getLogger(__name__)


def _is_canonical_uuid(value: str) -> bool:
    """Accept only the dashed 36-character form, in either case."""
    try:
        return str(UUID(value)) == value.lower()
    except (TypeError, ValueError, AttributeError):
        return False


def _short_hash(value: str | None) -> str | None:
    # Full 64-hex hashes are masked by the log redaction
    return f"{value[:10]}..." if value and len(value) > 10 else value


class PaymentLinkService:
    """Service for the payment link lifecycle."""

    def __init__(self, db: AsyncSession, config: Settings):
        """
        Initialize the payment link service.

        Args:
            db: Database session
            config: Application settings (chains, expiry bounds, frontend URL)
        """
        self.db = db
        self.config = config

    async def _commit(self, failure_message: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{failure_message}: {e}")
            raise StoreError(failure_message) from e

    async def _get_link(self, payment_id: str) -> PaymentLink | None:
        try:
            result = await self.db.execute(
                select(PaymentLink).where(PaymentLink.payment_id == payment_id)
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load payment link {payment_id}: {e}")
            raise StoreError("Failed to fetch payment details") from e
        return result.scalar_one_or_none()

    async def create_payment_link(
        self,
        creator_address: str,
        recipient_address: str,
        amount: str,
        solver_fee: str,
        source_chain_id: int,
        destination_chain_id: int,
        expires_in_hours: float | None = None,
    ) -> PaymentLink:
        """
        Create a pending payment link.

        Args:
            creator_address: Wallet requesting the payment
            recipient_address: Only wallet allowed to validate and pay the link
            amount: Amount in token base units
            solver_fee: Solver fee in token base units
            source_chain_id: Chain the payer sends from
            destination_chain_id: Chain the funds settle on
            expires_in_hours: Lifetime of the link in hours, fractions allowed (default from config)

        Returns:
            Created PaymentLink object

        Raises:
            ValidationError: If any argument is malformed or unsupported
        """
        if expires_in_hours is None:
            expires_in_hours = self.config.default_expires_in_hours

        validate_address(creator_address, "creatorAddress")
        validate_address(recipient_address, "recipientAddress")
        validate_base_units(amount, "amount")
        validate_base_units(solver_fee, "solverFee")
        validate_chain_id(source_chain_id, "sourceChainId", self.config.supported_chain_ids)
        validate_chain_id(destination_chain_id, "destinationChainId", self.config.supported_chain_ids)
        validate_expires_in_hours(
            expires_in_hours,
            self.config.min_expires_in_hours,
            self.config.max_expires_in_hours,
        )

        now = clock.utcnow()
        link = PaymentLink(
            payment_id=str(uuid4()),
            creator_address=creator_address,
            recipient_address=recipient_address,
            amount=amount,
            solver_fee=solver_fee,
            source_chain_id=source_chain_id,
            destination_chain_id=destination_chain_id,
            status=PAYMENT_STATUS_PENDING,
            created_at=now,
            expires_at=now + timedelta(hours=expires_in_hours),
            extra_data={},
        )
        self.db.add(link)
        await self._commit("Failed to create payment link")
        await self.db.refresh(link)

        logger.info(
            f"Created payment link {link.payment_id} "
            f"({source_chain_id} -> {destination_chain_id}, expires {link.expires_at.isoformat()})"
        )
        return link

    def payment_url(self, link: PaymentLink) -> str:
        """Shareable URL rendered by the web client."""
        return self.config.payment_url(link.payment_id)

    async def validate_payment_link(
        self,
        payment_id: str,
        requesting_address: str,
    ) -> PaymentLink:
        """
        Authorize a wallet to pay a link.

        Args:
            payment_id: Payment link identifier
            requesting_address: Wallet asking to pay

        Returns:
            The PaymentLink, including the creator address

        Raises:
            ValidationError: If the id or address is malformed
            NotFoundError: If no such link exists
            InvalidStateError: If the link is no longer pending
            ExpiredError: If the link is past its expiry
            ForbiddenError: If the wallet is not the designated recipient
        """
        if not _is_canonical_uuid(payment_id):
            raise ValidationError(details='"paymentId" must be a valid GUID')
        validate_address(requesting_address, "recipientAddress")

        link = await self._get_link(payment_id)
        if not link:
            raise NotFoundError()

        if link.status != PAYMENT_STATUS_PENDING:
            raise InvalidStateError()

        if clock.utcnow() > link.expires_at:
            raise ExpiredError()

        logger.info(
            f"Payment validation: stored recipient {link.recipient_address}, "
            f"requesting address {requesting_address}"
        )
        if link.recipient_address.lower() != requesting_address.lower():
            logger.warning(f"Rejected non-recipient {requesting_address} for payment {payment_id}")
            raise ForbiddenError(
                details=f"Expected: {link.recipient_address}, Got: {requesting_address}",
                hint="Only the intended recipient can process this payment",
            )

        return link

    async def get_public_payment_link(self, payment_id: str) -> PaymentLink:
        """
        Get a link for pre-authentication viewing.

        The route only exposes the non-identity fields.

        Raises:
            NotFoundError: If no such link exists
        """
        link = await self._get_link(payment_id)
        if not link:
            raise NotFoundError()
        return link

    async def record_attempt(
        self,
        payment_id: str,
        attempt_address: str,
        attempt_chain_id: int,
        success: bool,
        transaction_hash: str | None = None,
        error_message: str | None = None,
    ) -> PaymentAttempt:
        """
        Record one try at paying a link.

        A successful attempt that carries a transaction hash marks the link
        as paid. Later successes overwrite paid_at and transaction_hash.

        Args:
            payment_id: Payment link identifier
            attempt_address: Wallet that made the attempt
            attempt_chain_id: Chain the attempt was submitted on
            success: Whether the on-chain transaction went through
            transaction_hash: On-chain hash, if one was obtained
            error_message: Wallet or contract error, if any

        Returns:
            Created PaymentAttempt object

        Raises:
            NotFoundError: If no such link exists
            StoreError: If the database write fails
        """
        link = await self._get_link(payment_id)
        if not link:
            raise NotFoundError()

        now = clock.utcnow()
        attempt = PaymentAttempt(
            payment_id=payment_id,
            attempt_address=attempt_address,
            attempt_chain_id=attempt_chain_id,
            attempt_timestamp=now,
            success=bool(success),
            error_message=error_message,
            transaction_hash=transaction_hash,
        )
        self.db.add(attempt)

        if success and transaction_hash:
            if link.status == PAYMENT_STATUS_PAID:
                logger.warning(
                    f"Payment {payment_id} already paid with {_short_hash(link.transaction_hash)}, "
                    f"overwriting with {_short_hash(transaction_hash)}"
                )
            link.status = PAYMENT_STATUS_PAID
            link.paid_at = now
            link.transaction_hash = transaction_hash

        await self._commit("Failed to record payment attempt")
        await self.db.refresh(attempt)

        logger.info(
            f"Recorded {'successful' if attempt.success else 'failed'} attempt "
            f"{attempt.id} for payment {payment_id}"
        )
        return attempt

    async def list_by_creator(
        self,
        creator_address: str,
        status: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> dict[str, Any]:
        """
        List a creator's payment links, newest first.

        Args:
            creator_address: Wallet that created the links
            status: Filter on the stored status (pending or paid); other values are ignored
            limit: Max results to return (default from config)
            offset: Pagination offset

        Returns:
            Dict with ``links`` as (PaymentLink, PaymentLinkSummary) pairs
            and the ``total``, ``limit`` and ``offset`` used
        """
        if limit is None:
            limit = self.config.default_page_limit
        validate_page_limit(limit, self.config.max_page_limit)

        conditions = [PaymentLink.creator_address == creator_address]
        if status in STORED_PAYMENT_STATUSES:
            conditions.append(PaymentLink.status == status)

        try:
            count_result = await self.db.execute(
                select(func.count()).select_from(PaymentLink).where(*conditions)
            )
            total = count_result.scalar() or 0

            result = await self.db.execute(
                select(PaymentLink)
                .where(*conditions)
                .options(selectinload(PaymentLink.attempts))
                .order_by(PaymentLink.created_at.desc())
                .offset(offset)
                .limit(limit)
                .execution_options(populate_existing=True)
            )
            links = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch payment links for {creator_address}: {e}")
            raise StoreError("Failed to fetch payment links") from e

        now = clock.utcnow()
        summaries: list[tuple[PaymentLink, PaymentLinkSummary]] = [
            (link, summarize_payment_link(link, link.attempts, now)) for link in links
        ]

        return {
            "links": summaries,
            "total": total,
            "limit": limit,
            "offset": offset,
        }
