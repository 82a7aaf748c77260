"""
Derived payment link status.

The stored status only ever moves from ``pending`` to ``paid``. What the
creator sees is computed at read time from the stored facts, so an attempt
that was recorded without the link being marked paid still reports the
link as completed.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from crosspay.core.constants import (
    PAYMENT_STATUS_COMPLETED,
    PAYMENT_STATUS_EXPIRED,
    PAYMENT_STATUS_FAILED,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
)
from crosspay.models.payment_links import PaymentAttempt, PaymentLink

UNKNOWN = "unknown"


@dataclass
class PaymentLinkSummary:
    """Derived view of one payment link and its attempts."""

    status: str
    attempt_count: int
    successful_attempts: int
    failed_attempts: int
    last_attempt: PaymentAttempt | None
    completion_details: dict[str, Any] | None


def _newest_first(attempts: Sequence[PaymentAttempt]) -> list[PaymentAttempt]:
    return sorted(attempts, key=lambda attempt: attempt.attempt_timestamp, reverse=True)


def summarize_payment_link(
    link: PaymentLink,
    attempts: Sequence[PaymentAttempt],
    now: datetime,
) -> PaymentLinkSummary:
    """
    Compute the user-facing status of a payment link.

    Priority order:
        1. any successful attempt, or a link stored as paid -> completed
        2. past expiry -> expired
        3. any failed attempt -> failed
        4. otherwise -> pending

    Args:
        link: The stored payment link
        attempts: Every attempt recorded against the link
        now: Reference time for the expiry check

    Returns:
        PaymentLinkSummary with status, attempt counters and completion details
    """
    ordered = _newest_first(attempts)
    successful = [attempt for attempt in ordered if attempt.success]
    failed = [attempt for attempt in ordered if not attempt.success]
    last_attempt = ordered[0] if ordered else None

    status = PAYMENT_STATUS_PENDING
    completion_details = None

    if successful:
        winner = successful[0]
        status = PAYMENT_STATUS_COMPLETED
        completion_details = {
            "completed_at": winner.attempt_timestamp,
            "transaction_hash": winner.transaction_hash or link.transaction_hash,
            "attempt_address": winner.attempt_address,
            "attempt_chain_id": winner.attempt_chain_id,
        }
    elif link.status == PAYMENT_STATUS_PAID and link.transaction_hash:
        status = PAYMENT_STATUS_COMPLETED
        completion_details = {
            "completed_at": link.paid_at,
            "transaction_hash": link.transaction_hash,
            "attempt_address": last_attempt.attempt_address if last_attempt else UNKNOWN,
            "attempt_chain_id": last_attempt.attempt_chain_id if last_attempt else UNKNOWN,
        }
    elif now > link.expires_at:
        status = PAYMENT_STATUS_EXPIRED
    elif failed:
        status = PAYMENT_STATUS_FAILED

    return PaymentLinkSummary(
        status=status,
        attempt_count=len(ordered),
        successful_attempts=len(successful),
        failed_attempts=len(failed),
        last_attempt=last_attempt,
        completion_details=completion_details,
    )


def derive_payment_status(
    link: PaymentLink,
    attempts: Sequence[PaymentAttempt],
    now: datetime,
) -> str:
    """Shortcut returning only the derived status string."""
    return summarize_payment_link(link, attempts, now).status
