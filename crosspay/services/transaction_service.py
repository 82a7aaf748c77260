"""
Transaction ledger service.

Records direct sends and same-owner cross-chain swaps and lists them per
wallet, relabelling incoming sends as ``received``.
"""

import logging
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crosspay.core.config import Settings
from crosspay.core.constants import (
    DIRECTION_RECEIVED,
    DIRECTION_SENT,
    TRANSACTION_TYPE_RECEIVED,
    TRANSACTION_TYPE_SEND,
    TRANSACTION_TYPE_SWAP,
    TRANSACTION_TYPES,
)
from crosspay.core.errors import StoreError, ValidationError
from crosspay.core.validators import validate_address, validate_base_units, validate_page_limit
from crosspay.models.transactions import Transaction

logger = logging.getLogger(__name__)


def is_received_by(transaction: Transaction, address: str) -> bool:
    """Whether a ledger row is an incoming send for ``address``."""
    return transaction.type == TRANSACTION_TYPE_SEND and transaction.recipient_address == address


def display_type(transaction: Transaction, address: str) -> str:
    """Type shown to ``address``: incoming sends read as ``received``."""
    if is_received_by(transaction, address):
        return TRANSACTION_TYPE_RECEIVED
    return transaction.type


class TransactionService:
    """Service for the send/swap transaction ledger."""

    def __init__(self, db: AsyncSession, config: Settings):
        """
        Initialize the transaction service.

        Args:
            db: Database session
            config: Application settings (pagination defaults)
        """
        self.db = db
        self.config = config

    async def record_transaction(
        self,
        type: str | None,
        wallet_address: str | None,
        from_chain_id: int | None,
        to_chain_id: int | None = None,
        amount: str | None = None,
        recipient_address: str | None = None,
        token_in: str | None = None,
        token_out: str | None = None,
        success: bool | None = False,
        error_message: str | None = None,
        transaction_hash: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Transaction:
        """
        Append one send or swap to the ledger.

        Swaps always settle to the initiating wallet, so any supplied
        recipient is replaced with ``wallet_address``.

        Returns:
            Created Transaction object

        Raises:
            ValidationError: If required or type-specific fields are missing
            StoreError: If the database write fails
        """
        if not type or not wallet_address or not from_chain_id:
            raise ValidationError("Missing required fields: type, walletAddress, fromChainId")

        if type not in TRANSACTION_TYPES:
            raise ValidationError("Invalid transaction type. Must be: send or swap")

        if type == TRANSACTION_TYPE_SEND and not recipient_address:
            raise ValidationError("recipientAddress is required for send transactions")

        if type == TRANSACTION_TYPE_SWAP and (not token_in or not token_out):
            raise ValidationError("tokenIn and tokenOut are required for swap transactions")

        validate_address(wallet_address, "walletAddress")
        if type == TRANSACTION_TYPE_SWAP:
            validate_address(token_in, "tokenIn")
            validate_address(token_out, "tokenOut")
            recipient_address = wallet_address
        else:
            validate_address(recipient_address, "recipientAddress")
        if amount is not None:
            validate_base_units(amount, "amount")

        transaction = Transaction(
            type=type,
            wallet_address=wallet_address,
            from_chain_id=from_chain_id,
            to_chain_id=to_chain_id,
            amount=amount,
            recipient_address=recipient_address,
            token_in=token_in,
            token_out=token_out,
            success=bool(success),
            error_message=error_message,
            transaction_hash=transaction_hash,
            extra_data=metadata or {},
        )
        self.db.add(transaction)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to record transaction: {e}")
            raise StoreError("Failed to record transaction") from e
        await self.db.refresh(transaction)

        logger.info(
            f"Recorded {type} {transaction.id} from {wallet_address} "
            f"(success={transaction.success})"
        )
        return transaction

    def _wallet_conditions(
        self,
        address: str,
        type: str | None,
        direction: str | None,
    ) -> list[Any]:
        sent = Transaction.wallet_address == address
        received = and_(
            Transaction.recipient_address == address,
            Transaction.type == TRANSACTION_TYPE_SEND,
        )

        if type == TRANSACTION_TYPE_RECEIVED:
            return [received]
        if type in TRANSACTION_TYPES:
            return [sent, Transaction.type == type]

        if direction == DIRECTION_SENT:
            return [sent]
        if direction == DIRECTION_RECEIVED:
            return [received]
        return [or_(sent, received)]

    async def list_by_wallet(
        self,
        address: str,
        type: str | None = None,
        success: bool | None = None,
        direction: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> dict[str, Any]:
        """
        List ledger rows sent or received by a wallet, newest first.

        Args:
            address: Wallet address
            type: send, swap (sent rows of that type) or received; other values are ignored
            success: Filter by outcome
            direction: sent, received, or None for both
            limit: Max results to return (default from config)
            offset: Pagination offset

        Returns:
            Dict with ``transactions`` and the ``total``, ``limit`` and ``offset`` used
        """
        if limit is None:
            limit = self.config.default_page_limit
        validate_page_limit(limit, self.config.max_page_limit)

        conditions = self._wallet_conditions(address, type, direction)
        if success is not None:
            conditions.append(Transaction.success == success)

        try:
            count_result = await self.db.execute(
                select(func.count()).select_from(Transaction).where(*conditions)
            )
            total = count_result.scalar() or 0

            result = await self.db.execute(
                select(Transaction)
                .where(*conditions)
                .order_by(Transaction.timestamp.desc())
                .offset(offset)
                .limit(limit)
            )
            transactions = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch transactions for {address}: {e}")
            raise StoreError("Failed to fetch transactions") from e

        return {
            "transactions": list(transactions),
            "total": total,
            "limit": limit,
            "offset": offset,
        }
