"""
Pydantic schemas for the transaction ledger.
"""
from datetime import datetime
from typing import Any

from pydantic import Field

from crosspay.models.transactions import Transaction
from crosspay.schemas.common import CamelModel, Pagination


class RecordTransactionRequest(CamelModel):
    """Body of POST /api/transaction.

    Required fields are checked by the service so that missing ones are
    reported with the ledger's own messages.
    """
    type: str | None = Field(None, description="send or swap")
    wallet_address: str | None = Field(None, description="Initiating wallet")
    from_chain_id: int | None = None
    to_chain_id: int | None = None
    amount: str | None = Field(None, description="Amount in token base units")
    recipient_address: str | None = Field(None, description="Required for send; ignored for swap")
    token_in: str | None = None
    token_out: str | None = None
    success: bool | None = False
    error_message: str | None = None
    transaction_hash: str | None = None
    metadata: dict[str, Any] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "type": "send",
                    "walletAddress": "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa1",
                    "fromChainId": 84532,
                    "recipientAddress": "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb2",
                    "amount": "5000000000000000000",
                    "success": True,
                    "transactionHash": "0xdead",
                }
            ]
        }
    }


class TransactionRecord(CamelModel):
    """Ledger row as returned by the API."""
    id: str
    type: str = Field(..., description="send, swap, or received (view only)")
    wallet_address: str
    from_chain_id: int
    to_chain_id: int | None = None
    amount: str | None = None
    recipient_address: str | None = None
    token_in: str | None = None
    token_out: str | None = None
    success: bool
    error_message: str | None = None
    transaction_hash: str | None = None
    timestamp: datetime
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_model(cls, transaction: Transaction, type: str | None = None) -> "TransactionRecord":
        return cls(
            id=str(transaction.id),
            type=type or transaction.type,
            wallet_address=transaction.wallet_address,
            from_chain_id=transaction.from_chain_id,
            to_chain_id=transaction.to_chain_id,
            amount=transaction.amount,
            recipient_address=transaction.recipient_address,
            token_in=transaction.token_in,
            token_out=transaction.token_out,
            success=transaction.success,
            error_message=transaction.error_message,
            transaction_hash=transaction.transaction_hash,
            timestamp=transaction.timestamp,
            metadata=transaction.extra_data,
        )


class TransactionList(CamelModel):
    transactions: list[TransactionRecord]
    pagination: Pagination
