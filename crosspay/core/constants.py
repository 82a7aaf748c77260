"""
Application-wide constants.

Patterns and defaults shared by the configuration, request schemas and
services.
"""

DEFAULT_APP_PORT = 3000

# Testnets served by the OnlySwaps router deployment
BASE_SEPOLIA_CHAIN_ID = 84532
AVALANCHE_FUJI_CHAIN_ID = 43113
DEFAULT_SUPPORTED_CHAIN_IDS = [BASE_SEPOLIA_CHAIN_ID, AVALANCHE_FUJI_CHAIN_ID]

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
BASE_UNITS_PATTERN = r"^\d+$"

DEFAULT_EXPIRES_IN_HOURS = 24
MIN_EXPIRES_IN_HOURS = 1
MAX_EXPIRES_IN_HOURS = 168

DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 200

# Stored payment link status
PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"
STORED_PAYMENT_STATUSES = (PAYMENT_STATUS_PENDING, PAYMENT_STATUS_PAID)

# Derived payment link status
PAYMENT_STATUS_COMPLETED = "completed"
PAYMENT_STATUS_EXPIRED = "expired"
PAYMENT_STATUS_FAILED = "failed"

TRANSACTION_TYPE_SEND = "send"
TRANSACTION_TYPE_SWAP = "swap"
TRANSACTION_TYPE_RECEIVED = "received"  # view-only label, never stored
TRANSACTION_TYPES = (TRANSACTION_TYPE_SEND, TRANSACTION_TYPE_SWAP)

DIRECTION_SENT = "sent"
DIRECTION_RECEIVED = "received"
