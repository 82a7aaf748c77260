"""
Log redaction for sensitive data.

Wallet flows occasionally put signing material in error strings; this
module keeps private keys and bearer tokens out of the log output.
"""

import logging
import re
from typing import Literal, Optional

# Patterns to detect and redact sensitive information
SENSITIVE_PATTERNS = [
    # Private keys (0x followed by exactly 64 hex characters). Transaction
    # hashes have the same shape and are redacted too.
    (r'0x[a-fA-F0-9]{64}(?![a-fA-F0-9])', '0x*************REDACTED*************'),
    # Bearer tokens
    (r'Bearer [a-zA-Z0-9\-._~+/]+=*', 'Bearer ***REDACTED***'),
    # Authorization headers with tokens
    (r'Authorization: [^\s]+', 'Authorization: ***REDACTED***'),
]


class RedactingFormatter(logging.Formatter):
    """
    Logging formatter that redacts sensitive information.

    Sensitive patterns are replaced with placeholders after the record has
    been formatted.
    """

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        style: Literal['%', '{', '$'] = '%'
    ) -> None:
        """Initialize the redacting formatter."""
        super().__init__(fmt, datefmt, style)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        for pattern, replacement in SENSITIVE_PATTERNS:
            message = re.sub(pattern, replacement, message, flags=re.IGNORECASE)

        return message


def configure_logging(level: str, fmt: str) -> None:
    """Configure root logging with the redacting formatter."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=fmt)
    formatter = RedactingFormatter(fmt)
    for handler in logging.getLogger().handlers:
        handler.setFormatter(formatter)
