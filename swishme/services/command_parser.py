"""
Command parser - turns the text typed after /swish into a payment request.

Accepted shape: "<payee> <amount> <message>", where the payee is a phone
number (optional leading "+", digit groups separated by single spaces), the
amount a positive integer without leading zeros, and the message the rest of
the line. Examples:
- "+46701234567 100 lunch"
- "070 123 45 67 50 coffee and cake"
"""

import logging
import re

from swishme.core.errors import FormatError
from swishme.schemas.payment import MAX_MESSAGE_LENGTH, PaymentRequest

logger = logging.getLogger(__name__)

# Payee groups are written without nested repetition to keep matching linear
COMMAND_FORMAT = re.compile(
    r"(?P<payee>\+?(?:\s?[0-9]+(?:\s[0-9]+)*)?)"
    r"\s+(?P<amount>[1-9][0-9]*)"
    r"\s+(?P<message>.*)"
)


def parse_command(text: str | None) -> PaymentRequest:
    """
    Parse and validate slash-command text.

    Args:
        text: Raw text from the Slack payload

    Returns:
        PaymentRequest with the message truncated to 50 characters

    Raises:
        FormatError: If the text does not match the expected shape
    """
    if not isinstance(text, str) or not text:
        raise FormatError("Invalid format")

    match = COMMAND_FORMAT.fullmatch(text.strip())
    if not match:
        raise FormatError("Invalid format")

    message = match.group("message")
    if len(message) > MAX_MESSAGE_LENGTH:
        logger.debug(f"Truncating {len(message)}-character message to {MAX_MESSAGE_LENGTH}")
        message = message[:MAX_MESSAGE_LENGTH]

    try:
        amount = int(match.group("amount"))
    except ValueError as e:
        # Digit runs past the interpreter's int conversion limit
        raise FormatError("Invalid format") from e

    return PaymentRequest(payee=match.group("payee"), amount=amount, message=message)
