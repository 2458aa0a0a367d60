"""
Pydantic schemas for payment requests, the Swish QR API and Slack replies.
"""

from swishme.schemas.payment import (
    MAX_MESSAGE_LENGTH,
    EditableField,
    PaymentRequest,
    QRCodeRequest,
)
from swishme.schemas.slack import SlackAttachment, SlackMessage

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "PaymentRequest",
    "EditableField",
    "QRCodeRequest",
    "SlackAttachment",
    "SlackMessage",
]
