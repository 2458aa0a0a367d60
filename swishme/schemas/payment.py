"""
Payment request and Swish QR API schemas.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Swish allows at most 50 characters in the payment message
MAX_MESSAGE_LENGTH = 50


class PaymentRequest(BaseModel):
    """A Swish payment request extracted from a /swish command."""

    model_config = ConfigDict(frozen=True)

    payee: StrictStr
    amount: StrictInt = Field(gt=0)
    message: StrictStr = Field(max_length=MAX_MESSAGE_LENGTH)


class EditableField(BaseModel):
    """A prefilled value the Swish app user may or may not change."""

    value: Any
    editable: bool


class QRCodeRequest(BaseModel):
    """Request body for the Swish prefilled QR code generator."""

    format: Literal["png", "jpg", "svg"] = "png"
    size: int = 512
    message: EditableField
    amount: EditableField
    payee: EditableField
