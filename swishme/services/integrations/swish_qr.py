"""
Swish QR generator client.

Requests a prefilled payment QR code. The payee and amount are locked in the
Swish app; the message stays editable by the payer.
"""

import logging

import httpx

from swishme.core.errors import UpstreamError
from swishme.schemas.payment import EditableField, PaymentRequest, QRCodeRequest

logger = logging.getLogger(__name__)


def build_qr_request(request: PaymentRequest, size: int = 512) -> QRCodeRequest:
    """Build the QR API request body for a payment request."""
    return QRCodeRequest(
        format="png",
        size=size,
        message=EditableField(value=request.message, editable=True),
        amount=EditableField(value=request.amount, editable=False),
        payee=EditableField(value=request.payee, editable=False),
    )


async def open_qr_stream(
    client: httpx.AsyncClient, url: str, qr_request: QRCodeRequest
) -> httpx.Response:
    """
    POST the QR request and return the response with its body still unread.

    The caller owns the returned response and must close it (aclose()) once the
    body has been relayed.

    Raises:
        UpstreamError: On transport failure or any status other than 200
    """
    request = client.build_request(
        "POST",
        url,
        json=qr_request.model_dump(),
        headers={"Accept": "image/*"},
    )
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as e:
        logger.error(f"Swish QR request failed - error_type={type(e).__name__}: {e}")
        raise UpstreamError("Swish QR service unavailable") from e

    if response.status_code != 200:
        await response.aclose()
        logger.warning(f"Swish QR API answered {response.status_code} for {url}")
        raise UpstreamError(f"Unexpected HTTP status {response.status_code}")

    return response
