"""
QR image endpoint - GET /qr/{token}.png.

Hit by Slack when it unfurls the image attached to a /swish reply. The token
is decoded back into the payment request, the Swish QR API is asked for a
prefilled code and the image is streamed through unchanged.
"""

import logging
import re
from collections.abc import AsyncIterator, Callable

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from swishme.api.dependencies import get_http_client_factory, get_token_codec
from swishme.core.config import Settings, get_settings
from swishme.core.errors import DecodeError, FormatError
from swishme.middleware.correlation_id import get_correlation_id
from swishme.services.integrations.swish_qr import build_qr_request, open_qr_stream
from swishme.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)

router = APIRouter()

# The token is a single non-empty path segment
IMAGE_PATH_FORMAT = re.compile(r"^/?([^/]+)\.png$")

DEFAULT_IMAGE_CONTENT_TYPE = "image/png"

# Upstream headers relayed to the caller (content-encoding keeps content-length truthful)
RELAYED_HEADERS = ("content-type", "content-length", "content-encoding")


def build_image_url(base_url: str, token: str) -> str:
    """Public URL of the QR image for a token, e.g. https://host/qr/<token>.png."""
    return f"{base_url.rstrip('/')}/{token}.png"


def extract_token(image_path: str) -> str:
    """
    Extract the token from an image path of the form "[/]<token>.png".

    Raises:
        FormatError: If the path has no ".png" suffix or an empty token
    """
    match = IMAGE_PATH_FORMAT.match(image_path or "")
    if not match:
        raise FormatError("Invalid URL format")
    return match.group(1)


async def _close_upstream(upstream: httpx.Response, client: httpx.AsyncClient) -> None:
    await upstream.aclose()
    await client.aclose()


async def _relay_body(upstream: httpx.Response, client: httpx.AsyncClient) -> AsyncIterator[bytes]:
    try:
        async for chunk in upstream.aiter_raw():
            yield chunk
    finally:
        await _close_upstream(upstream, client)


@router.get("/qr/{image_path:path}")
async def qr_image(
    image_path: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    codec: TokenCodec = Depends(get_token_codec),
    client_factory: Callable[[], httpx.AsyncClient] = Depends(get_http_client_factory),
):
    token = extract_token(image_path)

    try:
        payment = codec.decode(token)
    except DecodeError as e:
        raise DecodeError(f"Failed to decipher token: {e.message}") from e

    correlation_id = get_correlation_id(request)
    logger.info(
        f"qr.image_requested correlation_id={correlation_id}",
        extra={
            "correlation_id": correlation_id,
            "event_type": "qr.image_requested",
        },
    )

    qr_request = build_qr_request(payment, size=settings.qr_image_size)
    client = client_factory()
    try:
        upstream = await open_qr_stream(client, settings.swish_qr_url, qr_request)
    except BaseException:
        await client.aclose()
        raise

    headers = {name: upstream.headers[name] for name in RELAYED_HEADERS if name in upstream.headers}
    headers.setdefault("content-type", DEFAULT_IMAGE_CONTENT_TYPE)

    return StreamingResponse(
        _relay_body(upstream, client),
        status_code=200,
        headers=headers,
        background=BackgroundTask(_close_upstream, upstream, client),
    )
