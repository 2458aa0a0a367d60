"""
Slash-command endpoint - POST /swish.

Slack posts the command as application/x-www-form-urlencoded; JSON bodies are
accepted too. Bad command text is answered with an ephemeral usage hint
rather than an HTTP error.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from swishme.api.dependencies import get_token_codec
from swishme.api.images import build_image_url
from swishme.core.config import Settings, get_settings
from swishme.core.errors import FormatError, MethodNotAllowed
from swishme.middleware.correlation_id import get_correlation_id
from swishme.schemas.slack import SlackMessage
from swishme.services.command_parser import parse_command
from swishme.services.slack_responder import format_slack_message, format_usage_help
from swishme.services.slack_verification import verify_slack_token
from swishme.services.token_codec import TokenCodec

logger = logging.getLogger(__name__)

router = APIRouter()

# Registered for every method so non-POST calls get a descriptive 405
COMMAND_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_command_body(request: Request) -> dict[str, Any] | None:
    """Parse the slash-command body; None when it cannot be read."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = json.loads(await request.body())
        except ValueError as e:
            logger.warning(f"Invalid JSON payload in slash command: {e}")
            return None
        return payload if isinstance(payload, dict) else None

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


@router.api_route(
    "/swish",
    methods=COMMAND_METHODS,
    response_model=SlackMessage,
    response_model_exclude_defaults=True,
)
async def swish_command(
    request: Request,
    settings: Settings = Depends(get_settings),
    codec: TokenCodec = Depends(get_token_codec),
) -> SlackMessage:
    if request.method != "POST":
        raise MethodNotAllowed(f"Only POST requests are accepted, got {request.method}")

    body = await _read_command_body(request)
    verify_slack_token(body, settings.slack_token)

    correlation_id = get_correlation_id(request)
    try:
        payment = parse_command(body.get("text"))
    except FormatError as e:
        logger.info(
            f"slack.command_rejected correlation_id={correlation_id}: {e.message}",
            extra={
                "correlation_id": correlation_id,
                "event_type": "slack.command_rejected",
            },
        )
        return format_usage_help()

    image_url = build_image_url(settings.image_base_url, codec.encode(payment))
    logger.info(
        f"slack.command_accepted correlation_id={correlation_id} amount={payment.amount}",
        extra={
            "correlation_id": correlation_id,
            "event_type": "slack.command_accepted",
        },
    )
    return format_slack_message(payment, image_url)
