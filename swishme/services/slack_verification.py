"""
Slack slash-command verification.

Slash commands carry the app's verification token in the "token" form field.
The request is accepted only when it matches the configured SLACK_TOKEN
exactly.
"""

import hmac
import logging
from collections.abc import Mapping
from typing import Any

from swishme.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


def verify_slack_token(body: Mapping[str, Any] | None, expected_token: str) -> None:
    """
    Verify that an inbound slash-command body came from Slack.

    Args:
        body: Parsed request body (form fields or JSON object)
        expected_token: Configured Slack verification token

    Raises:
        AuthenticationError: If the token is missing or does not match
    """
    if not expected_token:
        # An unset secret must not match an empty token
        logger.error("SLACK_TOKEN is not configured - rejecting slash command")
        raise AuthenticationError("Invalid credentials")

    received = body.get("token") if isinstance(body, Mapping) else None
    if not isinstance(received, str) or not received:
        logger.warning("Slash command without token field - request rejected")
        raise AuthenticationError("Invalid credentials")

    if not hmac.compare_digest(received.encode("utf-8"), expected_token.encode("utf-8")):
        logger.warning(
            "Invalid Slack verification token - request rejected. "
            "This may indicate a spoofed request or misconfigured SLACK_TOKEN."
        )
        raise AuthenticationError("Invalid credentials")
