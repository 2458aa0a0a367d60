"""
Slack message formatting for /swish replies.
"""

from swishme.schemas.payment import PaymentRequest
from swishme.schemas.slack import SlackAttachment, SlackMessage

SLASH_COMMAND = "/swish"

USAGE_HELP_TEXT = (
    "Sorry, I didn't get that :confused: "
    f"Please use `{SLASH_COMMAND} number amount message`"
)


def format_payment_summary(request: PaymentRequest) -> str:
    """Human-readable one-liner, e.g. "Swish 100 kr to +46701234567"."""
    return f"Swish {request.amount} kr to {request.payee}"


def format_slack_message(request: PaymentRequest, image_url: str) -> SlackMessage:
    """Build the in-channel reply showing the QR code image."""
    summary = format_payment_summary(request)
    return SlackMessage(
        response_type="in_channel",
        attachments=[
            SlackAttachment(fallback=summary, text=summary, image_url=image_url),
        ],
    )


def format_usage_help() -> SlackMessage:
    """Ephemeral reply (only visible to the caller) explaining the command syntax."""
    return SlackMessage(response_type="ephemeral", text=USAGE_HELP_TEXT)
