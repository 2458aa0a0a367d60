"""
Slack slash-command response schemas.
"""

from typing import Literal

from pydantic import BaseModel, Field


class SlackAttachment(BaseModel):
    fallback: str
    text: str
    image_url: str


class SlackMessage(BaseModel):
    """Reply body for a slash command (in_channel or ephemeral)."""

    response_type: Literal["in_channel", "ephemeral"]
    text: str | None = None
    attachments: list[SlackAttachment] = Field(default_factory=list)
