"""
Tests for correlation IDs on API responses and logs.
"""

import logging
import uuid

import pytest

from swishme.middleware.correlation_id import HEADER_CORRELATION_ID, CorrelationIdFilter


def test_generates_correlation_id(client):
    response = client.get("/health")

    cid = response.headers[HEADER_CORRELATION_ID]
    try:
        uuid.UUID(cid)
    except ValueError:
        pytest.fail("Correlation ID is not a valid UUID")


def test_echoes_incoming_correlation_id(client):
    response = client.get("/health", headers={HEADER_CORRELATION_ID: "slack-retry-42"})
    assert response.headers[HEADER_CORRELATION_ID] == "slack-retry-42"


@pytest.mark.parametrize("incoming", ["has spaces in it", "x" * 200, "new\\nline"])
def test_replaces_unsafe_correlation_id(client, incoming):
    response = client.get("/health", headers={HEADER_CORRELATION_ID: incoming})

    cid = response.headers[HEADER_CORRELATION_ID]
    assert cid != incoming
    uuid.UUID(cid)


def test_error_responses_carry_correlation_id(client):
    response = client.get("/qr/not-a-token.png", headers={HEADER_CORRELATION_ID: "abc-123"})

    assert response.status_code == 400
    assert response.headers[HEADER_CORRELATION_ID] == "abc-123"


def test_slash_command_logs_correlation_id(client, caplog):
    caplog.set_level(logging.INFO, logger="swishme")

    client.post(
        "/swish",
        data={"token": "test_slack_token", "text": "0701234567 50 coffee"},
        headers={HEADER_CORRELATION_ID: "cmd-1"},
    )

    accepted = [r for r in caplog.records if getattr(r, "event_type", None) == "slack.command_accepted"]
    assert len(accepted) == 1
    assert accepted[0].correlation_id == "cmd-1"


def test_filter_fills_missing_correlation_id():
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)
    assert CorrelationIdFilter().filter(record) is True
    assert record.correlation_id == "-"
