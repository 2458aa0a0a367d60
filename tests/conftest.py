import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ["APP_ENV"] = "dev"
os.environ.setdefault("SLACK_TOKEN", "test_slack_token")
os.environ.setdefault("CIPHER_SECRET", "test-cipher-secret-0123456789")
os.environ.setdefault("CIPHER_ITERATIONS", "1000")  # Keep key derivation fast in tests
os.environ.setdefault("SWISH_QR_URL", "https://qr.swish.test/api/v1/prefilled")
os.environ.setdefault("IMAGE_BASE_URL", "https://swishme.test/qr")

from swishme.api.dependencies import get_http_client_factory
from swishme.core.config import settings
from swishme.main import app
from swishme.services.integrations.http_client import create_httpx_client
from swishme.services.token_codec import TokenCodec
from tests.helpers.swish_qr import FakeSwishQR


@pytest.fixture
def codec():
    """Codec built from the test settings (same key the app uses)."""
    return TokenCodec(settings.cipher_secret, settings.cipher_salt, settings.cipher_iterations)


@pytest.fixture
def swish_qr():
    return FakeSwishQR()


@pytest.fixture
def client(swish_qr):
    """Test client whose outbound HTTP calls go to the fake Swish QR API."""

    def client_factory():
        return create_httpx_client(transport=httpx.MockTransport(swish_qr))

    app.dependency_overrides[get_http_client_factory] = lambda: client_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
