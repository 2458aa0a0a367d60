import pydantic
import pytest

from swishme.core.config import Settings
from swishme.main import validate_settings


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["app_env"] == "dev"
    assert "swish_qr_url" in data


def test_health_does_not_expose_secrets(client):
    response = client.get("/health")
    assert "test_slack_token" not in response.text
    assert "test-cipher-secret" not in response.text


def test_valid_dev_settings_pass():
    assert validate_settings(Settings()) == []


def test_missing_required_settings_reported():
    errors = validate_settings(Settings(slack_token="", cipher_secret=""))
    assert len(errors) == 1
    assert "SLACK_TOKEN" in errors[0]
    assert "CIPHER_SECRET" in errors[0]


def test_non_positive_iterations_reported():
    errors = validate_settings(Settings(cipher_iterations=0))
    assert any("CIPHER_ITERATIONS" in e for e in errors)


def test_production_requires_strong_secret_and_https():
    errors = validate_settings(
        Settings(
            app_env="production",
            cipher_secret="short",
            image_base_url="http://swishme.example.com/qr",
        )
    )
    assert any("CIPHER_SECRET" in e for e in errors)
    assert any("IMAGE_BASE_URL" in e for e in errors)


def test_production_with_good_settings_passes():
    settings = Settings(
        app_env="production",
        cipher_secret="a-long-production-cipher-secret",
        image_base_url="https://swishme.example.com/qr",
    )
    assert validate_settings(settings) == []


def test_settings_are_read_only():
    settings = Settings()
    with pytest.raises(pydantic.ValidationError):
        settings.slack_token = "changed"
