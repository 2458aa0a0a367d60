from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    # Verification token from the Slack app's "Basic Information" page
    slack_token: str

    # Token cipher (AES-SIV key is derived from the secret with PBKDF2)
    cipher_secret: str
    cipher_salt: str = "swishme-token-v1"
    cipher_iterations: int = 150_000

    # Swish QR generator (prefilled payment codes)
    swish_qr_url: str = "https://mpc.getswish.net/qrg-swish/api/v1/prefilled"
    qr_image_size: int = 512

    # Public base URL of the image endpoint, embedded in Slack replies
    image_base_url: str = "http://localhost:8000/qr"


# Settings will load from environment variables or .env file
# Required fields will raise ValidationError if missing (fail-fast)
settings = Settings()


def get_settings() -> Settings:
    """Dependency returning the process-wide settings (overridable in tests)."""
    return settings
