import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI

from swishme.api.errors import register_error_handlers
from swishme.api.images import router as images_router
from swishme.api.slack import router as slack_router
from swishme.core.config import Settings, settings
from swishme.middleware.correlation_id import CorrelationIdFilter, CorrelationIdMiddleware

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"

MIN_PRODUCTION_SECRET_LENGTH = 16


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, CorrelationIdFilter) for f in handler.filters):
            handler.addFilter(CorrelationIdFilter())


def validate_settings(config: Settings) -> list[str]:
    """
    Return configuration problems that must stop the app from starting.

    Empty list means the configuration is usable.
    """
    errors = []

    # Validate critical settings (fail-fast if empty)
    required_settings = ["slack_token", "cipher_secret", "swish_qr_url", "image_base_url"]
    missing = [key for key in required_settings if not getattr(config, key, None)]
    if missing:
        errors.append(f"Missing required environment variables: {', '.join(k.upper() for k in missing)}")

    if config.cipher_iterations < 1:
        errors.append("CIPHER_ITERATIONS must be positive")

    # Production-specific validation
    if config.app_env == "production":
        if len(config.cipher_secret) < MIN_PRODUCTION_SECRET_LENGTH:
            errors.append(
                f"CIPHER_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters in production."
            )
        if urlparse(config.image_base_url).scheme != "https":
            errors.append(
                "IMAGE_BASE_URL must use https in production; Slack will not unfurl plain http images."
            )

    return errors


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)

    errors = validate_settings(settings)
    if errors:
        error_message = (
            "Configuration validation failed:\n\n"
            + "\n".join(f"  - {error}" for error in errors)
            + "\n\nThe application cannot start with these missing or invalid settings."
        )
        logger.error(error_message)
        raise RuntimeError(error_message)

    # Log configuration summary (no secrets)
    logger.info(
        "Startup: Configuration loaded - "
        f"Environment: {settings.app_env}, "
        f"Swish QR API: {settings.swish_qr_url}, "
        f"Image base URL: {settings.image_base_url}"
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="SwishMe", lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware)
    register_error_handlers(app)
    app.include_router(slack_router, tags=["slack"])
    app.include_router(images_router, tags=["images"])

    @app.get("/health")
    def health():
        """Health check endpoint. Never exposes secrets."""
        return {
            "ok": True,
            "app_env": settings.app_env,
            "swish_qr_url": settings.swish_qr_url,
        }

    return app


app = create_app()
