"""FastAPI dependencies for API routes."""

from collections.abc import Callable
from functools import lru_cache

import httpx
from fastapi import Depends

from swishme.core.config import Settings, get_settings
from swishme.services.integrations.http_client import create_httpx_client
from swishme.services.token_codec import TokenCodec


@lru_cache(maxsize=4)
def _build_token_codec(secret: str, salt: str, iterations: int) -> TokenCodec:
    return TokenCodec(secret, salt, iterations)


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    """Return the codec for the configured cipher secret (built once)."""
    return _build_token_codec(
        settings.cipher_secret, settings.cipher_salt, settings.cipher_iterations
    )


def get_http_client_factory() -> Callable[[], httpx.AsyncClient]:
    """
    Return the factory used to create outbound HTTP clients.

    Handlers own the client they create; streamed responses close it once the
    body has been sent.
    """
    return create_httpx_client
