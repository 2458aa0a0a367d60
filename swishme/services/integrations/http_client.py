"""
HTTP client helper with standardized timeout configuration.

Every outbound call (the Swish QR API) goes through a client created here so
a slow upstream cannot hold an image request open indefinitely.
"""

import httpx

USER_AGENT = "swishme/0.1"


def get_httpx_timeout() -> httpx.Timeout:
    """
    Get standardized timeout configuration for HTTP clients.

    Returns:
        httpx.Timeout for outbound calls made while serving a request
    """
    return httpx.Timeout(
        10.0,  # Default timeout for all operations
        connect=5.0,  # Time to establish connection
        read=10.0,  # Time between received chunks of the image stream
        write=5.0,  # Time to write request
        pool=5.0,  # Time to get connection from pool
    )


def create_httpx_client(**kwargs) -> httpx.AsyncClient:
    """
    Create an httpx.AsyncClient with standardized timeout configuration.

    Keyword arguments are passed to httpx.AsyncClient (e.g. transport in tests).
    """
    kwargs.setdefault("timeout", get_httpx_timeout())
    headers = {"User-Agent": USER_AGENT, **kwargs.pop("headers", {})}
    return httpx.AsyncClient(headers=headers, **kwargs)
