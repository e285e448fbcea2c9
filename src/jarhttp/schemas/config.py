"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class SessionConfig:
    """Configuration for HTTP session behavior.

    Attributes:
        backend: HTTP backend name (``aiohttp`` or ``httpx``).
        encoding: Charset used for query parameters, request bodies and as
            the fallback when a response declares none.
        connect_timeout: Default connect timeout in seconds. None disables it.
        read_timeout: Default read timeout in seconds. None disables it.
        max_cookies: Capacity of the session's cookie jar.
        content_type: Default ``Content-Type`` for POST/PUT bodies. None means
            ``text/xml`` in ``encoding``.
        user_agent: Custom User-Agent string.
        headers: Headers attached to every request. None means the defaults.
        verify_ssl: Whether to verify SSL certificates.
        trust_env: Whether environment variables are used for proxies.
    """

    backend: str = "aiohttp"
    encoding: str = "utf-8"
    connect_timeout: float | None = None
    read_timeout: float | None = None
    max_cookies: int = 4
    content_type: str | None = None
    user_agent: str | None = None
    headers: dict[str, str] | None = None
    verify_ssl: bool = True
    trust_env: bool = False
