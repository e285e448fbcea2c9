"""
HTTP session backends for jarhttp.

This module provides a unified interface for creating HTTP session
backends and re-exports the base abstractions they share.
"""

__all__ = ["create_session", "BaseSession", "BaseResponse"]

from typing import Any

from jarhttp.infra.cookies import CookieJar
from jarhttp.schemas import SessionConfig

from .base import BaseSession
from .response import BaseResponse


def create_session(
    backend: str | None = None,
    cfg: SessionConfig | None = None,
    *,
    jar: CookieJar | None = None,
    **kwargs: Any,
) -> BaseSession:
    """Creates and returns a session backend instance.

    Supported backends:
        * "aiohttp"
        * "httpx"

    Args:
        backend: Name of the backend to use. Defaults to ``cfg.backend``.
        cfg: Optional session configuration to pass to the backend.
        jar: Optional cookie jar shared with other sessions.
        **kwargs: Additional keyword arguments forwarded directly to the
            backend constructor.

    Returns:
        BaseSession: A session for the selected backend. Call ``init()`` or
            use it as an async context manager before sending requests.

    Raises:
        ValueError: If the specified backend name is not supported.
    """
    cfg = cfg or SessionConfig()
    name = backend or cfg.backend
    match name:
        case "aiohttp":
            from ._aiohttp import AiohttpSession

            return AiohttpSession(cfg, jar=jar, **kwargs)
        case "httpx":
            from ._httpx import HttpxSession

            return HttpxSession(cfg, jar=jar, **kwargs)
        case _:
            raise ValueError(f"Unsupported backend: {name!r}")
