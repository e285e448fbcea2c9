from __future__ import annotations

from typing import Any

import pytest

from jarhttp.infra.cookies import CookieJar
from jarhttp.infra.sessions import create_session
from jarhttp.infra.sessions.base import BaseSession
from jarhttp.schemas import SessionConfig

SUPPORTED_BACKENDS: set[str] = {"aiohttp", "httpx"}


def safe_create(
    backend: str,
    cfg: SessionConfig | None = None,
    jar: CookieJar | None = None,
    **kw: Any,
) -> BaseSession:
    """
    Create backend instance, skipping test if backend dependency is missing.
    """
    try:
        return create_session(backend, cfg or SessionConfig(), jar=jar, **kw)
    except ImportError as e:
        pytest.skip(f"backend {backend!r} not installed: {e}")


def parse_cookie_header(header: str) -> dict[str, str]:
    """
    Split a ``Cookie`` request header into a name/value dictionary.
    """
    result: dict[str, str] = {}
    for part in header.split(";"):
        key, sep, value = part.partition("=")
        if sep and key.strip():
            result[key.strip()] = value.strip()
    return result
