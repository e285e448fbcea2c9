from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any

import httpx

from .base import BaseSession
from .response import BaseResponse


class HttpxSession(BaseSession):
    """Session backend based on httpx providing async HTTP/1.1 support."""

    transport_errors = (httpx.TransportError,)

    _session: httpx.AsyncClient | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.is_closed:
            return

        # a jar that refuses every cookie, so only self.jar keeps state
        blocked = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))

        self._session = httpx.AsyncClient(
            http2=False,
            timeout=httpx.Timeout(None),
            verify=self._verify_ssl,
            cookies=blocked,
            limits=httpx.Limits(max_keepalive_connections=0),
            follow_redirects=False,
            trust_env=self._trust_env,
        )

    async def close(self) -> None:
        """
        Shutdown and clean up any resources.
        """
        if self._session is None:
            return
        if not self._session.is_closed:
            await self._session.aclose()
        self._session = None

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        body: bytes | None,
        connect_timeout: float | None,
        read_timeout: float | None,
    ) -> BaseResponse:
        timeout = httpx.Timeout(None, connect=connect_timeout, read=read_timeout)
        r = await self.session.request(
            method,
            url,
            headers=headers,
            content=body,
            timeout=timeout,
            follow_redirects=False,
        )
        return BaseResponse(
            content=r.content,
            headers=r.headers.multi_items(),
            status=r.status_code,
            encoding=r.charset_encoding or self._encoding,
        )

    @property
    def session(self) -> httpx.AsyncClient:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session
