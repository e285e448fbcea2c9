import asyncio
from typing import Any

import aiohttp

from .base import BaseSession
from .response import BaseResponse


class AiohttpSession(BaseSession):
    """Session backend implemented with aiohttp for asynchronous HTTP requests."""

    transport_errors = (aiohttp.ClientError, asyncio.TimeoutError)

    _session: aiohttp.ClientSession | None

    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        if self._session and not self._session.closed:
            return

        connector = aiohttp.TCPConnector(ssl=self._verify_ssl, force_close=True)

        # cookies are handled by self.jar only
        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=None),
            cookie_jar=aiohttp.DummyCookieJar(),
            trust_env=self._trust_env,
        )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
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
        timeout = aiohttp.ClientTimeout(
            total=None,
            connect=connect_timeout,
            sock_read=read_timeout,
        )
        async with self.session.request(
            method,
            url,
            headers=headers,
            data=body,
            allow_redirects=False,
            timeout=timeout,
        ) as r:
            content = await r.read()
            return BaseResponse(
                content=content,
                headers=list(r.headers.items()),
                status=r.status,
                encoding=r.charset or self._encoding,
            )

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("Session is not initialized or has been shut down.")
        return self._session
