from __future__ import annotations

import abc
import logging
import types
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from jarhttp.infra.cookies import CookieJar
from jarhttp.infra.http_defaults import (
    BODY_METHODS,
    DEFAULT_HEADERS,
    default_content_type,
)
from jarhttp.infra.url_utils import QueryParams, build_url, encode_body, has_header
from jarhttp.schemas import SessionConfig

from .response import BaseResponse

logger = logging.getLogger(__name__)


class BaseSession(abc.ABC):
    """Async HTTP session with an attached cookie jar.

    Every request looks up the jar before it is sent and feeds the
    ``Set-Cookie`` headers of the response back into it. Redirects are
    returned as-is, status codes are not interpreted and transport errors
    propagate unchanged from the backend.
    """

    #: Exception types the backend raises for connection failures and timeouts.
    transport_errors: ClassVar[tuple[type[BaseException], ...]] = ()

    def __init__(
        self,
        cfg: SessionConfig | None = None,
        *,
        jar: CookieJar | None = None,
        **kwargs: Any,
    ) -> None:
        """Initializes the session using the provided configuration.

        Args:
            cfg: Optional configuration object defining session behavior.
            jar: Cookie jar to use. Pass the same jar to several sessions to
                share cookies between them. A new jar sized by
                ``cfg.max_cookies`` is created when omitted.
            **kwargs: Additional parameters reserved for backend-specific
                initialization.
        """
        cfg = cfg or SessionConfig()

        self._encoding = cfg.encoding
        self._connect_timeout = cfg.connect_timeout
        self._read_timeout = cfg.read_timeout
        self._content_type = cfg.content_type or default_content_type(cfg.encoding)
        self._verify_ssl = cfg.verify_ssl
        self._trust_env = cfg.trust_env
        self._session: Any = None

        self.jar = jar if jar is not None else CookieJar(cfg.max_cookies)

        self._headers = (
            cfg.headers.copy() if cfg.headers is not None else DEFAULT_HEADERS.copy()
        )
        if cfg.user_agent:
            self._headers["User-Agent"] = cfg.user_agent

    @abc.abstractmethod
    async def init(
        self,
        **kwargs: Any,
    ) -> None:
        """Initializes backend-specific resources. Calling it twice is a no-op."""
        ...

    @abc.abstractmethod
    async def close(self) -> None:
        """Releases and cleans up any allocated resources."""
        ...

    @abc.abstractmethod
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
        """Sends one request and reads the whole response.

        Implementations must not follow redirects, must not keep cookies of
        their own and must release the connection on every exit path.

        Raises:
            RuntimeError: If the session has not been initialized.
        """
        ...

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        data: str | None = None,
        headers: Mapping[str, str] | None = None,
        content_type: str | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> BaseResponse:
        """Performs an HTTP request and updates the cookie jar.

        Args:
            method: HTTP method. POST and PUT carry a body, others do not.
            url: Target URL.
            params: Query parameters appended to ``url``.
            data: Request body for POST/PUT. None sends an empty body.
            headers: Extra headers. They override every default header,
                including ``Cookie``, ``Content-Type`` and ``Content-Length``.
            content_type: ``Content-Type`` for the body when ``headers`` has
                none. Defaults to the configured content type.
            connect_timeout: Connect timeout in seconds, overriding the
                configured default.
            read_timeout: Read timeout in seconds, overriding the configured
                default.

        Returns:
            BaseResponse: The fully read response.

        Raises:
            EncodingError: If the query or body cannot be encoded. Nothing
                has been sent in that case.
            RuntimeError: If the session has not been initialized.
        """
        method = method.upper()
        final_url = build_url(url, params, self._encoding)
        body = encode_body(data, self._encoding) if method in BODY_METHODS else None
        req_headers = self._build_headers(final_url, headers, body, content_type)

        logger.debug("%s %s", method, final_url)
        resp = await self._send(
            method,
            final_url,
            headers=req_headers,
            body=body,
            connect_timeout=(
                connect_timeout if connect_timeout is not None else self._connect_timeout
            ),
            read_timeout=(
                read_timeout if read_timeout is not None else self._read_timeout
            ),
        )

        self.jar.ingest(final_url, resp.set_cookies)
        return resp

    async def get(
        self,
        url: str,
        params: QueryParams | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> str:
        """Performs a GET request and returns the response body."""
        resp = await self.request(
            "GET",
            url,
            params=params,
            headers=headers,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )
        return resp.text

    async def post(
        self,
        url: str,
        data: str | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        content_type: str | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> str:
        """Performs a POST request and returns the response body."""
        resp = await self.request(
            "POST",
            url,
            data=data,
            headers=headers,
            content_type=content_type,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )
        return resp.text

    async def put(
        self,
        url: str,
        data: str | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        content_type: str | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> str:
        """Performs a PUT request and returns the response body."""
        resp = await self.request(
            "PUT",
            url,
            data=data,
            headers=headers,
            content_type=content_type,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )
        return resp.text

    async def delete(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        connect_timeout: float | None = None,
        read_timeout: float | None = None,
    ) -> str:
        """Performs a DELETE request and returns the response body."""
        resp = await self.request(
            "DELETE",
            url,
            headers=headers,
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )
        return resp.text

    def _build_headers(
        self,
        url: str,
        headers: Mapping[str, str] | None,
        body: bytes | None,
        content_type: str | None,
    ) -> dict[str, str]:
        merged = self._headers.copy()

        cookie = self.jar.header_for(url)
        if cookie:
            merged["Cookie"] = cookie

        for key, value in (headers or {}).items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = value

        if body is not None:
            if not has_header(merged, "Content-Type"):
                merged["Content-Type"] = content_type or self._content_type
            if not has_header(merged, "Content-Length"):
                merged["Content-Length"] = str(len(body))
        return merged

    @property
    def headers(self) -> dict[str, str]:
        """Returns a copy of the default request headers."""
        return self._headers.copy()

    @property
    def encoding(self) -> str:
        return self._encoding

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        await self.close()
