"""
Backend-agnostic response objects for jarhttp sessions.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping, MutableMapping, Sequence


class Headers(MutableMapping[str, str]):
    """A case-insensitive, multi-value HTTP header container.

    Keys are stored lowercase. Item access returns the first value of a
    field; :meth:`get_all` returns every occurrence, which is what repeated
    fields such as ``Set-Cookie`` need.

    Args:
        headers: Optional initial header mapping or sequence of key-value
            pairs. Pass a sequence to keep repeated fields apart.
    """

    __slots__ = ("_store",)

    def __init__(
        self,
        headers: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
    ) -> None:
        self._store: dict[str, list[str]] = defaultdict(list)
        if not headers:
            return

        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for k, v in pairs:
            self.add(k, v)

    def add(self, key: str, value: str | None) -> None:
        self._store[key.lower()].append(value or "")

    def get_all(self, key: str) -> list[str]:
        return list(self._store.get(key.lower(), []))

    def __getitem__(self, key: str) -> str:
        vals = self._store.get(key.lower())
        if not vals:
            raise KeyError(key)
        return vals[0]

    def __setitem__(self, key: str, value: str) -> None:
        self._store[key.lower()] = [value]

    def __delitem__(self, key: str) -> None:
        del self._store[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._store

    def __repr__(self) -> str:
        items_preview = ", ".join(f"{k}={len(v)}" for k, v in self._store.items())
        return f"<Headers ({items_preview})>"


class BaseResponse:
    """A fully read HTTP response.

    Args:
        content: Raw response body.
        headers: Header mapping or sequence of header pairs.
        status: HTTP status code. It is never interpreted by the session.
        encoding: Charset used to decode :attr:`text`.
    """

    __slots__ = ("content", "headers", "status", "encoding")

    def __init__(
        self,
        *,
        content: bytes,
        headers: Mapping[str, str] | Sequence[tuple[str, str]] | None = None,
        status: int = 200,
        encoding: str = "utf-8",
    ) -> None:
        self.content = content
        self.headers = Headers(headers)
        self.status = status
        self.encoding = encoding

    @property
    def text(self) -> str:
        """The decoded body. Undecodable bytes are replaced."""
        try:
            return self.content.decode(self.encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    @property
    def set_cookies(self) -> list[str]:
        """Every ``Set-Cookie`` header value, in arrival order."""
        return self.headers.get_all("set-cookie")

    @property
    def ok(self) -> bool:
        return self.status < 400

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status < 400 and "location" in self.headers

    def __repr__(self) -> str:
        return f"<BaseResponse status={self.status} len={len(self.content)}>"
