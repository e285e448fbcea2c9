"""
Cookie parsing and the bounded cookie jar shared by HTTP sessions.

Domain scoping follows a simplified heuristic rather than the public-suffix
algorithm: a ``Domain`` attribute is accepted only when it equals the request
host or the host's suffix starting at its first dot.
"""

from __future__ import annotations

__all__ = [
    "MAX_COOKIES",
    "Cookie",
    "CookieJar",
    "IngestResult",
    "domain_matches",
    "parse_expires",
]

import logging
import re
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import cast
from urllib.parse import urlsplit

from .errors import CookieError, ForeignCookieError, MalformedCookieError

logger = logging.getLogger(__name__)

MAX_COOKIES = 4
DEFAULT_PATH = "/"

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# "Sun, 06 Nov 1994 08:49:37 GMT" and "Sunday, 06-Nov-1994 08:49:37 GMT"
_EXPIRES_FORMATS = (
    re.compile(
        r"^[a-z]+, (\d{1,2}) ([a-z]{3}) (\d{4}) (\d{1,2}):(\d{1,2}):(\d{1,2}) gmt$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^[a-z]+, (\d{1,2})-([a-z]{3})-(\d{4}) (\d{1,2}):(\d{1,2}):(\d{1,2}) gmt$",
        re.IGNORECASE,
    ),
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_expires(value: str) -> datetime | None:
    """Parse an ``Expires`` attribute into an aware UTC datetime.

    Two layouts are accepted, tried in order:

    - ``"<weekday>, <day> <month> <year> <h>:<m>:<s> GMT"``
    - ``"<weekday>, <day>-<month>-<year> <h>:<m>:<s> GMT"``

    Weekday and month names are matched as English abbreviations regardless
    of the process locale.

    Args:
        value: The raw attribute value.

    Returns:
        The parsed timestamp, or None if no layout matches.
    """
    value = value.strip()
    for pattern in _EXPIRES_FORMATS:
        m = pattern.match(value)
        if m is None:
            continue
        day, mon, year, hour, minute, second = m.groups()
        month = _MONTHS.get(mon.lower())
        if month is None:
            continue
        try:
            return datetime(
                int(year),
                month,
                int(day),
                int(hour),
                int(minute),
                int(second),
                tzinfo=timezone.utc,
            )
        except ValueError:
            continue
    return None


def request_host(url: str) -> str:
    return (urlsplit(url).hostname or "").lower()


def request_path(url: str) -> str:
    return urlsplit(url).path or DEFAULT_PATH


def _host_suffix(host: str) -> str:
    idx = host.find(".")
    return host[idx:] if idx >= 0 else ""


def domain_matches(domain: str, host: str) -> bool:
    """Check whether a cookie domain scopes to the given host.

    Only the host itself or the host's suffix from its first dot (with a
    leading dot) match. ``.example.com`` therefore matches ``www.example.com``
    but not ``a.b.example.com``.
    """
    domain = domain.lower()
    host = host.lower()
    if domain == host:
        return True
    return domain.startswith(".") and _host_suffix(host) == domain


@dataclass(frozen=True, slots=True)
class Cookie:
    """A single cookie received through a ``Set-Cookie`` header.

    Attributes:
        site_url: URL of the response that set the cookie.
        name: Cookie name.
        value: Opaque cookie value.
        domain: Request host, or ``"." + <host suffix>`` when the header
            widened the scope to the parent domain.
        path: Path prefix the cookie is sent for. Always starts with ``/``.
        expires: Expiry in UTC, or None for a session cookie.
    """

    site_url: str
    name: str
    value: str
    domain: str
    path: str = DEFAULT_PATH
    expires: datetime | None = None

    @classmethod
    def parse(cls, request_url: str, header: str) -> IngestResult:
        """Parse one ``Set-Cookie`` header line without raising.

        Args:
            request_url: URL the header arrived on.
            header: The raw header value.

        Returns:
            An :class:`IngestResult` holding either the cookie or the reason
            it was discarded.
        """
        segments = header.split(";")
        name, sep, value = segments[0].strip().partition("=")
        name = name.strip()
        if not sep or not name:
            return IngestResult(
                header=header,
                error=MalformedCookieError(f"No name=value pair in {header!r}"),
            )

        host = request_host(request_url)
        domain = host
        path = DEFAULT_PATH
        expires: datetime | None = None

        for segment in segments[1:]:
            attr, sep, attr_value = segment.strip().partition("=")
            if not sep:
                continue
            attr_value = attr_value.strip()
            match attr.strip().lower():
                case "domain":
                    if attr_value.lower() == host:
                        domain = host
                        continue
                    scoped = attr_value.lower()
                    if not scoped.startswith("."):
                        scoped = "." + scoped
                    if _host_suffix(host) != scoped:
                        return IngestResult(
                            header=header,
                            error=ForeignCookieError(
                                f"Cookie {name!r} from {host!r} "
                                f"tries to set domain {attr_value!r}"
                            ),
                        )
                    domain = scoped
                case "path":
                    if attr_value.startswith("/"):
                        path = attr_value
                case "expires":
                    parsed = parse_expires(attr_value)
                    if parsed is not None:
                        expires = parsed

        cookie = cls(
            site_url=request_url,
            name=name,
            value=value.strip(),
            domain=domain,
            path=path,
            expires=expires,
        )
        return IngestResult(header=header, cookie=cookie)

    @classmethod
    def from_header(cls, request_url: str, header: str) -> Cookie:
        """Parse one ``Set-Cookie`` header line.

        Raises:
            ForeignCookieError: If the ``Domain`` attribute is out of scope.
            MalformedCookieError: If there is no ``name=value`` pair.
        """
        result = cls.parse(request_url, header)
        if result.error is not None:
            raise result.error
        return cast(Cookie, result.cookie)

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the cookie inside a jar: ``(domain, name)``."""
        return (self.domain, self.name)

    def has_expired(self, now: datetime | None = None) -> bool:
        if self.expires is None:
            return False
        return (now or _utcnow()) > self.expires

    def matches(self, url: str, now: datetime | None = None) -> bool:
        """Whether the cookie applies to ``url``'s path.

        The host is not checked here; :class:`CookieJar` selects candidates
        by domain first.
        """
        if self.has_expired(now):
            return False
        return request_path(url).startswith(self.path)

    def serialize(self) -> str:
        return f"{self.name}={self.value}"

    def __str__(self) -> str:
        return self.serialize()


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Outcome of ingesting a single ``Set-Cookie`` header."""

    header: str
    cookie: Cookie | None = None
    error: CookieError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CookieJar:
    """Bounded, thread-safe cookie store.

    Cookies are keyed by ``(domain, name)`` and kept in insertion order.
    Replacing a cookie moves it to the end. When the jar grows past
    ``max_cookies`` the oldest-inserted entries are dropped. Expired cookies
    are removed at the start of every operation.

    Every public method runs under a single lock, so the jar can be shared
    by sessions used from several threads or tasks.
    """

    def __init__(self, max_cookies: int = MAX_COOKIES) -> None:
        """Initialize an empty jar.

        Args:
            max_cookies: Capacity bound. Must be at least 1.

        Raises:
            ValueError: If ``max_cookies`` is smaller than 1.
        """
        if max_cookies < 1:
            raise ValueError(f"max_cookies must be >= 1, got {max_cookies}")
        self.max_cookies = max_cookies
        self._cookies: dict[tuple[str, str], Cookie] = {}
        self._lock = threading.Lock()

    def ingest(self, url: str, headers: Iterable[str] | None) -> list[IngestResult]:
        """Store the cookies set by a response.

        Headers that fail to parse are reported in the result list and
        skipped; the remaining headers are still stored.

        Args:
            url: URL of the response.
            headers: Raw ``Set-Cookie`` header values, one cookie each.

        Returns:
            One :class:`IngestResult` per header, in input order.
        """
        results: list[IngestResult] = []
        with self._lock:
            now = _utcnow()
            self._purge_locked(now)

            for header in headers or ():
                result = Cookie.parse(url, header)
                results.append(result)
                if result.cookie is None:
                    logger.debug("Discarded cookie from %s: %s", url, result.error)
                    continue

                cookie = result.cookie
                self._cookies.pop(cookie.key, None)
                if cookie.has_expired(now):
                    # an already expired cookie deletes the stored one
                    logger.debug("Removed cookie %s via past expiry", cookie.name)
                    continue
                self._cookies[cookie.key] = cookie

            while len(self._cookies) > self.max_cookies:
                domain, name = next(iter(self._cookies))
                del self._cookies[(domain, name)]
                logger.debug("Evicted cookie %s (domain %s)", name, domain)

        return results

    def header_for(self, url: str) -> str:
        """Build the ``Cookie`` header value for a request to ``url``.

        Args:
            url: Target URL of the request.

        Returns:
            ``"name1=value1; name2=value2"`` in store order, or an empty
            string when no cookie applies.
        """
        host = request_host(url)
        with self._lock:
            now = _utcnow()
            self._purge_locked(now)
            return "; ".join(
                c.serialize()
                for c in self._cookies.values()
                if domain_matches(c.domain, host) and c.matches(url, now)
            )

    def purge_expired(self) -> int:
        """Remove expired cookies and return how many were dropped."""
        with self._lock:
            return self._purge_locked(_utcnow())

    def get(self, name: str, domain: str | None = None) -> str | None:
        """Return the value of a stored cookie, or None.

        When ``domain`` is omitted the first cookie named ``name`` wins.
        """
        with self._lock:
            self._purge_locked(_utcnow())
            for cookie in self._cookies.values():
                if cookie.name != name:
                    continue
                if domain is None or cookie.domain == domain.lower():
                    return cookie.value
        return None

    def cookies(self) -> list[Cookie]:
        """Snapshot of the stored cookies in store order."""
        with self._lock:
            self._purge_locked(_utcnow())
            return list(self._cookies.values())

    def clear(self) -> None:
        with self._lock:
            self._cookies.clear()

    def _purge_locked(self, now: datetime) -> int:
        expired = [k for k, c in self._cookies.items() if c.has_expired(now)]
        for key in expired:
            del self._cookies[key]
        if expired:
            logger.debug("Purged %d expired cookie(s)", len(expired))
        return len(expired)

    def __iter__(self) -> Iterator[Cookie]:
        return iter(self.cookies())

    def __len__(self) -> int:
        with self._lock:
            self._purge_locked(_utcnow())
            return len(self._cookies)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            self._purge_locked(_utcnow())
            return key in self._cookies

    def __repr__(self) -> str:
        return f"<CookieJar size={len(self)} max={self.max_cookies}>"
