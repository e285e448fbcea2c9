"""
Helpers for building request URLs, bodies and header lists.
"""

from __future__ import annotations

__all__ = ["build_url", "encode_body", "has_header", "QueryParams"]

from collections.abc import Iterable, Mapping, Sequence
from urllib.parse import quote_plus

from .errors import EncodingError

QueryParams = Mapping[str, str | Sequence[str] | None]


def _iter_params(params: QueryParams) -> Iterable[tuple[str, str]]:
    for key, values in params.items():
        if values is None:
            continue
        if isinstance(values, str):
            yield key, values
            continue
        for value in values:
            yield key, value


def build_url(url: str, params: QueryParams | None, encoding: str) -> str:
    """Append form-encoded query parameters to ``url``.

    A key mapped to a sequence expands to one ``key=value`` pair per item,
    keys mapped to None are skipped.

    Args:
        url: Base URL.
        params: Optional query parameters.
        encoding: Charset used to percent-encode keys and values.

    Returns:
        The URL with the encoded query appended.

    Raises:
        EncodingError: If the charset is unknown or cannot encode a value.
    """
    if not params:
        return url

    try:
        pairs = [
            f"{quote_plus(k, encoding=encoding)}={quote_plus(v, encoding=encoding)}"
            for k, v in _iter_params(params)
        ]
    except (LookupError, UnicodeEncodeError) as e:
        raise EncodingError(f"Cannot encode query parameters as {encoding!r}: {e}") from e

    if not pairs:
        return url
    sep = "&" if "?" in url else "?"
    return url + sep + "&".join(pairs)


def encode_body(data: str | None, encoding: str) -> bytes:
    """Encode a request body, treating None as the empty string.

    Raises:
        EncodingError: If the charset is unknown or cannot encode ``data``.
    """
    try:
        return (data or "").encode(encoding)
    except (LookupError, UnicodeEncodeError) as e:
        raise EncodingError(f"Cannot encode request body as {encoding!r}: {e}") from e


def has_header(headers: Mapping[str, str], name: str) -> bool:
    name = name.lower()
    return any(k.lower() == name for k in headers)
