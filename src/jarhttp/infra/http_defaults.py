"""
Default request settings used by jarhttp sessions.
"""

# -----------------------------------------------------------------------------
# Encoding & content types
# -----------------------------------------------------------------------------

DEFAULT_ENCODING = "utf-8"


def default_content_type(encoding: str = DEFAULT_ENCODING) -> str:
    """Content type sent with POST/PUT bodies when the caller gives none."""
    return f'text/xml; charset="{encoding}"'


# -----------------------------------------------------------------------------
# Headers
# -----------------------------------------------------------------------------

DEFAULT_USER_AGENT = "jarhttp"

# one request per connection
DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "*/*",
    "Connection": "close",
}

BODY_METHODS = frozenset({"POST", "PUT"})
