from .version import __version__ as __version__

__title__ = "jarhttp"
__description__ = "A small async HTTP client with a bounded, scoped cookie jar."
__license__ = "BSD-3-Clause"
