"""
Data contracts and type definitions.
"""

__all__ = ["SessionConfig"]

from .config import SessionConfig
