from __future__ import annotations

from typing import Any

from jarhttp.schemas import SessionConfig


class ConfigAdapter:
    """Builds typed configuration objects from a loaded config mapping.

    Session settings are read from the ``session`` table. Keys missing there
    fall back to the top level of the mapping, then to built-in defaults::

        backend = "httpx"

        [session]
        encoding = "utf-8"
        read_timeout = 5.0
        max_cookies = 8

    Args:
        config: Configuration mapping as returned by ``load_config``.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        return self._config

    def get_session_config(self) -> SessionConfig:
        """Build a SessionConfig by merging top-level and ``session`` keys.

        Returns:
            SessionConfig: Resolved session configuration.

        Raises:
            ValueError: If a value has the wrong type.
        """
        cfg = {**self._top_level(), **(self._config.get("session") or {})}
        defaults = SessionConfig()

        headers = cfg.get("headers")
        if headers is not None and not isinstance(headers, dict):
            raise ValueError(f"'headers' must be a table, got {type(headers)}")

        max_cookies = int(cfg.get("max_cookies", defaults.max_cookies))
        if max_cookies < 1:
            raise ValueError(f"'max_cookies' must be >= 1, got {max_cookies}")

        return SessionConfig(
            backend=str(cfg.get("backend", defaults.backend)),
            encoding=str(cfg.get("encoding", defaults.encoding)),
            connect_timeout=self._opt_float(cfg.get("connect_timeout")),
            read_timeout=self._opt_float(cfg.get("read_timeout")),
            max_cookies=max_cookies,
            content_type=cfg.get("content_type"),
            user_agent=cfg.get("user_agent"),
            headers={str(k): str(v) for k, v in headers.items()} if headers else None,
            verify_ssl=bool(cfg.get("verify_ssl", defaults.verify_ssl)),
            trust_env=bool(cfg.get("trust_env", defaults.trust_env)),
        )

    def _top_level(self) -> dict[str, Any]:
        return {k: v for k, v in self._config.items() if not isinstance(v, dict)}

    @staticmethod
    def _opt_float(value: Any) -> float | None:
        """Timeouts of None or <= 0 mean "no timeout"."""
        if value is None:
            return None
        value = float(value)
        return value if value > 0 else None
