"""Logging setup and log deduplication."""

import json
import logging
from typing import Any


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str | int = logging.INFO, json_output: bool = False) -> None:
    """Install a single stream handler on the root logger.

    Calling this more than once is a no-op, so the API lifespan and
    scripts can both call it.

    Args:
        level: Logging level name or number
        json_output: Emit one JSON object per line instead of plain text
    """
    root = logging.getLogger()
    if any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.addHandler(handler)

    # httpx logs full request URLs at INFO, which include the OpenWeather appid
    logging.getLogger("httpx").setLevel(logging.WARNING)


class LogOnce:
    """Emit each failure condition at most once.

    A consistently failing provider would otherwise log the same warning
    on every request. Deduplication is keyed on ``key`` when given, so a
    message may carry per-request data (like the IP) while the condition
    itself is still logged only once. Without a key the message text is
    the key.

    Example:
        ```python
        log_once = LogOnce(logging.getLogger(__name__))
        log_once.warning("Invalid IP '1.2.3'", key="invalid-ip")  # logged
        log_once.warning("Invalid IP 'abc'", key="invalid-ip")  # suppressed
        ```
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger
        self._seen: set[str] = set()

    def log(self, level: int, message: str, key: str | None = None) -> bool:
        """Log ``message`` unless its condition was already emitted.

        Args:
            level: Logging level
            message: Rendered log message
            key: Condition identifier. Defaults to ``message``.

        Returns:
            True if the message was emitted, False if suppressed
        """
        key = message if key is None else key
        if key in self._seen:
            return False
        self._seen.add(key)
        self._logger.log(level, message)
        return True

    def warning(self, message: str, key: str | None = None) -> bool:
        return self.log(logging.WARNING, message, key=key)

    def seen(self, key: str) -> bool:
        return key in self._seen

    def reset(self) -> None:
        """Forget every emitted condition."""
        self._seen.clear()
