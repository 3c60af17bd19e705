"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_IMMICH_URL = "https://localhost"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_BATCH_SIZE = 100


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


@dataclass(frozen=True)
class ImmichConfig:
    """Connection settings for the Immich server.

    Attributes:
        url: Server root, without the trailing `/api`.
        api_key: Value sent in the `x-api-key` header.
        timeout_seconds: Per-request timeout.
        batch_size: Number of uncategorised assets fetched per load.
    """

    url: str
    api_key: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_settings(
        cls, settings: JsonSettings, environ: dict[str, str] | None = None
    ) -> ImmichConfig:
        """Resolve the effective config; `IMMICH_URL`/`IMMICH_API_KEY` win over the file."""
        env = os.environ if environ is None else environ
        url = env.get("IMMICH_URL") or settings.get("immich.url") or DEFAULT_IMMICH_URL
        api_key = env.get("IMMICH_API_KEY") or settings.get("immich.api_key") or ""

        try:
            timeout = float(settings.get("immich.timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError):
            logger.warning("Invalid immich.timeout_seconds, using {}", DEFAULT_TIMEOUT_SECONDS)
            timeout = DEFAULT_TIMEOUT_SECONDS
        try:
            batch_size = int(settings.get("assets.batch_size", DEFAULT_BATCH_SIZE))
        except (TypeError, ValueError):
            logger.warning("Invalid assets.batch_size, using {}", DEFAULT_BATCH_SIZE)
            batch_size = DEFAULT_BATCH_SIZE

        if not api_key:
            logger.warning("IMMICH_API_KEY not set")
        logger.info(
            "Configuration: IMMICH_URL={}, IMMICH_API_KEY={}",
            url,
            "[SET]" if api_key else "[NOT SET]",
        )
        return cls(
            url=str(url).rstrip("/"),
            api_key=str(api_key),
            timeout_seconds=timeout,
            batch_size=max(1, batch_size),
        )
