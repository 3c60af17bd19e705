"""HTTP client for the Immich asset service.

Wraps the handful of endpoints the categorizer needs and maps the JSON payloads
to `Album`/`Asset` records. Every transport, status or decoding failure is
raised as `ImmichError` so callers only have one exception type to handle.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime
from typing import Any

import httpx
from loguru import logger

from core.models import Album, Asset


class ImmichError(RuntimeError):
    """A request to the Immich server failed or returned unusable data."""


def _parse_date(value: Any) -> date | None:
    """Parse an ISO timestamp such as `2024-03-01T10:00:00.000Z` to a date.

    Returns None if the value is empty or invalid.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.warning("Invalid date: {}", value)
            return None


def _album_from_json(raw: dict[str, Any]) -> Album:
    return Album(
        id=str(raw["id"]),
        name=str(raw.get("albumName") or ""),
        asset_count=int(raw.get("assetCount") or 0),
        thumbnail_asset_id=str(raw.get("albumThumbnailAssetId") or ""),
        created_at=_parse_date(raw.get("createdAt")),
    )


def _asset_from_json(raw: dict[str, Any]) -> Asset:
    return Asset(
        id=str(raw["id"]),
        path=str(raw.get("originalPath") or ""),
        title=str(raw.get("originalFileName") or ""),
        mime_type=str(raw.get("originalMimeType") or ""),
        is_favourite=bool(raw.get("isFavorite", False)),
        is_archived=bool(raw.get("isArchived", False)),
    )


def _decode_rows(rows: Any, decode, kind: str) -> Iterator[Any]:
    """Yield decoded records, skipping malformed rows."""
    if not isinstance(rows, list):
        raise ImmichError(f"Expected a list of {kind}s, got {type(rows).__name__}")
    for row in rows:
        try:
            yield decode(row)
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            logger.error("{} row error: {} | row={}", kind, ex, row)
            continue


class ImmichClient:
    """Synchronous Immich API client.

    Calls block; the GUI runs them on the thread pool (see `app.views.fetch_tasks`).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        batch_size: int = 100,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client.

        Args:
            base_url: Server root such as `https://photos.example.org`; `/api` is appended.
            api_key: Sent as the `x-api-key` header.
            timeout: Request timeout in seconds.
            batch_size: Page size for the uncategorised asset search.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/api"
        self.batch_size = batch_size
        self._client = httpx.Client(
            base_url=self.api_url,
            headers={"x-api-key": api_key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as ex:
            raise ImmichError(
                f"{method} {path} returned {ex.response.status_code}"
            ) from ex
        except httpx.HTTPError as ex:
            raise ImmichError(f"{method} {path} failed: {ex}") from ex
        return response

    def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as ex:
            raise ImmichError(f"{method} {path} returned invalid JSON") from ex

    def list_albums(self) -> list[Album]:
        """Return every album visible to the API key."""
        payload = self._request_json("GET", "/albums")
        albums = list(_decode_rows(payload, _album_from_json, "album"))
        logger.debug("GET /albums -> {} albums", len(albums))
        return albums

    def fetch_uncategorized_assets(self) -> list[Asset]:
        """Return one batch of assets that belong to no album."""
        body = {"isNotInAlbum": True, "size": self.batch_size, "page": 1}
        payload = self._request_json("POST", "/search/metadata", json=body)
        try:
            rows = payload["assets"]["items"]
        except (KeyError, TypeError) as ex:
            raise ImmichError("Search response has no assets.items") from ex
        assets = list(_decode_rows(rows, _asset_from_json, "asset"))
        logger.debug("POST /search/metadata -> {} assets", len(assets))
        return assets

    def fetch_thumbnail(self, asset_id: str, size: str = "preview") -> bytes:
        """Return encoded thumbnail bytes for `asset_id`."""
        response = self._request("GET", f"/assets/{asset_id}/thumbnail", params={"size": size})
        return response.content

    def original_url(self, asset_id: str) -> str:
        """URL of the original file for `asset_id`.

        The URL holds no API key; whoever opens it needs its own Immich session.
        """
        return f"{self.api_url}/assets/{asset_id}/original"
