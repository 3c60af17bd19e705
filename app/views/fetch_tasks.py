from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger

from infrastructure.immich_client import ImmichError


class _AlbumsTask(QRunnable):
    """Fetch the album list off the GUI thread.

    Emits `receiver.albumsFetched(list)` or `receiver.albumsFailed(str)`.
    """

    def __init__(self, *, client: Any, receiver: QObject) -> None:
        super().__init__()
        self._client = client
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            albums = self._client.list_albums()
        except ImmichError as ex:
            logger.error("Album task failed: {}", ex)
            self._receiver.albumsFailed.emit(str(ex))  # type: ignore[attr-defined]
            return
        except Exception as ex:
            logger.exception("Album task crashed: {}", ex)
            self._receiver.albumsFailed.emit(str(ex))  # type: ignore[attr-defined]
            return
        self._receiver.albumsFetched.emit(albums)  # type: ignore[attr-defined]


class _AssetsTask(QRunnable):
    """Fetch the uncategorised asset batch off the GUI thread.

    Emits `receiver.assetsFetched(list)` or `receiver.assetsFailed(str)`.
    """

    def __init__(self, *, client: Any, receiver: QObject) -> None:
        super().__init__()
        self._client = client
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            assets = self._client.fetch_uncategorized_assets()
        except ImmichError as ex:
            logger.error("Asset task failed: {}", ex)
            self._receiver.assetsFailed.emit(str(ex))  # type: ignore[attr-defined]
            return
        except Exception as ex:
            logger.exception("Asset task crashed: {}", ex)
            self._receiver.assetsFailed.emit(str(ex))  # type: ignore[attr-defined]
            return
        self._receiver.assetsFetched.emit(assets)  # type: ignore[attr-defined]


class _ThumbnailTask(QRunnable):
    """Emits `receiver.thumbnailLoaded(token, bytes | None)` upon completion."""

    def __init__(
        self, *, asset_id: str, size: str, client: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._asset_id = asset_id
        self._size = size
        self._client = client
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            data = self._client.fetch_thumbnail(self._asset_id, self._size)
        except ImmichError as ex:
            logger.error("Thumbnail task failed for {}: {}", self._asset_id, ex)
            data = None
        except Exception as ex:
            logger.exception("Thumbnail task crashed for {}: {}", self._asset_id, ex)
            data = None
        self._receiver.thumbnailLoaded.emit(self._token, data)  # type: ignore[attr-defined]


class FetchTaskRunner:
    """Dispatches Immich requests to the global thread pool.

    Completions arrive as queued signals on the receiver, so they are handled
    on the GUI thread one at a time.

    Thumbnail tokens have the format "single|{asset_id}|{size}".
    """

    def __init__(self, *, client: Any, receiver: QObject) -> None:
        self._client = client
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_albums(self) -> None:
        self._pool.start(_AlbumsTask(client=self._client, receiver=self._receiver))

    def request_assets(self) -> None:
        self._pool.start(_AssetsTask(client=self._client, receiver=self._receiver))

    def request_thumbnail(self, asset_id: str, size: str = "preview") -> str:
        """Request a thumbnail for `asset_id`. Returns the token string."""
        token = f"single|{asset_id}|{size}"
        task = _ThumbnailTask(
            asset_id=asset_id,
            size=size,
            client=self._client,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
        return token
