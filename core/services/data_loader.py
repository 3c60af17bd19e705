"""Two-phase loading of albums and the uncategorised asset pool.

Albums are requested first. Only a successful album fetch leads to the asset
request. Completions are applied in arrival order without checking which load
cycle issued them, so a late completion from a superseded cycle still wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from core.models import Album, Asset, Error, LibraryStore, Loading, Success
from core.services.interfaces import IFetcher


class DataLoader:
    """Drives the album/asset load cycle and owns writes to `LibraryStore`."""

    def __init__(self, store: LibraryStore, fetcher: IFetcher) -> None:
        self._store = store
        self._fetcher = fetcher

    @property
    def store(self) -> LibraryStore:
        return self._store

    def start_load(self) -> None:
        """Reset both resources to Loading and request the album list."""
        self._store.album_state = Loading()
        self._store.asset_state = Loading()
        logger.info("Load started: requesting albums")
        self._fetcher.request_albums()

    def on_albums_loaded(self, albums: Iterable[Album]) -> None:
        self._store.albums = tuple(albums)
        self._store.album_state = Success()
        logger.info("Albums loaded: {} albums, requesting assets", len(self._store.albums))
        self._fetcher.request_assets()

    def on_albums_failed(self, cause: str) -> None:
        """Record the failure; the asset fetch is skipped for this cycle."""
        self._store.albums = ()
        self._store.album_state = Error(cause)
        logger.error("Album fetch failed: {}", cause)

    def on_assets_loaded(self, assets: Iterable[Asset]) -> None:
        self._store.assets = tuple(assets)
        self._store.asset_state = Success()
        logger.info("Uncategorised assets loaded: {}", len(self._store.assets))

    def on_assets_failed(self, cause: str) -> None:
        self._store.assets = ()
        self._store.asset_state = Error(cause)
        logger.error("Asset fetch failed: {}", cause)
