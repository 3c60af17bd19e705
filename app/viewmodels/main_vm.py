"""ViewModel that owns the interaction mode and the library store."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from core.models import Album, Asset, LibraryStore, MainMenu, Mode, SelectAlbumInput
from core.services.album_matcher import match_albums
from core.services.data_loader import DataLoader
from core.services.interfaces import (
    DownloadRequested,
    Effect,
    IDownloadTrigger,
    IFetcher,
    ReloadRequested,
)
from core.services.mode_controller import handle_key


class MainVM:
    """Main application view-model.

    Feeds key identifiers through the mode controller, executes the effects it
    returns, and forwards network completions to the data loader.
    """

    def __init__(
        self,
        fetcher: IFetcher,
        downloader: IDownloadTrigger,
        url_for_original: Callable[[str], str],
        store: LibraryStore | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            fetcher: Starts the album/asset requests (completions come back later).
            downloader: Download trigger used for `DownloadRequested` effects.
            url_for_original: Maps an asset id to the URL of its original file.
            store: Library store; a fresh empty one by default.
        """
        self.store = store or LibraryStore()
        self._loader = DataLoader(self.store, fetcher)
        self._downloader = downloader
        self._url_for_original = url_for_original
        self.mode: Mode = MainMenu()

    def start_load(self) -> None:
        self._loader.start_load()

    def press_key(self, key: str) -> None:
        """Handle one key identifier delivered by the view."""
        transition = handle_key(self.mode, key, self.store)
        if transition.mode != self.mode:
            logger.debug(
                "Mode {} -> {} on {}",
                type(self.mode).__name__,
                type(transition.mode).__name__,
                key,
            )
        self.mode = transition.mode
        if transition.effect is not None:
            self._run_effect(transition.effect)

    def _run_effect(self, effect: Effect) -> None:
        if isinstance(effect, ReloadRequested):
            logger.info("Reload requested")
            self.start_load()
        elif isinstance(effect, DownloadRequested):
            self._downloader.trigger(self._url_for_original(effect.asset.id))

    # Network completions

    def albums_fetched(self, albums: list[Album]) -> None:
        self._loader.on_albums_loaded(albums)
        self._rematch_albums()

    def albums_failed(self, cause: str) -> None:
        self._loader.on_albums_failed(cause)
        self._rematch_albums()

    def assets_fetched(self, assets: list[Asset]) -> None:
        self._loader.on_assets_loaded(assets)

    def assets_failed(self, cause: str) -> None:
        self._loader.on_assets_failed(cause)

    def _rematch_albums(self) -> None:
        """Keep an open album picker in step with the album collection."""
        if isinstance(self.mode, SelectAlbumInput):
            query = self.mode.query
            self.mode = SelectAlbumInput(query, match_albums(query, self.store.albums))
