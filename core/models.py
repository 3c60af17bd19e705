"""Core domain models for assets, albums, pending changes and UI modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Asset:
    """A single photo/media item as returned by the asset service."""

    id: str
    path: str
    title: str
    mime_type: str
    is_favourite: bool = False
    is_archived: bool = False


@dataclass(frozen=True)
class Album:
    """A named server-side grouping of assets."""

    id: str
    name: str
    asset_count: int
    thumbnail_asset_id: str
    created_at: date | None = None


# Pending asset changes


@dataclass(frozen=True)
class AddToAlbum:
    album_id: str


@dataclass(frozen=True)
class RemoveFromAlbum:
    album_id: str


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Favourite:
    pass


AssetChange = Union[AddToAlbum, RemoveFromAlbum, Delete, Favourite]


@dataclass(frozen=True)
class PendingChangeList:
    """Queued mutations for the asset being edited, most recent first.

    The list is a value: `prepend` returns a new list and leaves the
    original untouched. Duplicates and conflicting intents are kept as-is.
    """

    changes: tuple[AssetChange, ...] = ()

    def prepend(self, change: AssetChange) -> PendingChangeList:
        return PendingChangeList((change, *self.changes))

    def __len__(self) -> int:
        return len(self.changes)

    def __iter__(self):
        return iter(self.changes)


# Load states


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class Error:
    cause: str


LoadState = Union[Idle, Loading, Success, Error]


# Asset sources


@dataclass(frozen=True)
class NoAssets:
    pass


@dataclass(frozen=True)
class Uncategorised:
    pass


@dataclass(frozen=True)
class SearchResults:
    query: str


@dataclass(frozen=True)
class InAlbum:
    album: Album


AssetSource = Union[NoAssets, Uncategorised, SearchResults, InAlbum]


# Modes


class InputMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


@dataclass(frozen=True)
class MainMenu:
    pass


@dataclass(frozen=True)
class SearchAssetInput:
    query: str = ""


@dataclass(frozen=True)
class SelectAlbumInput:
    """Album picker. `matches` is always derived from `query` and the album list."""

    query: str
    matches: tuple[Album, ...] = ()


@dataclass(frozen=True)
class EditAsset:
    input_mode: InputMode
    source: AssetSource
    index: int = 0
    pending: PendingChangeList = field(default_factory=PendingChangeList)


Mode = Union[MainMenu, SearchAssetInput, SelectAlbumInput, EditAsset]


@dataclass
class LibraryStore:
    """Albums, the uncategorised asset pool, and their load states.

    Written only by `DataLoader`; the mode controller and the renderer read it.
    """

    albums: tuple[Album, ...] = ()
    assets: tuple[Asset, ...] = ()
    album_state: LoadState = field(default_factory=Idle)
    asset_state: LoadState = field(default_factory=Idle)

    def assets_for(self, source: AssetSource) -> tuple[Asset, ...]:
        """Return the asset sequence an `EditAsset` index ranges over."""
        if isinstance(source, Uncategorised):
            return self.assets
        # Search execution and album contents are not fetched by this client.
        return ()
