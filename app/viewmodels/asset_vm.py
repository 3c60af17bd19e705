"""Lightweight view model wrapper around `Asset`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from core.models import AddToAlbum, Asset, AssetChange, Delete, Favourite, RemoveFromAlbum


@dataclass
class AssetVM:
    """Expose convenient properties for the preview pane."""

    record: Asset

    @property
    def file_name(self) -> str:
        """Original file name, falling back to the last path segment."""
        return self.record.title or PurePosixPath(self.record.path).name

    @property
    def folder_path(self) -> str:
        """Folder portion of the original path."""
        return str(PurePosixPath(self.record.path).parent) if self.record.path else ""

    @property
    def is_video(self) -> bool:
        return self.record.mime_type.startswith("video/")

    @property
    def flags(self) -> str:
        """Short marker string such as "★ archived"."""
        parts: list[str] = []
        if self.record.is_favourite:
            parts.append("★")
        if self.record.is_archived:
            parts.append("archived")
        return " ".join(parts)


def describe_change(change: AssetChange) -> str:
    """Human readable label for one pending change."""
    if isinstance(change, AddToAlbum):
        return f"Add to album {change.album_id}"
    if isinstance(change, RemoveFromAlbum):
        return f"Remove from album {change.album_id}"
    if isinstance(change, Delete):
        return "Delete"
    if isinstance(change, Favourite):
        return "Favourite"
    raise TypeError(f"Unknown asset change: {change!r}")
