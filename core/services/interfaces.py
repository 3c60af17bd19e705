"""Core service interfaces and shared data structures.

This module defines the collaborator protocols the core talks to (the asset
service fetcher and the download trigger) and the effect/transition types the
mode controller returns to its caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, Union

from core.models import Album, Asset, AssetSource, Mode


@dataclass(frozen=True)
class ReloadRequested:
    """Ask the owner of the data loader to start a new load cycle."""


@dataclass(frozen=True)
class DownloadRequested:
    """Ask for the original file of `asset` to be saved locally."""

    asset: Asset


Effect = Union[ReloadRequested, DownloadRequested]


@dataclass(frozen=True)
class Transition:
    """Outcome of handling one key.

    Attributes:
        mode: The mode after the key was handled (may be the same object).
        effect: Optional side-effect request for the caller to execute.
    """

    mode: Mode
    effect: Effect | None = None


class KeyContext(Protocol):
    """Read-only view of the library used while handling keys."""

    albums: Sequence[Album]

    def assets_for(self, source: AssetSource) -> Sequence[Asset]:
        """Return the asset sequence for `source`."""
        raise NotImplementedError


class IFetcher(Protocol):
    """Starts asynchronous fetches; completions are reported back later."""

    def request_albums(self) -> None:
        """Issue one outbound album list request."""
        raise NotImplementedError

    def request_assets(self) -> None:
        """Issue one outbound uncategorised asset batch request."""
        raise NotImplementedError


class IDownloadTrigger(Protocol):
    """Fire-and-forget file save for a URL."""

    def trigger(self, url: str) -> None:
        """Start saving `url`; nothing is reported back."""
        raise NotImplementedError
