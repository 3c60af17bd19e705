from __future__ import annotations

from datetime import date

import pytest

from core.models import Album, Asset, LibraryStore


class FakeFetcher:
    """Records outbound requests instead of performing them."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def request_albums(self) -> None:
        self.calls.append("albums")

    def request_assets(self) -> None:
        self.calls.append("assets")


class FakeDownloader:
    def __init__(self) -> None:
        self.urls: list[str] = []

    def trigger(self, url: str) -> None:
        self.urls.append(url)


def make_album(album_id: str, name: str, asset_count: int) -> Album:
    return Album(
        id=album_id,
        name=name,
        asset_count=asset_count,
        thumbnail_asset_id=f"thumb-{album_id}",
        created_at=date(2024, 1, 1),
    )


def make_asset(asset_id: str, title: str | None = None) -> Asset:
    return Asset(
        id=asset_id,
        path=f"/library/upload/{asset_id}.jpg",
        title=title or f"{asset_id}.jpg",
        mime_type="image/jpeg",
    )


@pytest.fixture
def albums() -> tuple[Album, ...]:
    return (
        make_album("a1", "Holidays 2023", 40),
        make_album("a2", "Jazz Festival", 12),
        make_album("a3", "Family", 12),
        make_album("a4", "Garden", 3),
    )


@pytest.fixture
def assets() -> tuple[Asset, ...]:
    return (make_asset("x1"), make_asset("x2"), make_asset("x3"))


@pytest.fixture
def store(albums, assets) -> LibraryStore:
    return LibraryStore(albums=albums, assets=assets)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def downloader() -> FakeDownloader:
    return FakeDownloader()
