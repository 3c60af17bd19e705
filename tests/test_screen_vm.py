from __future__ import annotations

from app.viewmodels.asset_vm import AssetVM, describe_change
from app.viewmodels.screen_vm import build_screen, describe_load_state
from core.models import (
    AddToAlbum,
    Asset,
    Delete,
    EditAsset,
    Error,
    Idle,
    InAlbum,
    InputMode,
    Loading,
    MainMenu,
    PendingChangeList,
    SearchAssetInput,
    SelectAlbumInput,
    Success,
    Uncategorised,
)
from core.services.album_matcher import match_albums


def test_load_state_labels() -> None:
    assert describe_load_state(Idle()) == "idle"
    assert describe_load_state(Loading()) == "loading…"
    assert describe_load_state(Success()) == "ok"
    assert describe_load_state(Error("timeout")) == "error: timeout"


def test_main_menu_screen_shows_status(store) -> None:
    store.album_state = Error("timeout")
    store.asset_state = Loading()
    screen = build_screen(MainMenu(), store)
    assert screen.title == "Image Categorizer"
    assert screen.status == "Albums: error: timeout | Assets: loading…"
    assert screen.asset is None


def test_search_screen_echoes_query(store) -> None:
    assert build_screen(SearchAssetInput("cat"), store).title == "Search: cat_"


def test_album_screen_lists_matches(store, albums) -> None:
    screen = build_screen(SelectAlbumInput("", match_albums("", albums)), store)
    assert screen.album_lines[0] == "Garden (3)"
    assert len(screen.album_lines) == len(albums)


def test_edit_screen_shows_current_asset_and_pending(store, assets) -> None:
    pending = PendingChangeList().prepend(AddToAlbum("a1")).prepend(Delete())
    screen = build_screen(EditAsset(InputMode.NORMAL, Uncategorised(), 2, pending), store)
    assert screen.title == "Uncategorised"
    assert screen.asset is not None and screen.asset.record == assets[2]
    assert screen.position == "3/3"
    assert screen.pending_lines == ["Delete", "Add to album a1"]


def test_edit_screen_without_assets(store, albums) -> None:
    mode = EditAsset(InputMode.INSERT, InAlbum(albums[1]), 0, PendingChangeList())
    screen = build_screen(mode, store)
    assert screen.title == "Album: Jazz Festival"
    assert screen.asset is None
    assert screen.position == "0/0"
    assert "INSERT" in screen.help_lines[0]


def test_asset_vm_properties() -> None:
    vm = AssetVM(
        Asset(
            id="v1",
            path="/library/2024/clip.mp4",
            title="",
            mime_type="video/mp4",
            is_favourite=True,
            is_archived=True,
        )
    )
    assert vm.file_name == "clip.mp4"
    assert vm.folder_path == "/library/2024"
    assert vm.is_video
    assert vm.flags == "★ archived"


def test_describe_change_labels() -> None:
    assert describe_change(Delete()) == "Delete"
    assert describe_change(AddToAlbum("x")) == "Add to album x"
