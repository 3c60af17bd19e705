from __future__ import annotations

from core.models import (
    Delete,
    EditAsset,
    Favourite,
    InAlbum,
    InputMode,
    LibraryStore,
    MainMenu,
    PendingChangeList,
    SearchAssetInput,
    SearchResults,
    SelectAlbumInput,
    Uncategorised,
)
from core.services.album_matcher import match_albums
from core.services.interfaces import DownloadRequested, ReloadRequested
from core.services.mode_controller import handle_key


def _press(mode, keys, store):
    effects = []
    for key in keys:
        transition = handle_key(mode, key, store)
        mode = transition.mode
        effects.append(transition.effect)
    return mode, effects


def _edit(index: int = 0, pending: PendingChangeList | None = None, **kwargs) -> EditAsset:
    return EditAsset(
        kwargs.get("input_mode", InputMode.NORMAL),
        kwargs.get("source", Uncategorised()),
        index,
        pending or PendingChangeList(),
    )


# Main menu


def test_main_menu_u_enters_uncategorised_edit(store) -> None:
    mode, _ = _press(MainMenu(), ["u"], store)
    assert mode == EditAsset(InputMode.NORMAL, Uncategorised(), 0, PendingChangeList())


def test_main_menu_s_enters_search(store) -> None:
    mode, _ = _press(MainMenu(), ["s"], store)
    assert mode == SearchAssetInput("")


def test_main_menu_unknown_key_is_noop(store) -> None:
    transition = handle_key(MainMenu(), "x", store)
    assert transition.mode == MainMenu()
    assert transition.effect is None


# Album picker


def test_album_selection_scenario(store, albums) -> None:
    mode, _ = _press(MainMenu(), ["a"], store)
    assert mode == SelectAlbumInput("", match_albums("", albums))

    mode, _ = _press(mode, ["J"], store)
    assert mode == SelectAlbumInput("J", match_albums("J", albums))
    assert len(mode.matches) == 1

    mode, _ = _press(mode, ["Enter"], store)
    jazz = next(a for a in albums if a.name == "Jazz Festival")
    assert mode == EditAsset(InputMode.NORMAL, InAlbum(jazz), 0, PendingChangeList())


def test_album_enter_with_several_matches_is_noop(store) -> None:
    mode, _ = _press(MainMenu(), ["a", "a"], store)
    assert len(mode.matches) > 1
    after, effects = _press(mode, ["Enter"], store)
    assert after == mode
    assert effects == [None]


def test_album_enter_with_no_match_is_noop(store) -> None:
    mode, _ = _press(MainMenu(), ["a", "q", "q"], store)
    assert mode.matches == ()
    after, _ = _press(mode, ["Enter"], store)
    assert after == mode


def test_album_enter_uses_current_album_collection(store, albums) -> None:
    # Matches captured before the albums arrived.
    stale = SelectAlbumInput("Jazz", ())
    mode, _ = _press(stale, ["Enter"], store)
    jazz = next(a for a in albums if a.name == "Jazz Festival")
    assert mode == EditAsset(InputMode.NORMAL, InAlbum(jazz), 0, PendingChangeList())


def test_album_backspace_recomputes_matches(store, albums) -> None:
    mode, _ = _press(MainMenu(), ["a", "J", "x"], store)
    assert mode.matches == ()
    mode, _ = _press(mode, ["Backspace"], store)
    assert mode == SelectAlbumInput("J", match_albums("J", albums))


def test_album_matches_follow_current_albums() -> None:
    store = LibraryStore()
    mode, _ = _press(MainMenu(), ["a"], store)
    assert mode.matches == ()


def test_album_escape_returns_to_menu(store) -> None:
    mode, _ = _press(MainMenu(), ["a", "J", "Escape"], store)
    assert mode == MainMenu()


# Search input


def test_search_typing_and_backspace(store) -> None:
    mode, _ = _press(MainMenu(), ["s", "c", "a", "t", " ", "2", "Backspace"], store)
    assert mode == SearchAssetInput("cat ")


def test_search_ignores_non_ascii_letters(store) -> None:
    mode, _ = _press(SearchAssetInput("a"), ["é"], store)
    assert mode == SearchAssetInput("a")


def test_search_backspace_on_empty_query(store) -> None:
    mode, _ = _press(SearchAssetInput(""), ["Backspace"], store)
    assert mode == SearchAssetInput("")


def test_search_enter_opens_search_results(store) -> None:
    mode, _ = _press(SearchAssetInput("dog"), ["Enter"], store)
    assert mode == EditAsset(InputMode.NORMAL, SearchResults("dog"), 0, PendingChangeList())


def test_search_escape_returns_to_menu(store) -> None:
    mode, _ = _press(SearchAssetInput("dog"), ["Escape"], store)
    assert mode == MainMenu()


def test_text_modes_capture_letters_before_general_bindings(store) -> None:
    # "u" is a main menu binding but plain text while searching
    mode, _ = _press(SearchAssetInput(""), ["u"], store)
    assert mode == SearchAssetInput("u")


# Asset editing


def test_arrows_wrap_around(store) -> None:
    mode, _ = _press(_edit(0), ["ArrowLeft"], store)
    assert mode.index == 2
    mode, _ = _press(mode, ["ArrowRight"], store)
    assert mode.index == 0
    mode, _ = _press(mode, ["ArrowRight", "ArrowRight"], store)
    assert mode.index == 2


def test_arrows_over_empty_sequence_stay_at_zero(store) -> None:
    mode, _ = _press(_edit(0, source=SearchResults("x")), ["ArrowLeft", "ArrowRight"], store)
    assert mode.index == 0


def test_pending_changes_most_recent_first(store) -> None:
    mode, _ = _press(_edit(0), ["f", "d"], store)
    assert list(mode.pending) == [Delete(), Favourite()]


def test_duplicate_pending_changes_are_kept(store) -> None:
    mode, _ = _press(_edit(0), ["f", "f"], store)
    assert list(mode.pending) == [Favourite(), Favourite()]


def test_navigation_keeps_pending_changes(store) -> None:
    mode, _ = _press(_edit(0), ["f", "ArrowRight"], store)
    assert mode.index == 1
    assert list(mode.pending) == [Favourite()]


def test_escape_discards_pending_changes(store) -> None:
    mode, _ = _press(_edit(0), ["f", "d"], store)
    assert len(mode.pending) == 2
    mode, _ = _press(mode, ["Escape"], store)
    assert mode == MainMenu()
    # Re-entering starts with an empty list
    mode, _ = _press(mode, ["u"], store)
    assert len(mode.pending) == 0


def test_insert_mode_round_trip(store) -> None:
    mode, _ = _press(_edit(1), ["i"], store)
    assert mode.input_mode is InputMode.INSERT
    mode, _ = _press(mode, ["f", "d", "ArrowRight", "F5", "Home"], store)
    assert mode == _edit(1, input_mode=InputMode.INSERT)
    mode, _ = _press(mode, ["Escape"], store)
    assert mode == _edit(1)


def test_download_current_asset(store, assets) -> None:
    transition = handle_key(_edit(1), "o", store)
    assert transition.mode == _edit(1)
    assert transition.effect == DownloadRequested(assets[1])


def test_download_without_assets_is_noop(store) -> None:
    transition = handle_key(_edit(0, source=InAlbum(store.albums[0])), "o", store)
    assert transition.effect is None


# General actions


def test_reload_from_any_non_text_binding(store) -> None:
    for mode in (MainMenu(), SearchAssetInput("x"), _edit(2)):
        transition = handle_key(mode, "F5", store)
        assert transition.mode == mode
        assert transition.effect == ReloadRequested()


def test_home_returns_to_main_menu(store) -> None:
    for mode in (SearchAssetInput("x"), SelectAlbumInput("", ()), _edit(2)):
        assert handle_key(mode, "Home", store).mode == MainMenu()


def test_unknown_named_key_is_noop(store) -> None:
    mode = _edit(2)
    transition = handle_key(mode, "Tab", store)
    assert transition.mode is mode
    assert transition.effect is None
