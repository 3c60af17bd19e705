"""Keyboard-driven interaction state machine.

`handle_key` routes each key identifier to the handler of the active mode.
A handler returns a `Transition` when the key is one of its bindings and
`None` otherwise; only then is the key looked up among the general actions
shared by all modes. Handlers never mutate their inputs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Union

from loguru import logger

from core.models import (
    Delete,
    EditAsset,
    Favourite,
    InAlbum,
    InputMode,
    MainMenu,
    Mode,
    PendingChangeList,
    SearchAssetInput,
    SearchResults,
    SelectAlbumInput,
    Uncategorised,
)
from core.services import text_editor
from core.services.album_matcher import match_albums
from core.services.image_pointer import loop_image_index_over_array
from core.services.interfaces import DownloadRequested, KeyContext, ReloadRequested, Transition

KEY_ARROW_LEFT = "ArrowLeft"
KEY_ARROW_RIGHT = "ArrowRight"
KEY_BACKSPACE = "Backspace"
KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


# General actions


@dataclass(frozen=True)
class ChangeUserMode:
    target: Mode


@dataclass(frozen=True)
class ReloadData:
    pass


@dataclass(frozen=True)
class UnknownAction:
    pass


GeneralAction = Union[ChangeUserMode, ReloadData, UnknownAction]

GENERAL_BINDINGS: dict[str, GeneralAction] = {
    "F5": ReloadData(),
    "Home": ChangeUserMode(MainMenu()),
}


def general_action(key: str) -> GeneralAction:
    """Classify a key that no mode-specific binding claimed."""
    return GENERAL_BINDINGS.get(key, UnknownAction())


def apply_general_action(mode: Mode, action: GeneralAction) -> Transition:
    if isinstance(action, ChangeUserMode):
        return Transition(action.target)
    if isinstance(action, ReloadData):
        return Transition(mode, ReloadRequested())
    return Transition(mode)


# Mode handlers


def _main_menu(mode: MainMenu, key: str, ctx: KeyContext) -> Transition | None:
    if key == "u":
        return Transition(EditAsset(InputMode.NORMAL, Uncategorised(), 0, PendingChangeList()))
    if key == "a":
        return Transition(SelectAlbumInput("", match_albums("", ctx.albums)))
    if key == "s":
        return Transition(SearchAssetInput(""))
    return None


def _search_input(mode: SearchAssetInput, key: str, ctx: KeyContext) -> Transition | None:
    if text_editor.is_supported_search_letter(key):
        return Transition(SearchAssetInput(text_editor.append(mode.query, key)))
    if key == KEY_BACKSPACE:
        return Transition(SearchAssetInput(text_editor.backspace(mode.query)))
    if key == KEY_ESCAPE:
        return Transition(MainMenu())
    if key == KEY_ENTER:
        return Transition(
            EditAsset(InputMode.NORMAL, SearchResults(mode.query), 0, PendingChangeList())
        )
    return None


def _album_input(mode: SelectAlbumInput, key: str, ctx: KeyContext) -> Transition | None:
    if text_editor.is_supported_search_letter(key):
        query = text_editor.append(mode.query, key)
        return Transition(SelectAlbumInput(query, match_albums(query, ctx.albums)))
    if key == KEY_BACKSPACE:
        query = text_editor.backspace(mode.query)
        return Transition(SelectAlbumInput(query, match_albums(query, ctx.albums)))
    if key == KEY_ESCAPE:
        return Transition(MainMenu())
    if key == KEY_ENTER:
        matches = match_albums(mode.query, ctx.albums)
        if len(matches) == 1:
            album = matches[0]
            return Transition(
                EditAsset(InputMode.NORMAL, InAlbum(album), 0, PendingChangeList())
            )
        # Ambiguous or empty selection: stay put.
        return Transition(mode)
    return None


def _edit_asset(mode: EditAsset, key: str, ctx: KeyContext) -> Transition | None:
    if mode.input_mode is InputMode.INSERT:
        if key == KEY_ESCAPE:
            return Transition(replace(mode, input_mode=InputMode.NORMAL))
        # Reserved for free-text annotation.
        return Transition(mode)

    assets = ctx.assets_for(mode.source)
    if key == KEY_ARROW_LEFT:
        return Transition(
            replace(mode, index=loop_image_index_over_array(mode.index, -1, len(assets)))
        )
    if key == KEY_ARROW_RIGHT:
        return Transition(
            replace(mode, index=loop_image_index_over_array(mode.index, 1, len(assets)))
        )
    if key == KEY_ESCAPE:
        # Pending changes are discarded.
        return Transition(MainMenu())
    if key == "i":
        return Transition(replace(mode, input_mode=InputMode.INSERT))
    if key == "d":
        return Transition(replace(mode, pending=mode.pending.prepend(Delete())))
    if key == "f":
        return Transition(replace(mode, pending=mode.pending.prepend(Favourite())))
    if key == "o":
        if 0 <= mode.index < len(assets):
            return Transition(mode, DownloadRequested(assets[mode.index]))
        return Transition(mode)
    return None


_HANDLERS: dict[type, Callable[..., Transition | None]] = {
    MainMenu: _main_menu,
    SearchAssetInput: _search_input,
    SelectAlbumInput: _album_input,
    EditAsset: _edit_asset,
}


def handle_key(mode: Mode, key: str, ctx: KeyContext) -> Transition:
    """Handle one key identifier in `mode` and return the resulting transition.

    Args:
        mode: The currently active mode.
        key: Key identifier such as "a", "Enter" or "ArrowLeft".
        ctx: Read-only access to albums and per-source asset sequences.

    Returns:
        The new mode plus an optional effect request. Unknown keys return the
        unchanged mode and no effect.
    """
    handler = _HANDLERS[type(mode)]
    transition = handler(mode, key, ctx)
    if transition is not None:
        return transition

    action = general_action(key)
    if isinstance(action, UnknownAction):
        logger.debug("Unbound key {} in {}", key, type(mode).__name__)
    return apply_general_action(mode, action)
