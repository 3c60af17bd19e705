"""Toolkit-free description of what the main window should show.

`build_screen` turns the current mode and library store into plain strings
and records so the Qt view only has to copy them into widgets.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.viewmodels.asset_vm import AssetVM, describe_change
from core.models import (
    EditAsset,
    Error,
    Idle,
    InAlbum,
    InputMode,
    LibraryStore,
    Loading,
    LoadState,
    MainMenu,
    Mode,
    NoAssets,
    SearchAssetInput,
    SearchResults,
    SelectAlbumInput,
    Uncategorised,
)

MAIN_MENU_HELP = [
    "u  browse uncategorised assets",
    "a  pick an album",
    "s  search assets",
    "F5 reload",
]
EDIT_NORMAL_HELP = "←/→ browse · f favourite · d delete · o download · i insert · Esc menu"
EDIT_INSERT_HELP = "INSERT · Esc back to normal"
INPUT_HELP = "Type to filter · Backspace · Enter confirm · Esc menu"


@dataclass
class ScreenVM:
    """Everything the renderer needs for one frame."""

    title: str
    help_lines: list[str] = field(default_factory=list)
    album_lines: list[str] = field(default_factory=list)
    asset: AssetVM | None = None
    position: str = ""
    pending_lines: list[str] = field(default_factory=list)
    status: str = ""


def describe_load_state(state: LoadState) -> str:
    if isinstance(state, Idle):
        return "idle"
    if isinstance(state, Loading):
        return "loading…"
    if isinstance(state, Error):
        return f"error: {state.cause}"
    return "ok"


def _source_title(mode: EditAsset) -> str:
    source = mode.source
    if isinstance(source, Uncategorised):
        return "Uncategorised"
    if isinstance(source, SearchResults):
        return f"Search: {source.query}"
    if isinstance(source, InAlbum):
        return f"Album: {source.album.name}"
    if isinstance(source, NoAssets):
        return "No assets"
    raise TypeError(f"Unknown asset source: {source!r}")


def build_screen(mode: Mode, store: LibraryStore) -> ScreenVM:
    """Build the screen description for `mode` over `store`."""
    status = (
        f"Albums: {describe_load_state(store.album_state)} | "
        f"Assets: {describe_load_state(store.asset_state)}"
    )

    if isinstance(mode, MainMenu):
        return ScreenVM(title="Image Categorizer", help_lines=list(MAIN_MENU_HELP), status=status)

    if isinstance(mode, SearchAssetInput):
        return ScreenVM(title=f"Search: {mode.query}_", help_lines=[INPUT_HELP], status=status)

    if isinstance(mode, SelectAlbumInput):
        lines = [f"{a.name} ({a.asset_count})" for a in mode.matches]
        return ScreenVM(
            title=f"Album: {mode.query}_",
            help_lines=[INPUT_HELP],
            album_lines=lines,
            status=status,
        )

    if isinstance(mode, EditAsset):
        assets = store.assets_for(mode.source)
        asset = AssetVM(assets[mode.index]) if 0 <= mode.index < len(assets) else None
        position = f"{mode.index + 1}/{len(assets)}" if assets else "0/0"
        help_line = EDIT_INSERT_HELP if mode.input_mode is InputMode.INSERT else EDIT_NORMAL_HELP
        return ScreenVM(
            title=_source_title(mode),
            help_lines=[help_line],
            asset=asset,
            position=position,
            pending_lines=[describe_change(c) for c in mode.pending],
            status=status,
        )

    raise TypeError(f"Unknown mode: {mode!r}")
