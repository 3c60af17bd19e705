"""Main window: captures keys, relays fetch completions, renders the screen."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QApplication, QMainWindow
from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.viewmodels.screen_vm import build_screen
from app.views.components.menu_controller import MenuController
from app.views.constants import STATUS_TIMEOUT_MS, WINDOW_SIZE_RATIO, WINDOW_TITLE
from app.views.fetch_tasks import FetchTaskRunner
from app.views.key_mapping import key_identifier
from app.views.preview_pane import PreviewPane
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Keyboard-driven categorizer window.

    Background tasks report through the signals below; Qt queues them onto the
    GUI thread so every state change happens between two key presses.
    """

    albumsFetched = Signal(object)  # list[Album]
    albumsFailed = Signal(str)
    assetsFetched = Signal(object)  # list[Asset]
    assetsFailed = Signal(str)
    thumbnailLoaded = Signal(str, object)  # token, bytes | None

    def __init__(
        self,
        vm_factory: Any,
        client: Any,
        settings: Any | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            vm_factory: Callable taking the fetch runner and returning a `MainVM`
            client: Immich client used by background tasks
            settings: Settings instance for configuration
        """
        super().__init__()
        self._settings = settings
        self._runner = FetchTaskRunner(client=client, receiver=self)
        self._vm: MainVM = vm_factory(self._runner)

        thumbnail_size = None
        if self._settings is not None:
            thumbnail_size = self._settings.get("thumbnail_size")

        self.setWindowTitle(WINDOW_TITLE)
        self._preview = PreviewPane(self, self._runner, thumbnail_size=thumbnail_size)
        self.setCentralWidget(self._preview)

        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus()

        self._connect_signals()
        self._setup_initial_window_size()
        self.refresh_view()

    def _connect_signals(self) -> None:
        handlers = {
            "reload": self.on_reload,
            "open_latest_log": self._open_latest_log,
            "open_log_directory": self._open_log_directory,
            "exit": self.close,
        }
        self.menu_controller.connect_actions(handlers)

        self.albumsFetched.connect(self._on_albums_fetched)
        self.albumsFailed.connect(self._on_albums_failed)
        self.assetsFetched.connect(self._on_assets_fetched)
        self.assetsFailed.connect(self._on_assets_failed)
        self.thumbnailLoaded.connect(self._preview.on_thumbnail_loaded)

    def _setup_initial_window_size(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        self.resize(
            int(geometry.width() * WINDOW_SIZE_RATIO), int(geometry.height() * WINDOW_SIZE_RATIO)
        )

    def start_load(self) -> None:
        self._vm.start_load()
        self.refresh_view()

    def refresh_view(self) -> None:
        screen = build_screen(self._vm.mode, self._vm.store)
        self._preview.show_screen(screen)
        self.statusBar().showMessage(screen.status)

    # Key capture

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        key = key_identifier(event.key(), event.text())
        self._vm.press_key(key)
        self.refresh_view()
        event.accept()

    # Menu action handlers

    def on_reload(self) -> None:
        self.start_load()

    def _open_latest_log(self) -> None:
        if not open_latest_log():
            self.statusBar().showMessage("No log file found", STATUS_TIMEOUT_MS)

    def _open_log_directory(self) -> None:
        if not open_log_directory():
            self.statusBar().showMessage("Could not open log directory", STATUS_TIMEOUT_MS)

    # Fetch completions

    def _on_albums_fetched(self, albums: list) -> None:
        self._vm.albums_fetched(albums)
        self.refresh_view()

    def _on_albums_failed(self, cause: str) -> None:
        self._vm.albums_failed(cause)
        self.refresh_view()

    def _on_assets_fetched(self, assets: list) -> None:
        self._vm.assets_fetched(assets)
        self.refresh_view()

    def _on_assets_failed(self, cause: str) -> None:
        self._vm.assets_failed(cause)
        self.refresh_view()

    def closeEvent(self, event) -> None:
        """Log discarded pending changes on exit."""
        pending = getattr(self._vm.mode, "pending", None)
        if pending:
            logger.info("Closing with {} pending changes discarded", len(pending))
        event.accept()
