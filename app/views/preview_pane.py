from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QLabel, QListWidget, QSizePolicy, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.asset_vm import AssetVM
from app.viewmodels.screen_vm import ScreenVM
from app.views.constants import (
    ALBUM_LIST_MIN_WIDTH_PX,
    DEFAULT_THUMBNAIL_SIZE,
    PREVIEW_MIN_HEIGHT_PX,
)
from app.views.fetch_tasks import FetchTaskRunner


class PreviewPane(QWidget):
    """Renders one `ScreenVM`: title, help, album matches and the current asset."""

    def __init__(
        self,
        parent: QWidget | None,
        task_runner: FetchTaskRunner,
        thumbnail_size: str | None = None,
    ) -> None:
        super().__init__(parent)
        self._runner = task_runner
        self._thumbnail_size = thumbnail_size or DEFAULT_THUMBNAIL_SIZE

        root = QVBoxLayout(self)
        self._title = QLabel()
        self._title.setStyleSheet("font-size: 18px; font-weight: bold;")
        root.addWidget(self._title)

        self._help = QLabel()
        self._help.setWordWrap(True)
        root.addWidget(self._help)

        self._albums = QListWidget()
        self._albums.setMinimumWidth(ALBUM_LIST_MIN_WIDTH_PX)
        self._albums.setFocusPolicy(Qt.NoFocus)
        root.addWidget(self._albums)

        self._image = QLabel("(preview)")
        self._image.setAlignment(Qt.AlignCenter)
        self._image.setMinimumHeight(PREVIEW_MIN_HEIGHT_PX)
        self._image.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        root.addWidget(self._image, 1)

        self._details = QLabel()
        self._details.setWordWrap(True)
        root.addWidget(self._details)

        self._pending = QLabel()
        root.addWidget(self._pending)

        # state
        self._current_asset_id: str | None = None
        self._current_token: str | None = None
        self._pm: QPixmap | None = None

    # Public API
    def show_screen(self, screen: ScreenVM) -> None:
        self._title.setText(screen.title)
        self._help.setText("\n".join(screen.help_lines))

        self._albums.clear()
        self._albums.addItems(screen.album_lines)
        self._albums.setVisible(bool(screen.album_lines))

        self._show_asset(screen.asset, screen.position)
        self._pending.setText(
            "Pending: " + ", ".join(screen.pending_lines) if screen.pending_lines else ""
        )

    def _show_asset(self, asset: AssetVM | None, position: str) -> None:
        if asset is None:
            self._current_asset_id = None
            self._current_token = None
            self._pm = None
            self._image.clear()
            self._image.setVisible(bool(position))
            self._image.setText("(no assets)" if position else "")
            self._details.setText("")
            return

        self._image.setVisible(True)
        details = f"{position}  {asset.file_name}"
        if asset.flags:
            details += f"  {asset.flags}"
        if asset.folder_path:
            details += f"\n{asset.folder_path}"
        self._details.setText(details)

        if asset.record.id == self._current_asset_id:
            return
        self._current_asset_id = asset.record.id
        self._pm = None
        self._image.clear()
        self._image.setText("Loading…")
        self._current_token = self._runner.request_thumbnail(
            asset.record.id, self._thumbnail_size
        )

    def on_thumbnail_loaded(self, token: str, data: object) -> None:
        if token != self._current_token:
            return
        if not data:
            self._image.setText("(failed)")
            return
        pm = QPixmap()
        if not pm.loadFromData(data):  # type: ignore[arg-type]
            logger.error("Could not decode thumbnail for token {}", token)
            self._image.setText("(failed)")
            return
        self._pm = pm
        self._apply_pixmap_fit()

    # Qt events
    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._apply_pixmap_fit()

    def _apply_pixmap_fit(self) -> None:
        if self._pm is None or self._pm.isNull():
            return
        w = max(1, self._image.width())
        h = max(1, self._image.height())
        self._image.setPixmap(
            self._pm.scaled(w, h, Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )
