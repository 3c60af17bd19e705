"""Download trigger that hands asset URLs to the desktop's default handler."""

from __future__ import annotations

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from loguru import logger


class DownloadService:
    """Fire-and-forget file save through the system browser.

    The browser sends its own cookies, not the client's API key, so the save
    only succeeds when the user is signed in to the Immich web UI.
    """

    def trigger(self, url: str) -> None:
        """Open `url` so the browser saves the file; the outcome is only logged."""
        logger.info("Download requested: {}", url)
        if not QDesktopServices.openUrl(QUrl(url)):
            logger.warning("No handler accepted download URL: {}", url)
