from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.main_vm import MainVM
from app.views.main_window import MainWindow
from core.services.interfaces import IFetcher
from infrastructure.download_service import DownloadService
from infrastructure.immich_client import ImmichClient
from infrastructure.logging import init_logging
from infrastructure.settings import ImmichConfig, JsonSettings


BASE_DIR = Path(__file__).parent


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    init_logging(level=str(settings.get("logging.level", "INFO")))
    config = ImmichConfig.from_settings(settings)

    app = QApplication(sys.argv)

    client = ImmichClient(
        config.url,
        config.api_key,
        timeout=config.timeout_seconds,
        batch_size=config.batch_size,
    )
    downloader = DownloadService()

    def _make_vm(fetcher: IFetcher) -> MainVM:
        return MainVM(fetcher, downloader, client.original_url)

    win = MainWindow(vm_factory=_make_vm, client=client, settings=settings)
    win.show()
    win.start_load()

    try:
        return app.exec()
    finally:
        client.close()
        logger.info("Image Categorizer closed")


if __name__ == "__main__":
    raise SystemExit(main())
