from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.views.main_window import MainWindow
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings


BASE_DIR = Path(__file__).parent


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    init_logging(settings.get("logging.dir") or None, settings.get("logging.level", "INFO"))
    logger.info("Starting twinpanel")

    app = QApplication(sys.argv)

    win = MainWindow(settings=settings)
    win.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
