# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import load_config
from app.errors import InvalidConfig
from ui.main_window import MainWindow


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("app.log", encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.exception("Unhandled exception", exc_info=(exctype, value, tb))
        try:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        except Exception:
            logging.debug("Could not show the error dialog", exc_info=True)
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    setup_logging()

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Rotaty")
    app.setOrganizationName("Rotaty")

    try:
        config = load_config()
    except InvalidConfig as e:
        logging.error("Bad settings.json: %s", e)
        QMessageBox.critical(None, "Settings", str(e))
        return 2

    win = MainWindow(config)
    win.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
