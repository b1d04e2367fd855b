# -*- coding: utf-8 -*-
"""Application entry point."""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

from PyQt6.QtWidgets import QApplication, QMessageBox

from eyescreen.config import ConfigError, load_config, resolve_api_key
from eyescreen.constants import APP_NAME
from eyescreen.gui.main_window import MainWindow
from eyescreen.utils.logger import setup_session_logging


def global_exception_handler(exc_type, exc_value, exc_traceback):
    """Log fatal errors and keep a copy in logs/LAST_CRASH.log."""
    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
    logging.getLogger().critical("FATAL CRASH:\n%s", error_msg)

    crash_path = Path.cwd() / "logs" / "LAST_CRASH.log"
    try:
        crash_path.parent.mkdir(parents=True, exist_ok=True)
        crash_path.write_text(error_msg, encoding="utf-8")
    except OSError:
        logging.getLogger().exception("Could not write crash report")

    if QApplication.instance():
        QMessageBox.critical(None, "Application Crash", f"A fatal error occurred.\nDetails saved to: {crash_path}")

    sys.__excepthook__(exc_type, exc_value, exc_traceback)


def main() -> int:
    """Start the GUI application."""
    sys.excepthook = global_exception_handler
    session_log_path = setup_session_logging(Path.cwd(), APP_NAME)
    logger = logging.getLogger(__name__)
    app = QApplication(sys.argv)
    if session_log_path is not None:
        logger.info("Session log file: %s", session_log_path)

    settings_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        settings = load_config(settings_path)
    except ConfigError as exc:
        logger.error("Invalid settings: %s", exc)
        QMessageBox.critical(None, "Invalid Settings", str(exc))
        return 2

    if not resolve_api_key(settings):
        logger.warning("No Gemini API key configured; analyses will fail until GEMINI_API_KEY is set")
        QMessageBox.warning(
            None,
            "API Key Missing",
            "No Gemini API key was found. Set GEMINI_API_KEY in the environment or a .env file.",
        )

    window = MainWindow(settings=settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
