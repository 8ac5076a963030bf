"""Application entry point for the Areto desktop client."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from areto.config import get_settings
from areto.server.api_server import build_quiz_service, start_api_server
from areto.ui.player_main_window import PlayerMainWindow
from areto.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, optionally start the API server, and launch the Qt UI."""
    settings = get_settings()
    logger = configure_logging(settings.log_level)
    logger.info("Starting Areto…")

    if settings.embedded_server:
        quiz_service = build_quiz_service(settings)
        start_api_server(quiz_service, settings)
        logger.info("Quiz API available at http://%s:%d/api", settings.host, settings.port)
    else:
        logger.info("Using quiz API at %s", settings.api_base_url)

    app = QApplication(sys.argv)
    window = PlayerMainWindow(settings)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
