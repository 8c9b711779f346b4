"""Allow running Focus Flow as a module: python -m focusflow."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import FocusFlowApp


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("FOCUSFLOW_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    logging.getLogger(__name__).info("Focus Flow ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Focus Flow")
    app.setOrganizationName("FocusFlow")

    window = FocusFlowApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
