import logging
import os
import sys

from PySide6 import QtWidgets

from aerocurves.widgets import EditorWindow


def main():
    logging.basicConfig(
        level=os.environ.get("AEROCURVES_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)

    widget = EditorWindow()
    widget.setWindowTitle("Aero curves")
    widget.resize(1000, 640)
    widget.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
