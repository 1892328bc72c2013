import logging
import sys

from PyQt6.QtWidgets import QApplication

# The application controller lives in src/monocam/app.py. Install the
# package first (pip install -e .) so 'monocam' is importable.
try:
    from monocam.app import MonoCamApp
    from monocam.config import get_config
except ImportError as e:
    print("Error: Could not import the MonoCam application package.")
    print("Please install it first, e.g. 'pip install -e .' from the project root.")
    print(f"Details: {e}")
    sys.exit(1)


def main():
    """
    The main entry point for the MonoCam application.

    This function loads the configuration, sets up logging, creates the
    QApplication and the MonoCamApp controller, and runs the Qt event loop.
    """
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    app = QApplication(sys.argv)

    monocam_app = MonoCamApp(config)
    # Stop the camera and drain the OCR worker before Qt tears down.
    app.aboutToQuit.connect(monocam_app.shutdown)
    monocam_app.start()

    sys.exit(app.exec())


if __name__ == '__main__':
    main()
