"""
PyColorCode - Character Color Editor
Application bootstrap: QApplication, theme and main window
"""

import argparse
import sys

from PyQt5.QtWidgets import QApplication

from colorcode import __version__
from colorcode.ui.color_editor_ui import ColorEditor
from colorcode.utils.logging_config import setup_logging
from colorcode.utils.settings import SettingsManager


DARK_STYLESHEET = """
    QMainWindow {
        background-color: #2b2b2b;
        color: #ffffff;
    }
    QWidget {
        background-color: #2b2b2b;
        color: #ffffff;
    }
    QPushButton {
        background-color: #404040;
        border: 1px solid #555555;
        padding: 5px;
        border-radius: 3px;
    }
    QPushButton:hover {
        background-color: #505050;
    }
    QPushButton:pressed {
        background-color: #353535;
    }
    QScrollArea {
        border: 1px solid #555555;
        background-color: #353535;
    }
    QMenuBar {
        background-color: #353535;
        color: #ffffff;
    }
    QMenuBar::item:selected {
        background-color: #2a82da;
    }
    QMenu {
        background-color: #353535;
        color: #ffffff;
        border: 1px solid #555555;
    }
    QMenu::item:selected {
        background-color: #2a82da;
    }
"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Character color editor with GameShark export')
    parser.add_argument('--log-level', default='INFO', help='DEBUG, INFO, WARNING, ERROR')
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')
    parser.add_argument('--settings', default=None, help='Path to settings.json')
    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point"""
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    app = QApplication(sys.argv[:1])
    app.setApplicationName('PyColorCode')
    app.setApplicationVersion(__version__)
    app.setStyle('Fusion')
    app.setStyleSheet(DARK_STYLESHEET)

    editor = ColorEditor(SettingsManager(args.settings))
    editor.show()

    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
