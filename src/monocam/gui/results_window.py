# -*- coding: utf-8 -*-
"""
src/monocam/gui/results_window.py

Defines the ResultsWindow widget for displaying recognized text.

The window is created once and reused for every capture. Recognized text is
editable so the user can fix small OCR mistakes before copying it. OCR
failures are shown in the status line, styled differently from a successful
capture that simply found no text.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QTextEdit, QVBoxLayout, QWidget

from ..ocr.results import RecognitionResult
from ..utils.clipboard_manager import copy_to_clipboard

WINDOW_SIZE = (600, 400)
STATUS_STYLE = "QLabel { color: gray; font-size: 10px; }"
ERROR_STYLE = "QLabel { color: #c0392b; font-size: 10px; font-weight: bold; }"


class ResultsWindow(QWidget):
    """
    A window showing the text recognized from the last capture.
    """

    def __init__(self, parent: QWidget = None):
        super().__init__(parent)
        self._setup_window_properties()
        self._setup_ui()

    def _setup_window_properties(self):
        """Sets the window flags and size."""
        self.setWindowTitle("OCR Results")
        # Keep it a separate top-level window even when parented.
        self.setWindowFlag(Qt.WindowType.Window)
        self.resize(*WINDOW_SIZE)

    def _setup_ui(self):
        """Creates and arranges the widgets within the window."""
        layout = QVBoxLayout(self)

        title_label = QLabel("Recognized Text:")
        title_label.setStyleSheet("QLabel { font-weight: bold; font-size: 14px; }")
        layout.addWidget(title_label)

        self.text_edit = QTextEdit()
        self.text_edit.setPlaceholderText("OCR results will appear here...")
        self.text_edit.setFont(QFont("Courier New", 10))
        layout.addWidget(self.text_edit)

        self.status_label = QLabel()
        self.status_label.setStyleSheet(STATUS_STYLE)
        layout.addWidget(self.status_label)

        buttons = QHBoxLayout()

        self.copy_button = QPushButton("Copy to Clipboard")
        self.copy_button.setToolTip("Copy the recognized text to clipboard")
        self.copy_button.clicked.connect(self._on_copy_clicked)
        buttons.addWidget(self.copy_button)

        clear_button = QPushButton("Clear")
        clear_button.setToolTip("Clear the text display")
        clear_button.clicked.connect(self._on_clear_clicked)
        buttons.addWidget(clear_button)

        buttons.addStretch()

        close_button = QPushButton("Close")
        close_button.clicked.connect(self.close)
        buttons.addWidget(close_button)

        layout.addLayout(buttons)

    def show_result(self, result: RecognitionResult):
        """Displays a recognition result and brings the window to the front."""
        if result.ok:
            self.text_edit.setPlainText(result.text)
            if result.text.strip():
                self._set_status(f"Characters: {len(result.text)} ({result.elapsed:.1f}s)")
            else:
                self._set_status(result.describe())
        else:
            self.text_edit.clear()
            self._set_status(result.describe(), error=True)

        self.show()
        self.raise_()
        self.activateWindow()

    def _set_status(self, message: str, error: bool = False):
        self.status_label.setStyleSheet(ERROR_STYLE if error else STATUS_STYLE)
        self.status_label.setText(message)

    def _on_copy_clicked(self):
        text = self.text_edit.toPlainText()
        if not text:
            self._set_status("Nothing to copy")
        elif copy_to_clipboard(text):
            self._set_status("Text copied to clipboard")
        else:
            self._set_status("Could not access the clipboard", error=True)

    def _on_clear_clicked(self):
        self.text_edit.clear()
        self._set_status("Text cleared")
