# -*- coding: utf-8 -*-
"""
src/monocam/gui/video_window.py

Defines the main window: the live monochrome view plus the scheme selector,
the capture controls and a status line.

The window only displays what it is given and reports user actions through
signals. The application controller decides what to do with them.
"""

from typing import List

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeySequence, QPixmap, QShortcut
from PyQt6.QtWidgets import (QComboBox, QHBoxLayout, QLabel, QMainWindow, QPushButton,
                             QSizePolicy, QVBoxLayout, QWidget)

from ..core.frames import FrameBuffer
from ..utils.qt_images import frame_to_qimage

CAPTURE_SHORTCUT = "F4"


class VideoWindow(QMainWindow):
    """
    The application's main window.

    Signals:
        capture_requested: The user asked for OCR on the current frame.
        scheme_selected(int): The user picked a colour scheme by index.
        scheme_dialog_requested: The user wants the scheme dialog.
    """

    capture_requested = pyqtSignal()
    scheme_selected = pyqtSignal(int)
    scheme_dialog_requested = pyqtSignal()

    def __init__(self, scheme_names: List[str], current_scheme: int = 0):
        super().__init__()
        self.setWindowTitle("MonoCam - Video OCR")
        self.resize(800, 640)
        self._setup_ui(scheme_names, current_scheme)

        shortcut = QShortcut(QKeySequence(CAPTURE_SHORTCUT), self)
        shortcut.activated.connect(lambda: self.capture_requested.emit())

    def _setup_ui(self, scheme_names: List[str], current_scheme: int):
        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.video_label = QLabel("Waiting for camera...")
        self.video_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.video_label.setMinimumSize(320, 240)
        self.video_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.video_label.setStyleSheet("QLabel { background-color: black; color: #888888; }")
        layout.addWidget(self.video_label)

        controls = QHBoxLayout()
        controls.addWidget(QLabel("Color Scheme:"))

        self.scheme_combo = QComboBox()
        self.scheme_combo.addItems(scheme_names)
        self.scheme_combo.setCurrentIndex(current_scheme)
        self.scheme_combo.currentIndexChanged.connect(self.scheme_selected)
        controls.addWidget(self.scheme_combo)

        scheme_button = QPushButton("Schemes...")
        scheme_button.clicked.connect(lambda: self.scheme_dialog_requested.emit())
        controls.addWidget(scheme_button)

        controls.addStretch()

        capture_button = QPushButton(f"Capture && OCR ({CAPTURE_SHORTCUT})")
        capture_button.clicked.connect(lambda: self.capture_requested.emit())
        controls.addWidget(capture_button)
        layout.addLayout(controls)

        self.status_label = QLabel(f"Press {CAPTURE_SHORTCUT} to capture and perform OCR")
        self.status_label.setStyleSheet("QLabel { background-color: #f0f0f0; padding: 5px; }")
        layout.addWidget(self.status_label)

        self.setCentralWidget(central)

    def show_frame(self, frame: FrameBuffer):
        """Displays a converted frame, scaled to the view while keeping its aspect ratio."""
        pixmap = QPixmap.fromImage(frame_to_qimage(frame))
        self.video_label.setPixmap(pixmap.scaled(
            self.video_label.size(),
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.FastTransformation,
        ))

    def set_scheme_index(self, index: int):
        """Selects a scheme in the combo box (emits ``scheme_selected`` if it changed)."""
        self.scheme_combo.setCurrentIndex(index)

    def set_status(self, message: str):
        self.status_label.setText(message)
