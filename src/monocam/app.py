# -*- coding: utf-8 -*-
"""
src/monocam/app.py

Core application controller for MonoCam.

This module contains the main application class, `MonoCamApp`, which wires
the camera, the frame processing pipeline, the OCR worker and the windows
together.

Threads:
- The GUI thread is the frame-delivery thread. A QTimer polls the camera and
  renders each frame through the pipeline.
- The OCR worker thread runs recognition. Its results come back through a
  Qt signal, which Qt queues onto the GUI thread.
- When the global hotkey is enabled, pynput calls back on its own thread;
  that callback only emits a signal as well. Presses that arrive while the
  main window is active are left to the in-window shortcut.
"""

import logging
from concurrent.futures import Future
from functools import partial
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from PyQt6.QtWidgets import QDialog

from .capture.camera import CameraSource
from .config import Config
from .core.color_scheme import BUILTIN_SCHEMES, ColorScheme, get_scheme, scheme_names
from .core.frames import RawFrame
from .core.pipeline import FrameProcessingPipeline
from .gui.results_window import ResultsWindow
from .gui.scheme_dialog import ColorSchemeDialog
from .gui.video_window import VideoWindow
from .ocr.engines import create_engine
from .ocr.results import RecognitionResult
from .ocr.worker import OCRWorker

logger = logging.getLogger(__name__)

# How long shutdown waits for an in-flight OCR request.
WORKER_STOP_TIMEOUT_S = 5.0


class MonoCamApp(QObject):
    """
    The main application controller. Manages the windows and the workflow.
    """

    # Carries a RecognitionResult from the OCR thread to the GUI thread.
    ocr_finished = pyqtSignal(object)
    # Carries a global hotkey press from the pynput thread to the GUI thread.
    hotkey_triggered = pyqtSignal()

    def __init__(self, config: Config):
        super().__init__()
        self.config = config
        self.scheme_index = self._initial_scheme_index()
        self.last_frame: Optional[RawFrame] = None
        self.hotkey_manager = None

        self.worker = OCRWorker(
            partial(
                create_engine,
                config.ocr_engine,
                languages=config.ocr_languages,
                gpu=config.ocr_gpu,
                confidence_threshold=config.ocr_confidence_threshold,
                page_segmentation_mode=config.ocr_page_segmentation_mode,
            ),
            max_pending=config.ocr_max_pending,
        )
        self.pipeline = FrameProcessingPipeline(self.worker)
        self.camera = CameraSource(config.camera_index)

        self.window = VideoWindow(scheme_names(), self.scheme_index)
        self.results_window = ResultsWindow()

        self.window.capture_requested.connect(self.capture)
        self.window.scheme_selected.connect(self.set_scheme)
        self.window.scheme_dialog_requested.connect(self.choose_scheme)
        self.ocr_finished.connect(self._on_ocr_finished)
        self.hotkey_triggered.connect(self._on_global_hotkey)

        self.timer = QTimer(self)
        self.timer.timeout.connect(self._on_timer)

    def _initial_scheme_index(self) -> int:
        index = self.config.color_scheme
        if not 0 <= index < len(BUILTIN_SCHEMES):
            logger.warning(f"Configured color scheme {index} does not exist, using 0.")
            return 0
        return index

    @property
    def scheme(self) -> ColorScheme:
        return get_scheme(self.scheme_index)

    def start(self):
        """Starts the OCR worker (the engine loads in the background), the camera and the GUI."""
        self.worker.start()
        self.window.show()

        if self.camera.open():
            self.timer.start(self.config.frame_interval_ms)
            self.window.set_status("Camera active - Press F4 to capture and perform OCR")
        else:
            self.window.set_status(f"Could not open camera {self.config.camera_index}")

        if self.config.global_hotkey:
            # Imported here: pynput needs a display server on Linux.
            from .utils.hotkey_manager import HotkeyManager
            self.hotkey_manager = HotkeyManager(self.config.hotkey, self.hotkey_triggered.emit)
            self.hotkey_manager.start()

    def shutdown(self):
        """Stops the camera, the hotkey listener and the OCR worker."""
        logger.info("Shutting down MonoCam...")
        self.timer.stop()
        self.camera.close()
        if self.hotkey_manager:
            self.hotkey_manager.stop()
        self.worker.stop(timeout=WORKER_STOP_TIMEOUT_S)

    # --- Display path ---

    def _on_timer(self):
        raw = self.camera.read()
        if raw is None:
            return
        self.last_frame = raw
        frame = self.pipeline.render_frame(raw, self.scheme)
        if frame is None or frame.is_empty:
            # Keep showing the previous frame.
            return
        self.window.show_frame(frame)

    def set_scheme(self, index: int):
        if index == self.scheme_index or not 0 <= index < len(BUILTIN_SCHEMES):
            return
        self.scheme_index = index
        self.window.set_scheme_index(index)
        self.window.set_status(f"Color scheme changed to: {self.scheme.name}")

    def choose_scheme(self):
        dialog = ColorSchemeDialog(self.scheme_index, self.window)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.set_scheme(dialog.selected_index)

    # --- Capture path ---

    def capture(self):
        """Sends the most recent frame to OCR."""
        if self.last_frame is None:
            self.window.set_status("No frame available for OCR")
            return

        future = self.pipeline.capture_and_recognize(self.last_frame, self.scheme)
        if future is None:
            self.window.set_status("Error: Could not process frame")
            return
        self.window.set_status("Performing OCR...")
        future.add_done_callback(self._emit_result)

    def _on_global_hotkey(self):
        # While the window has focus its own shortcut handles the key, so one
        # press must not also arrive from the global listener.
        if self.window.isActiveWindow():
            logger.debug("Ignoring global hotkey while the main window is active.")
            return
        self.capture()

    def _emit_result(self, future: "Future[RecognitionResult]"):
        # Runs on the OCR thread (or inline for an immediately rejected request).
        self.ocr_finished.emit(future.result())

    def _on_ocr_finished(self, result: RecognitionResult):
        if result.ok:
            self.window.set_status("OCR complete")
        else:
            self.window.set_status(result.describe())
        self.results_window.show_result(result)
