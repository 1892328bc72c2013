# -*- coding: utf-8 -*-
"""
The GUI Package for MonoCam.

This package contains the PyQt6 user interface: the main video window, the
colour-scheme dialog and the OCR results window. The widgets only display
data and emit signals; the controller in `monocam.app` owns the pipeline
and the OCR worker.
"""

from .results_window import ResultsWindow
from .scheme_dialog import ColorSchemeDialog
from .video_window import VideoWindow

__all__ = [
    "ResultsWindow",
    "ColorSchemeDialog",
    "VideoWindow",
]
