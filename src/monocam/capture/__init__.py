# -*- coding: utf-8 -*-
"""
The Capture Package for MonoCam.

Frame sources that feed the processing pipeline. Currently only
``camera.CameraSource`` (OpenCV VideoCapture).
"""

from .camera import CameraSource

__all__ = ["CameraSource"]
