# -*- coding: utf-8 -*-
"""
src/monocam/capture/camera.py

Reads frames from a camera with OpenCV.

The GUI polls ``CameraSource.read()`` from a QTimer, which makes the GUI
thread the frame-delivery thread. Device selection is just the index from
the config file; there is no enumeration.
"""

import logging
from typing import Optional

import cv2

from ..core.frames import RawFrame

logger = logging.getLogger(__name__)


class CameraSource:
    """Thin wrapper around ``cv2.VideoCapture`` producing RawFrames."""

    def __init__(self, index: int = 0):
        self.index = index
        self.stream: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self.stream is not None and self.stream.isOpened()

    def open(self) -> bool:
        """
        Opens the camera device.

        Returns:
            bool: True if the device is open and delivering frames.
        """
        self.stream = cv2.VideoCapture(self.index)
        if not self.stream.isOpened():
            logger.error(f"Failed to open camera {self.index}")
            self.stream = None
            return False
        # Keep latency low: only the newest frame matters.
        self.stream.set(cv2.CAP_PROP_BUFFERSIZE, 1)
        logger.info(f"Camera {self.index} opened.")
        return True

    def read(self) -> Optional[RawFrame]:
        """Returns the next frame, or None if the camera produced nothing."""
        if not self.is_open:
            return None
        grabbed, frame = self.stream.read()
        if not grabbed or frame is None:
            return None
        return RawFrame.from_array(frame)

    def close(self):
        if self.stream is not None:
            self.stream.release()
            self.stream = None
            logger.info(f"Camera {self.index} released.")
