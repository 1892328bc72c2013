# -*- coding: utf-8 -*-
"""
src/monocam/utils/qt_images.py

Conversion from FrameBuffer (OpenCV channel order) to QImage for display.
"""

from PyQt6.QtGui import QImage

from ..core.frames import FrameBuffer

_FORMATS = {
    1: QImage.Format.Format_Grayscale8,
    3: QImage.Format.Format_BGR888,
    4: QImage.Format.Format_ARGB32,  # BGRA byte order on little-endian hosts
}


def frame_to_qimage(frame: FrameBuffer) -> QImage:
    """
    Wraps a frame in a QImage.

    The returned image owns a deep copy of the pixels, so it stays valid
    after ``frame`` is garbage collected.
    """
    if frame.is_empty:
        return QImage()
    # QImage borrows the buffer; keep it referenced until the copy below.
    data = frame.pixels.tobytes()
    image = QImage(
        data,
        frame.width,
        frame.height,
        frame.stride,
        _FORMATS[frame.channels],
    )
    return image.copy()
