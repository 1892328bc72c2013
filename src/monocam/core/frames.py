# -*- coding: utf-8 -*-
"""
src/monocam/core/frames.py

Frame containers used by the processing pipeline.

A ``RawFrame`` is the capture source's view of a frame. Its pixel storage is
borrowed and is only valid for the duration of the delivery callback, so the
pipeline immediately decodes it into a ``FrameBuffer``: an owned, read-only
NumPy array in OpenCV channel order (GRAY, BGR or BGRA).
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import cv2
import numpy as np

from ..errors import DecodeError

logger = logging.getLogger(__name__)

PixelData = Union[bytes, bytearray, memoryview, np.ndarray]


class PixelFormat(enum.Enum):
    """Channel layout of a raw frame, with its number of bytes per pixel."""

    GRAY = ("gray", 1)
    BGR = ("bgr", 3)
    BGRA = ("bgra", 4)
    RGB = ("rgb", 3)
    RGBA = ("rgba", 4)

    def __init__(self, label: str, channels: int):
        self.label = label
        self.channels = channels


# Conversions into OpenCV order. GRAY/BGR/BGRA are already native.
_TO_OPENCV_ORDER = {
    PixelFormat.RGB: cv2.COLOR_RGB2BGR,
    PixelFormat.RGBA: cv2.COLOR_RGBA2BGRA,
}


@dataclass(frozen=True)
class RawFrame:
    """
    A frame as delivered by a capture source.

    Attributes:
        data: Borrowed pixel storage. Either a flat byte buffer laid out as
              ``height`` rows of ``stride`` bytes, or an ``(h, w[, c])``
              uint8 array.
        width (int): Frame width in pixels.
        height (int): Frame height in pixels.
        stride (int): Bytes per row in ``data``. ``0`` means tightly packed.
        pixel_format (PixelFormat): Channel layout of ``data``.
    """

    data: PixelData = field(repr=False)
    width: int
    height: int
    stride: int = 0
    pixel_format: PixelFormat = PixelFormat.BGR

    @classmethod
    def from_array(cls, array: np.ndarray, pixel_format: Optional[PixelFormat] = None) -> "RawFrame":
        """
        Wraps an image array, such as one returned by ``cv2.VideoCapture.read``.

        When ``pixel_format`` is omitted it is inferred from the channel
        count, assuming OpenCV order.
        """
        if array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 1):
            inferred = PixelFormat.GRAY
        elif array.ndim == 3 and array.shape[2] == 4:
            inferred = PixelFormat.BGRA
        else:
            inferred = PixelFormat.BGR
        height = array.shape[0] if array.ndim >= 1 else 0
        width = array.shape[1] if array.ndim >= 2 else 0
        stride = array.strides[0] if array.ndim >= 2 else 0
        return cls(array, width, height, stride, pixel_format or inferred)


@dataclass(frozen=True, eq=False)
class FrameBuffer:
    """
    An owned, immutable pixel buffer.

    The wrapped array is a private copy and is flagged read-only, so a
    FrameBuffer can be handed to another thread without further copying.
    Channel order is OpenCV's: GRAY (2-D), BGR or BGRA (3-D).
    """

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self):
        pixels = self.pixels
        if pixels.dtype != np.uint8:
            raise ValueError(f"FrameBuffer requires uint8 pixels, got {pixels.dtype}")
        if pixels.ndim not in (2, 3) or (pixels.ndim == 3 and pixels.shape[2] not in (1, 3, 4)):
            raise ValueError(f"Unsupported pixel array shape {pixels.shape}")
        if pixels.ndim == 3 and pixels.shape[2] == 1:
            pixels = pixels.reshape(pixels.shape[:2])
            object.__setattr__(self, "pixels", pixels)
        pixels.flags.writeable = False

    @classmethod
    def from_array(cls, array: np.ndarray) -> "FrameBuffer":
        """Builds a FrameBuffer from a private copy of ``array``."""
        return cls(np.array(array, dtype=np.uint8, copy=True, order="C"))

    @classmethod
    def empty(cls, channels: int = 3) -> "FrameBuffer":
        """Returns a 0x0 buffer with the given channel count."""
        shape = (0, 0) if channels == 1 else (0, 0, channels)
        return cls(np.zeros(shape, dtype=np.uint8))

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else self.pixels.shape[2]

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * self.channels

    @property
    def is_empty(self) -> bool:
        return self.pixels.size == 0

    def copy(self) -> "FrameBuffer":
        return FrameBuffer.from_array(self.pixels)

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height}, channels={self.channels})"


def decode_frame(raw: RawFrame) -> FrameBuffer:
    """
    Normalizes a raw frame into an owned FrameBuffer.

    The pixel data is always copied, so the result stays valid after the
    capture source reclaims ``raw.data``. RGB and RGBA input is reordered to
    BGR and BGRA.

    Args:
        raw (RawFrame): The frame delivered by the capture source.

    Returns:
        FrameBuffer: The decoded frame. A frame with a zero dimension decodes
                     to an empty buffer.

    Raises:
        DecodeError: If the geometry is inconsistent with the storage, or the
                     storage is not 8-bit pixel data.
    """
    fmt = raw.pixel_format
    if not isinstance(fmt, PixelFormat):
        raise DecodeError(f"Unsupported pixel format: {fmt!r}")
    if raw.width < 0 or raw.height < 0:
        raise DecodeError(f"Negative frame size {raw.width}x{raw.height}")
    if raw.width == 0 or raw.height == 0:
        return FrameBuffer.empty(fmt.channels)

    if isinstance(raw.data, np.ndarray):
        pixels = _pixels_from_array(raw)
    else:
        pixels = _pixels_from_bytes(raw)

    conversion = _TO_OPENCV_ORDER.get(fmt)
    if conversion is not None:
        # cvtColor allocates a new array, which doubles as our private copy.
        return FrameBuffer(cv2.cvtColor(np.ascontiguousarray(pixels), conversion))
    return FrameBuffer.from_array(pixels)


def _pixels_from_array(raw: RawFrame) -> np.ndarray:
    array = raw.data
    channels = raw.pixel_format.channels
    if array.dtype != np.uint8:
        raise DecodeError(f"Expected uint8 pixel data, got {array.dtype}")

    expected = (raw.height, raw.width) if channels == 1 else (raw.height, raw.width, channels)
    shape = array.shape
    if channels == 1 and array.ndim == 3 and shape[2] == 1:
        shape = shape[:2]
    if tuple(shape) != expected:
        raise DecodeError(f"Array shape {array.shape} does not match {raw.width}x{raw.height} {raw.pixel_format.label}")
    return array.reshape(expected)


def _pixels_from_bytes(raw: RawFrame) -> np.ndarray:
    channels = raw.pixel_format.channels
    row_bytes = raw.width * channels
    stride = raw.stride or row_bytes
    if stride < row_bytes:
        raise DecodeError(f"Stride {stride} is smaller than one row ({row_bytes} bytes)")

    try:
        flat = np.frombuffer(raw.data, dtype=np.uint8)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Frame storage is not a byte buffer: {e}") from e

    needed = raw.height * stride
    if flat.size < needed:
        raise DecodeError(f"Frame storage holds {flat.size} bytes, expected at least {needed}")

    rows = flat[:needed].reshape(raw.height, stride)[:, :row_bytes]
    if channels == 1:
        return rows
    return rows.reshape(raw.height, raw.width, channels)
