# -*- coding: utf-8 -*-
"""
src/monocam/core/converter.py

Implements the monochrome conversion used for both display and OCR.

The pipeline is:
1. Project the frame to a single grayscale channel (luma weights).
2. Pick a global binary threshold automatically with Otsu's method, so the
   rendering adapts to the scene's lighting without manual tuning.
3. Recolour every pixel with the scheme's foreground (above the threshold)
   or background (at or below it).

All functions here are pure: they never modify their input and hold no
state between calls, so they can run on any thread.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from .color_scheme import ColorScheme
from .frames import FrameBuffer

logger = logging.getLogger(__name__)

# Used when Otsu's between-class variance is undefined, i.e. the histogram
# has a single populated level.
FALLBACK_THRESHOLD = 128

# Value written to foreground pixels of a binary mask.
MASK_FOREGROUND = 255

# Row and column step of the sample checked before a full palette scan.
_SAMPLE_STEP = 8


def to_grayscale(frame: FrameBuffer) -> np.ndarray:
    """
    Projects a frame to a single channel.

    BGR and BGRA frames go through OpenCV's luma conversion (the alpha
    channel is dropped). A frame that is already single-channel is returned
    as-is, read-only.

    Args:
        frame (FrameBuffer): A GRAY, BGR or BGRA frame.

    Returns:
        np.ndarray: A 2-D uint8 array with the frame's height and width.
    """
    if frame.channels == 1:
        return frame.pixels
    if frame.channels == 4:
        return cv2.cvtColor(frame.pixels, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(frame.pixels, cv2.COLOR_BGR2GRAY)


def select_threshold(gray: np.ndarray) -> int:
    """
    Chooses a global threshold by maximizing between-class variance (Otsu).

    Args:
        gray (np.ndarray): A non-empty 2-D uint8 image.

    Returns:
        int: The threshold. Pixels strictly above it are foreground. Returns
             ``FALLBACK_THRESHOLD`` for a flat histogram.
    """
    if gray.size == 0:
        return FALLBACK_THRESHOLD

    histogram = np.bincount(gray.ravel(), minlength=256)
    if np.count_nonzero(histogram) < 2:
        logger.debug(f"Flat histogram, using fallback threshold {FALLBACK_THRESHOLD}")
        return FALLBACK_THRESHOLD

    threshold, _ = cv2.threshold(gray, 0, MASK_FOREGROUND, cv2.THRESH_BINARY | cv2.THRESH_OTSU)
    return int(threshold)


def binarize(gray: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Builds the binary mask for a grayscale image.

    Returns:
        A tuple of the mask (0 for background, 255 for foreground) and the
        threshold that produced it.
    """
    threshold = select_threshold(gray)
    _, mask = cv2.threshold(gray, threshold, MASK_FOREGROUND, cv2.THRESH_BINARY)
    return mask, threshold


def colorize(mask: np.ndarray, scheme: ColorScheme) -> np.ndarray:
    """Paints a binary mask with the scheme's colours, in BGR order."""
    foreground = np.array(scheme.foreground_bgr, dtype=np.uint8)
    background = np.array(scheme.background_bgr, dtype=np.uint8)
    return np.where(mask[..., np.newaxis] > 0, foreground, background).astype(np.uint8)


def _palette_masks(pixels: np.ndarray, scheme: ColorScheme) -> Tuple[np.ndarray, np.ndarray]:
    is_fg = np.all(pixels == np.array(scheme.foreground_bgr, dtype=np.uint8), axis=-1)
    is_bg = np.all(pixels == np.array(scheme.background_bgr, dtype=np.uint8), axis=-1)
    return is_fg, is_bg


def _is_rendered(frame: FrameBuffer, scheme: ColorScheme) -> bool:
    """
    True if a BGR frame is already a two-colour rendering in ``scheme``.

    Both colours must be present. A frame of a single colour is a uniform
    scene and goes through the midpoint rule like any other uniform input.
    """
    if frame.channels != 3:
        return False
    # A coarse sample rejects ordinary camera frames without a full scan.
    is_fg, is_bg = _palette_masks(frame.pixels[::_SAMPLE_STEP, ::_SAMPLE_STEP], scheme)
    if not np.all(is_fg | is_bg):
        return False
    is_fg, is_bg = _palette_masks(frame.pixels, scheme)
    return bool(np.all(is_fg | is_bg) and is_fg.any() and is_bg.any())


def convert(frame: FrameBuffer, scheme: ColorScheme) -> FrameBuffer:
    """
    Renders a frame in the two colours of ``scheme``.

    A BGR frame that already shows both of the scheme's colours and nothing
    else is a fixed point and is returned unchanged, so converting a
    rendering again gives the same rendering. Uniform frames always follow
    the midpoint rule, whatever their channel layout.

    Args:
        frame (FrameBuffer): The input frame (GRAY, BGR or BGRA).
        scheme (ColorScheme): The palette to render with.

    Returns:
        FrameBuffer: A 3-channel BGR frame with the input's dimensions, or an
                     empty buffer if the input is empty.
    """
    if frame.is_empty:
        return FrameBuffer.empty(3)
    if _is_rendered(frame, scheme):
        return frame

    gray = to_grayscale(frame)
    mask, threshold = binarize(gray)
    logger.debug(f"Converted {frame.width}x{frame.height} frame with threshold {threshold} ({scheme.name})")
    return FrameBuffer(colorize(mask, scheme))


def project_to_grayscale(frame: FrameBuffer) -> FrameBuffer:
    """
    Returns a single-channel copy of ``frame`` for handoff to the OCR worker.

    Applied to the output of :func:`convert`, the result is two-valued and
    keeps the full foreground/background classification (as long as the
    scheme's colours differ in luma, which holds for every built-in scheme).
    """
    if frame.is_empty:
        return FrameBuffer.empty(1)
    gray = to_grayscale(frame)
    if gray is frame.pixels:
        return frame.copy()
    return FrameBuffer(gray)
