# -*- coding: utf-8 -*-
"""
src/monocam/core/pipeline.py

Connects the synchronous display path with the asynchronous OCR path.

``render_frame`` runs on the thread that delivers frames and only does the
bounded-time monochrome conversion. ``capture_and_recognize`` does the same
conversion, then hands a grayscale copy to the OCR worker and returns at
once. Neither entry point raises on a malformed frame: they return ``None``
and the caller simply waits for the next frame.
"""

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING, Optional

from ..errors import DecodeError
from . import converter
from .color_scheme import ColorScheme
from .frames import FrameBuffer, RawFrame, decode_frame

if TYPE_CHECKING:
    from ..ocr.results import RecognitionResult
    from ..ocr.worker import OCRWorker

logger = logging.getLogger(__name__)


class FrameProcessingPipeline:
    """
    Turns raw frames into display-ready frames and OCR requests.

    The colour scheme is passed into each call rather than stored, so a
    change of scheme applies to the next frame and no locking is needed.
    """

    def __init__(self, worker: "OCRWorker"):
        self.worker = worker

    def _decode(self, raw: RawFrame) -> Optional[FrameBuffer]:
        try:
            return decode_frame(raw)
        except DecodeError as e:
            logger.debug(f"Skipping undecodable frame: {e}")
            return None

    def render_frame(self, raw: RawFrame, scheme: ColorScheme) -> Optional[FrameBuffer]:
        """
        Converts a raw frame for display.

        Returns:
            The two-colour BGR frame (empty for an empty input), or ``None`` if
            the frame could not be decoded.
        """
        frame = self._decode(raw)
        if frame is None:
            return None
        return converter.convert(frame, scheme)

    def capture_and_recognize(self, raw: RawFrame,
                              scheme: ColorScheme) -> "Optional[Future[RecognitionResult]]":
        """
        Converts a raw frame and queues it for OCR.

        The raw data is copied while decoding, before anything leaves the
        calling thread, so ``raw`` may be released as soon as this returns.

        Returns:
            The worker's future for the request, or ``None`` if the frame
            could not be decoded.
        """
        frame = self._decode(raw)
        if frame is None:
            return None
        monochrome = converter.convert(frame, scheme)
        gray = converter.project_to_grayscale(monochrome)
        logger.info(f"Submitting {gray.width}x{gray.height} frame for OCR ({scheme.name})")
        return self.worker.submit(gray)
