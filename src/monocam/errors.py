# -*- coding: utf-8 -*-
"""
src/monocam/errors.py

Exception types shared across the MonoCam packages.

Decode failures are resolved inside the frame pipeline, and OCR failures are
converted into tagged results by the worker, so none of these exceptions is
expected to reach the GUI thread.
"""


class MonoCamError(Exception):
    """Base class for all MonoCam errors."""


class DecodeError(MonoCamError):
    """A raw frame could not be normalized into a FrameBuffer."""


class EngineInitError(MonoCamError):
    """The OCR engine failed to load (missing package, model or language data)."""


class RecognitionError(MonoCamError):
    """The OCR engine failed while recognizing a single image."""
