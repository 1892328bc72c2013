# -*- coding: utf-8 -*-
"""
The Core Processing Package for MonoCam.

This package holds the frame-transformation side of the application: frame
decoding, the built-in colour schemes, the monochrome converter and the
pipeline that ties the display path to the OCR worker. Nothing here imports
the GUI, so every module can be used (and tested) headless.

Modules:
- `frames`: RawFrame / FrameBuffer and frame decoding.
- `color_scheme`: The immutable two-colour palettes.
- `converter`: Grayscale, Otsu threshold and recolouring.
- `pipeline`: FrameProcessingPipeline (display path and capture path).
"""

# Import order matters: ``pipeline`` depends on the three modules above it.
from .color_scheme import BUILTIN_SCHEMES, ColorScheme, get_scheme, scheme_names
from .frames import FrameBuffer, PixelFormat, RawFrame, decode_frame
from .converter import convert, project_to_grayscale
from .pipeline import FrameProcessingPipeline

__all__ = [
    "BUILTIN_SCHEMES",
    "ColorScheme",
    "get_scheme",
    "scheme_names",
    "FrameBuffer",
    "PixelFormat",
    "RawFrame",
    "decode_frame",
    "convert",
    "project_to_grayscale",
    "FrameProcessingPipeline",
]
