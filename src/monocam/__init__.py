# -*- coding: utf-8 -*-
"""
MonoCam Application Package.

MonoCam shows a live camera feed rendered in two colours and, on demand,
extracts printed text from the current frame with OCR.

- `monocam.core`: frame decoding, colour schemes, monochrome conversion and
  the frame processing pipeline.
- `monocam.ocr`: OCR engines and the background recognition worker.
- `monocam.gui`, `monocam.app`: the PyQt6 shell.

The GUI is not imported here, so the core and OCR packages can be used
without a display.
"""

__version__ = "0.1.0"
