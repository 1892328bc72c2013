# -*- coding: utf-8 -*-
"""
The OCR Package for MonoCam.

- `results`: RecognitionRequest / RecognitionResult and the ErrorKind tags.
- `engines`: EasyOCR and Tesseract backends plus the `create_engine` factory.
- `worker`: OCRWorker, the single-threaded recognition queue.
"""

from .results import ErrorKind, RecognitionRequest, RecognitionResult
from .engines import EasyOCREngine, OCREngine, TesseractEngine, create_engine
from .worker import OCRWorker, WorkerState

__all__ = [
    "ErrorKind",
    "RecognitionRequest",
    "RecognitionResult",
    "EasyOCREngine",
    "OCREngine",
    "TesseractEngine",
    "create_engine",
    "OCRWorker",
    "WorkerState",
]
