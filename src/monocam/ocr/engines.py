# -*- coding: utf-8 -*-
"""
src/monocam/ocr/engines.py

OCR engine backends.

An engine is created and used only by the OCR worker thread. Loading is kept
out of ``__init__`` so the (slow) model load happens on that thread rather
than on the thread that builds the worker. Both backends import their OCR
package inside ``load()`` so a missing package surfaces as an
``EngineInitError`` instead of breaking application start-up.
"""

import logging
from typing import List, Optional

import numpy as np

from ..errors import EngineInitError, RecognitionError

logger = logging.getLogger(__name__)


class OCREngine:
    """Interface shared by the OCR backends."""

    name = "base"

    def load(self) -> None:
        """
        Prepares the engine (loads models, checks language data).

        Raises:
            EngineInitError: If the engine cannot be used.
        """
        raise NotImplementedError

    def recognize(self, image: np.ndarray) -> str:
        """
        Extracts text from a 2-D uint8 grayscale image.

        Returns:
            str: The recognized text, possibly empty.
        """
        raise NotImplementedError


class EasyOCREngine(OCREngine):
    """
    OCR engine backed by EasyOCR.

    The reader instance is kept for the engine's lifetime to avoid reloading
    the model on every call.
    """

    name = "easyocr"

    def __init__(self, languages: Optional[List[str]] = None, gpu: bool = False,
                 confidence_threshold: float = 0.0):
        """
        Args:
            languages (List[str]): EasyOCR language codes. Defaults to ['en'].
            gpu (bool): Whether EasyOCR may use CUDA.
            confidence_threshold (float): Fragments with a lower confidence
                                          (0.0 - 1.0) are dropped.
        """
        self.languages = languages or ["en"]
        self.gpu = gpu
        self.confidence_threshold = confidence_threshold
        self.reader = None

    def load(self) -> None:
        logger.info(f"Initializing EasyOCR Reader for languages: {self.languages}...")
        try:
            import easyocr
            self.reader = easyocr.Reader(self.languages, gpu=self.gpu)
        except Exception as e:
            raise EngineInitError(f"Failed to initialize EasyOCR Reader: {e}") from e
        logger.info("EasyOCR Reader initialized successfully.")

    def recognize(self, image: np.ndarray) -> str:
        if self.reader is None:
            raise RecognitionError("EasyOCR Reader is not loaded")

        # detail=1 keeps the confidence so fragments can be filtered.
        ocr_results = self.reader.readtext(image, detail=1, paragraph=False)

        lines = []
        for (_bbox, text, conf) in ocr_results:
            if conf >= self.confidence_threshold:
                lines.append(text)
                logger.debug(f"Accepted fragment '{text}' with confidence {conf:.2f}")
            else:
                logger.debug(f"Rejected fragment '{text}' with confidence {conf:.2f}")
        return "\n".join(lines)


class TesseractEngine(OCREngine):
    """OCR engine backed by the Tesseract binary through pytesseract."""

    name = "tesseract"

    def __init__(self, language: str = "eng", page_segmentation_mode: int = 3):
        """
        Args:
            language (str): Tesseract language code(s), e.g. 'eng' or 'eng+deu'.
            page_segmentation_mode (int): Value for ``--psm``. 3 is fully
                                          automatic page segmentation.
        """
        self.language = language
        self.page_segmentation_mode = page_segmentation_mode
        self._pytesseract = None

    def load(self) -> None:
        try:
            import pytesseract
            version = pytesseract.get_tesseract_version()
            available = set(pytesseract.get_languages(config=""))
        except Exception as e:
            raise EngineInitError(f"Could not initialize Tesseract: {e}") from e

        missing = [lang for lang in self.language.split("+") if lang not in available]
        if missing:
            raise EngineInitError(
                f"Tesseract language data not found for {missing}. "
                "Install the traineddata files or set TESSDATA_PREFIX."
            )
        self._pytesseract = pytesseract
        logger.info(f"Tesseract {version} initialized for '{self.language}'.")

    def recognize(self, image: np.ndarray) -> str:
        if self._pytesseract is None:
            raise RecognitionError("Tesseract is not loaded")
        text = self._pytesseract.image_to_string(
            image,
            lang=self.language,
            config=f"--psm {self.page_segmentation_mode}",
        )
        return text.strip()


# Tesseract uses three-letter language codes; EasyOCR uses two-letter ones.
_TESSERACT_LANGUAGES = {"en": "eng", "de": "deu", "fr": "fra", "es": "spa", "it": "ita"}


def create_engine(name: str, languages: Optional[List[str]] = None, gpu: bool = False,
                  confidence_threshold: float = 0.0, page_segmentation_mode: int = 3) -> OCREngine:
    """
    Returns an unloaded engine for the configured backend.

    Options that do not apply to the chosen backend are ignored.

    Raises:
        ValueError: If ``name`` is not a known backend.
    """
    backend = name.lower().strip()
    languages = languages or ["en"]

    if backend == EasyOCREngine.name:
        return EasyOCREngine(languages, gpu=gpu, confidence_threshold=confidence_threshold)

    if backend == TesseractEngine.name:
        language = "+".join(_TESSERACT_LANGUAGES.get(lang, lang) for lang in languages)
        return TesseractEngine(language, page_segmentation_mode=page_segmentation_mode)

    raise ValueError(f"Unknown OCR engine {name!r}")
