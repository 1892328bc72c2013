"""OCR backend tests with stand-in readers; neither EasyOCR nor Tesseract is needed."""
from __future__ import annotations

import numpy as np
import pytest

from monocam.errors import RecognitionError
from monocam.ocr.engines import EasyOCREngine, TesseractEngine, create_engine


class FakeReader:
    def __init__(self, results):
        self.results = results
        self.calls = []

    def readtext(self, image, **kwargs):
        self.calls.append(kwargs)
        return self.results


class FakePytesseract:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def image_to_string(self, image, lang=None, config=""):
        self.calls.append((lang, config))
        return self.text


IMAGE = np.zeros((4, 4), dtype=np.uint8)


def test_create_easyocr_engine() -> None:
    engine = create_engine("EasyOCR", languages=["en", "de"], gpu=True, confidence_threshold=0.5)
    assert isinstance(engine, EasyOCREngine)
    assert engine.languages == ["en", "de"]
    assert engine.gpu is True
    assert engine.confidence_threshold == 0.5
    assert engine.reader is None


def test_create_tesseract_engine_maps_languages() -> None:
    engine = create_engine("tesseract", languages=["en", "de", "xx"], page_segmentation_mode=6)
    assert isinstance(engine, TesseractEngine)
    assert engine.language == "eng+deu+xx"
    assert engine.page_segmentation_mode == 6


def test_create_unknown_engine() -> None:
    with pytest.raises(ValueError):
        create_engine("paddle")


def test_easyocr_filters_low_confidence_fragments() -> None:
    engine = EasyOCREngine(confidence_threshold=0.5)
    engine.reader = FakeReader([
        (None, "Hello", 0.9),
        (None, "noise", 0.1),
        (None, "World", 0.5),
    ])
    assert engine.recognize(IMAGE) == "Hello\nWorld"
    assert engine.reader.calls == [{"detail": 1, "paragraph": False}]


def test_easyocr_with_nothing_found() -> None:
    engine = EasyOCREngine()
    engine.reader = FakeReader([])
    assert engine.recognize(IMAGE) == ""


def test_tesseract_passes_psm_and_strips() -> None:
    engine = TesseractEngine("eng", page_segmentation_mode=7)
    engine._pytesseract = FakePytesseract("  some text \n\x0c")
    assert engine.recognize(IMAGE) == "some text"
    assert engine._pytesseract.calls == [("eng", "--psm 7")]


@pytest.mark.parametrize("engine", [EasyOCREngine(), TesseractEngine()], ids=["easyocr", "tesseract"])
def test_recognize_before_load(engine) -> None:
    with pytest.raises(RecognitionError):
        engine.recognize(IMAGE)
