"""Shared pytest fixtures: fake OCR engines and frame builders."""
from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

import numpy as np
import pytest

from monocam.core.frames import PixelFormat, RawFrame
from monocam.errors import EngineInitError
from monocam.ocr.engines import OCREngine
from monocam.ocr.worker import OCRWorker

WAIT_S = 5.0


# ---------------------------------------------------------------------------
# Fake engines
# ---------------------------------------------------------------------------

class RecordingEngine(OCREngine):
    """Returns a fixed text and records every call and the threads it ran on."""

    name = "recording"

    def __init__(self, text: str = "HELLO", delay: float = 0.0) -> None:
        self.text = text
        self.delay = delay
        self.load_calls = 0
        self.images: List[np.ndarray] = []
        self.events: List[tuple] = []
        self.thread_ids: set = set()
        self._lock = threading.Lock()

    def load(self) -> None:
        self.load_calls += 1
        self.thread_ids.add(threading.get_ident())

    def recognize(self, image: np.ndarray) -> str:
        with self._lock:
            index = len(self.images)
            self.images.append(np.array(image, copy=True))
            self.events.append(("start", index))
        self.thread_ids.add(threading.get_ident())
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.events.append(("end", index))
        return self.text


class FailingInitEngine(OCREngine):
    """Fails to load; counts any recognition attempt."""

    name = "failing-init"

    def __init__(self) -> None:
        self.recognize_calls = 0

    def load(self) -> None:
        raise EngineInitError("tessdata not found")

    def recognize(self, image: np.ndarray) -> str:
        self.recognize_calls += 1
        return "should never happen"


class ExplodingEngine(OCREngine):
    """Raises on the first ``failures`` requests, then succeeds."""

    name = "exploding"

    def __init__(self, failures: int = 1) -> None:
        self.failures = failures
        self.calls = 0

    def load(self) -> None:
        pass

    def recognize(self, image: np.ndarray) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("engine crashed")
        return "recovered"


class GatedEngine(OCREngine):
    """Blocks every recognition until ``release()`` is called."""

    name = "gated"

    def __init__(self) -> None:
        self.started = threading.Event()
        self._gate = threading.Event()
        self.calls = 0

    def load(self) -> None:
        pass

    def recognize(self, image: np.ndarray) -> str:
        self.calls += 1
        self.started.set()
        self._gate.wait(WAIT_S)
        return "done"

    def release(self) -> None:
        self._gate.set()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_worker():
    """Builds OCRWorkers around a given engine and stops them after the test."""
    workers: List[OCRWorker] = []

    def _make(engine: OCREngine, max_pending: Optional[int] = None,
              on_result: Optional[Callable] = None) -> OCRWorker:
        worker = OCRWorker(lambda: engine, max_pending=max_pending, on_result=on_result)
        workers.append(worker)
        return worker

    yield _make

    for worker in workers:
        worker.stop(timeout=WAIT_S)


def split_frame_bytes(width: int = 4, height: int = 2, left=(230, 230, 230),
                      right=(10, 10, 10)) -> bytes:
    """Packed RGB rows whose left half is ``left`` and right half ``right``."""
    half = width // 2
    row = bytes(left) * half + bytes(right) * (width - half)
    return row * height


def split_raw_frame(width: int = 4, height: int = 2) -> RawFrame:
    return RawFrame(split_frame_bytes(width, height), width, height, width * 3, PixelFormat.RGB)


def blank_raw_frame(width: int = 32, height: int = 16, value: int = 255) -> RawFrame:
    """A uniform frame: a scene with no text in it."""
    return RawFrame.from_array(np.full((height, width, 3), value, dtype=np.uint8))
