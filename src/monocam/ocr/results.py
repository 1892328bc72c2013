# -*- coding: utf-8 -*-
"""
src/monocam/ocr/results.py

Request and result values exchanged with the OCR worker.
"""

import enum
import time
from dataclasses import dataclass, field
from typing import Optional

import numpy as np


class ErrorKind(enum.Enum):
    """Why a recognition request produced no text."""

    INVALID_INPUT = "invalid_input"
    ENGINE_UNAVAILABLE = "engine_unavailable"
    RECOGNITION_FAILED = "recognition_failed"
    REJECTED = "rejected"


@dataclass(frozen=True, eq=False)
class RecognitionRequest:
    """A queued OCR job. ``image`` is a private, read-only grayscale copy."""

    request_id: int
    image: np.ndarray = field(repr=False)
    submitted_at: float = field(default_factory=time.monotonic)


@dataclass(frozen=True)
class RecognitionResult:
    """
    The outcome of one recognition request.

    Exactly one of ``text`` and ``error_kind`` is set. An empty ``text`` is a
    success: the engine ran and found nothing.
    """

    request_id: int
    text: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    elapsed: float = 0.0

    @classmethod
    def success(cls, request_id: int, text: str, elapsed: float = 0.0) -> "RecognitionResult":
        return cls(request_id, text=text, elapsed=elapsed)

    @classmethod
    def failure(cls, request_id: int, error_kind: ErrorKind, message: str = "",
                elapsed: float = 0.0) -> "RecognitionResult":
        return cls(request_id, error_kind=error_kind, message=message, elapsed=elapsed)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    def describe(self) -> str:
        """
        A short, user-facing summary of the result.

        "No text found" is reported differently from an OCR error so the user
        can tell an empty scene from a broken engine.
        """
        if self.ok:
            return "No text recognized" if not self.text.strip() else self.text
        if self.error_kind is ErrorKind.ENGINE_UNAVAILABLE:
            return f"Error: OCR engine not available. {self.message}".strip()
        if self.error_kind is ErrorKind.INVALID_INPUT:
            return "Error: Invalid image"
        if self.error_kind is ErrorKind.REJECTED:
            return "Error: OCR is busy, capture ignored"
        return f"OCR Error: {self.message}"
