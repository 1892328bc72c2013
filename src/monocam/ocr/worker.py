# -*- coding: utf-8 -*-
"""
src/monocam/ocr/worker.py

Runs OCR off the frame-delivery thread.

The OCRWorker owns a single engine instance and a single daemon thread. The
engine is constructed, loaded and used only on that thread, so it is never
shared and needs no locking. Requests are processed strictly one at a time
in submission order, and each one resolves its own
``concurrent.futures.Future`` exactly once.
Cancelling that future does not cancel the request: it still runs and still
reaches ``on_result``; only the notification is dropped.

Engine initialization failure is permanent: the worker stays in the FAILED
state and answers every request with ``ErrorKind.ENGINE_UNAVAILABLE``
without touching the engine.
"""

import enum
import itertools
import logging
import queue
import threading
import time
from concurrent.futures import Future, InvalidStateError
from typing import Any, Callable, Optional

import numpy as np

from ..core.frames import FrameBuffer
from .engines import OCREngine
from .results import ErrorKind, RecognitionRequest, RecognitionResult

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], OCREngine]
ResultCallback = Callable[[RecognitionResult], None]

# Queue sentinel telling the worker thread to exit once earlier requests are done.
_STOP = object()


class WorkerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


def _validate(image: Optional[np.ndarray]) -> Optional[str]:
    """Returns a reason the image cannot be recognized, or None if it is usable."""
    if image is None:
        return "no image data"
    if image.dtype != np.uint8:
        return f"expected uint8 pixels, got {image.dtype}"
    if image.ndim != 2:
        return f"expected a single-channel image, got shape {image.shape}"
    if image.size == 0:
        return "image is empty"
    return None


class OCRWorker:
    """
    Serializes OCR requests onto one dedicated thread.

    Attributes:
        max_pending (Optional[int]): Maximum number of accepted requests that
            may be outstanding (queued or running). Further submissions are
            answered immediately with ``ErrorKind.REJECTED``. ``None`` means
            unbounded.
        on_result (Optional[Callable]): Called on the worker thread with every
            result of an accepted request, in submission order.
    """

    def __init__(self, engine_factory: EngineFactory, max_pending: Optional[int] = None,
                 on_result: Optional[ResultCallback] = None, name: str = "ocr-worker"):
        """
        Args:
            engine_factory: Zero-argument callable building the engine. It is
                            invoked on the worker thread.
            max_pending: Submission bound; ``None`` or ``0`` for unbounded.
            on_result: Optional ordered result callback.
            name: Thread name, useful in logs.
        """
        self._engine_factory = engine_factory
        self._engine: Optional[OCREngine] = None
        self.max_pending = max_pending or None
        self.on_result = on_result
        self.name = name

        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._initialized = threading.Event()
        self._ids = itertools.count(1)
        self._outstanding = 0
        self._stopped = False
        self._busy = False
        self._state = WorkerState.UNINITIALIZED
        self._init_error = ""

    # --- Public API ---

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def is_busy(self) -> bool:
        """True while the engine is recognizing a request."""
        return self._busy

    @property
    def pending(self) -> int:
        """Number of accepted requests not yet resolved."""
        with self._lock:
            return self._outstanding

    def start(self) -> None:
        """Starts the worker thread. Calling it again is a no-op."""
        with self._lock:
            self._start_locked()

    def wait_until_initialized(self, timeout: Optional[float] = None) -> bool:
        """Blocks until the engine has loaded or failed. Returns False on timeout."""
        return self._initialized.wait(timeout)

    def submit(self, image) -> "Future[RecognitionResult]":
        """
        Queues an image for recognition and returns immediately.

        The worker keeps a private copy of the pixels, so the caller may
        reuse or release ``image`` as soon as this returns.

        Args:
            image: A grayscale ``FrameBuffer`` or 2-D uint8 ``np.ndarray``.

        Returns:
            Future: Resolves with exactly one RecognitionResult.
        """
        future: "Future[RecognitionResult]" = Future()
        pixels = image.pixels if isinstance(image, FrameBuffer) else image
        try:
            owned = np.array(pixels, copy=True)
            owned.flags.writeable = False
        except (TypeError, ValueError):
            owned = None

        rejection = None
        with self._lock:
            request = RecognitionRequest(next(self._ids), owned)
            if self._stopped:
                rejection = RecognitionResult.failure(
                    request.request_id, ErrorKind.ENGINE_UNAVAILABLE, "OCR worker has been stopped")
            elif self.max_pending is not None and self._outstanding >= self.max_pending:
                rejection = RecognitionResult.failure(
                    request.request_id, ErrorKind.REJECTED,
                    f"{self._outstanding} requests already pending")
            else:
                self._outstanding += 1
                self._queue.put((request, future))
                self._start_locked()

        if rejection is not None:
            logger.warning(f"OCR request {rejection.request_id} not queued: {rejection.message}")
            future.set_result(rejection)
        else:
            logger.debug(f"Queued OCR request {request.request_id}")
        return future

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stops the worker after the already queued requests have been processed.

        Requests submitted afterwards resolve immediately with
        ``ErrorKind.ENGINE_UNAVAILABLE``.
        """
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            thread = self._thread
            if thread is not None:
                self._queue.put(_STOP)

        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("OCR worker thread did not finish within the timeout.")
            else:
                logger.info("OCR worker stopped.")

    def __enter__(self) -> "OCRWorker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # --- Worker thread ---

    def _start_locked(self) -> None:
        if self._thread is not None or self._stopped:
            return
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        self._initialize()
        while True:
            item = self._queue.get()
            if item is _STOP:
                break
            request, future = item
            # A cancelled future only means nobody waits for it; the request
            # still runs and still reaches on_result.
            if not future.set_running_or_notify_cancel():
                logger.debug(f"OCR request {request.request_id} was abandoned by its submitter")
                future = None
            result = self._process(request)
            with self._lock:
                self._outstanding -= 1
            self._deliver(future, result)
        self._engine = None

    def _initialize(self) -> None:
        try:
            engine = self._engine_factory()
            engine.load()
        except Exception as e:
            self._init_error = str(e) or e.__class__.__name__
            self._state = WorkerState.FAILED
            logger.critical(f"OCR engine failed to initialize: {self._init_error}")
            logger.critical("All OCR requests will be answered with an 'engine unavailable' error.")
        else:
            self._engine = engine
            self._state = WorkerState.READY
            logger.info(f"OCR engine '{getattr(engine, 'name', type(engine).__name__)}' ready.")
        finally:
            self._initialized.set()

    def _process(self, request: RecognitionRequest) -> RecognitionResult:
        started = time.monotonic()
        if self._state is WorkerState.FAILED:
            return RecognitionResult.failure(
                request.request_id, ErrorKind.ENGINE_UNAVAILABLE, self._init_error)

        problem = _validate(request.image)
        if problem is not None:
            logger.warning(f"OCR request {request.request_id} rejected: {problem}")
            return RecognitionResult.failure(request.request_id, ErrorKind.INVALID_INPUT, problem)

        self._busy = True
        try:
            text = self._engine.recognize(request.image)
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.error(f"OCR request {request.request_id} failed: {message}", exc_info=True)
            return RecognitionResult.failure(
                request.request_id, ErrorKind.RECOGNITION_FAILED, message,
                elapsed=time.monotonic() - started)
        finally:
            self._busy = False

        elapsed = time.monotonic() - started
        logger.info(f"OCR request {request.request_id} finished in {elapsed:.2f}s")
        return RecognitionResult.success(request.request_id, text or "", elapsed=elapsed)

    def _deliver(self, future: Optional[Future], result: RecognitionResult) -> None:
        # The callback runs first so that anyone waiting on the future also
        # observes its side effects.
        if self.on_result is not None:
            try:
                self.on_result(result)
            except Exception as e:
                logger.error(f"Error in OCR result callback: {e}", exc_info=True)
        if future is None:
            return
        try:
            future.set_result(result)
        except InvalidStateError as e:
            logger.error(f"Could not deliver OCR result {result.request_id}: {e}")
