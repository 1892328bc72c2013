"""OCRWorker tests. Fake engines only, no OCR model required."""
from __future__ import annotations

import threading

import numpy as np

from conftest import WAIT_S, ExplodingEngine, FailingInitEngine, GatedEngine, RecordingEngine
from monocam.core.frames import FrameBuffer
from monocam.ocr.results import ErrorKind
from monocam.ocr.worker import OCRWorker, WorkerState


def _image(value: int = 0) -> np.ndarray:
    return np.full((8, 12), value, dtype=np.uint8)


# ---------------------------------------------------------------------------
# Ordering and serialization
# ---------------------------------------------------------------------------

def test_results_arrive_in_submission_order(make_worker) -> None:
    engine = RecordingEngine(delay=0.01)
    delivered = []
    worker = make_worker(engine, on_result=delivered.append)

    futures = [worker.submit(_image(i)) for i in range(5)]
    results = [f.result(timeout=WAIT_S) for f in futures]

    ids = [r.request_id for r in results]
    assert ids == sorted(ids)
    assert [r.request_id for r in delivered] == ids
    assert [int(img[0, 0]) for img in engine.images] == [0, 1, 2, 3, 4]


def test_requests_never_overlap(make_worker) -> None:
    engine = RecordingEngine(delay=0.02)
    worker = make_worker(engine)

    futures = [worker.submit(_image()) for _ in range(3)]
    for f in futures:
        f.result(timeout=WAIT_S)

    assert engine.events == [
        ("start", 0), ("end", 0),
        ("start", 1), ("end", 1),
        ("start", 2), ("end", 2),
    ]


def test_engine_lives_on_one_background_thread(make_worker) -> None:
    engine = RecordingEngine()
    worker = make_worker(engine)

    for _ in range(3):
        worker.submit(_image()).result(timeout=WAIT_S)

    assert engine.load_calls == 1
    assert len(engine.thread_ids) == 1
    assert threading.get_ident() not in engine.thread_ids


def test_submit_takes_a_private_copy(make_worker) -> None:
    engine = RecordingEngine()
    worker = make_worker(engine)
    image = _image(9)

    future = worker.submit(image)
    image[:] = 0

    assert future.result(timeout=WAIT_S).ok
    assert int(engine.images[0].min()) == 9


def test_accepts_framebuffer(make_worker) -> None:
    engine = RecordingEngine(text="abc")
    worker = make_worker(engine)
    result = worker.submit(FrameBuffer.from_array(_image(3))).result(timeout=WAIT_S)
    assert result.ok
    assert result.text == "abc"


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

def test_ready_after_successful_init(make_worker) -> None:
    worker = make_worker(RecordingEngine())
    assert worker.state is WorkerState.UNINITIALIZED
    worker.start()
    assert worker.wait_until_initialized(WAIT_S)
    assert worker.state is WorkerState.READY


def test_init_failure_is_permanent(make_worker) -> None:
    engine = FailingInitEngine()
    worker = make_worker(engine)

    results = [worker.submit(_image()).result(timeout=WAIT_S) for _ in range(3)]

    assert worker.state is WorkerState.FAILED
    assert all(r.error_kind is ErrorKind.ENGINE_UNAVAILABLE for r in results)
    assert "tessdata" in results[0].message
    assert engine.recognize_calls == 0


def test_factory_exception_also_fails_init() -> None:
    def broken_factory():
        raise ImportError("No module named 'easyocr'")

    worker = OCRWorker(broken_factory)
    try:
        result = worker.submit(_image()).result(timeout=WAIT_S)
    finally:
        worker.stop(timeout=WAIT_S)
    assert result.error_kind is ErrorKind.ENGINE_UNAVAILABLE


def test_busy_while_recognizing(make_worker) -> None:
    engine = GatedEngine()
    worker = make_worker(engine)

    future = worker.submit(_image())
    assert engine.started.wait(WAIT_S)
    assert worker.is_busy
    assert worker.pending == 1

    engine.release()
    future.result(timeout=WAIT_S)
    assert not worker.is_busy
    assert worker.pending == 0


# ---------------------------------------------------------------------------
# Error results
# ---------------------------------------------------------------------------

def test_empty_image_is_invalid_input(make_worker) -> None:
    worker = make_worker(RecordingEngine())
    result = worker.submit(np.zeros((0, 0), dtype=np.uint8)).result(timeout=WAIT_S)
    assert result.error_kind is ErrorKind.INVALID_INPUT


def test_colour_image_is_invalid_input(make_worker) -> None:
    worker = make_worker(RecordingEngine())
    result = worker.submit(np.zeros((4, 4, 3), dtype=np.uint8)).result(timeout=WAIT_S)
    assert result.error_kind is ErrorKind.INVALID_INPUT


def test_non_image_is_invalid_input(make_worker) -> None:
    worker = make_worker(RecordingEngine())
    result = worker.submit(None).result(timeout=WAIT_S)
    assert result.error_kind is ErrorKind.INVALID_INPUT


def test_recognition_failure_is_not_fatal(make_worker) -> None:
    engine = ExplodingEngine(failures=1)
    worker = make_worker(engine)

    first = worker.submit(_image()).result(timeout=WAIT_S)
    second = worker.submit(_image()).result(timeout=WAIT_S)

    assert first.error_kind is ErrorKind.RECOGNITION_FAILED
    assert "engine crashed" in first.message
    assert second.ok
    assert second.text == "recovered"


def test_no_text_is_success(make_worker) -> None:
    worker = make_worker(RecordingEngine(text=""))
    result = worker.submit(_image()).result(timeout=WAIT_S)
    assert result.ok
    assert result.text == ""


def test_callback_errors_do_not_stop_the_worker(make_worker) -> None:
    def bad_callback(result):
        raise RuntimeError("ui went away")

    worker = make_worker(RecordingEngine(), on_result=bad_callback)
    assert worker.submit(_image()).result(timeout=WAIT_S).ok
    assert worker.submit(_image()).result(timeout=WAIT_S).ok


# ---------------------------------------------------------------------------
# Backpressure and shutdown
# ---------------------------------------------------------------------------

def test_submissions_beyond_bound_are_rejected(make_worker) -> None:
    engine = GatedEngine()
    worker = make_worker(engine, max_pending=2)

    first = worker.submit(_image())
    second = worker.submit(_image())
    third = worker.submit(_image())

    assert third.done()
    assert third.result().error_kind is ErrorKind.REJECTED

    engine.release()
    assert first.result(timeout=WAIT_S).ok
    assert second.result(timeout=WAIT_S).ok
    assert worker.submit(_image()).result(timeout=WAIT_S).ok


def test_stop_drains_queued_requests() -> None:
    engine = RecordingEngine(delay=0.01)
    worker = OCRWorker(lambda: engine)
    futures = [worker.submit(_image()) for _ in range(3)]

    worker.stop(timeout=WAIT_S)

    assert all(f.done() and f.result().ok for f in futures)


def test_submit_after_stop_reports_unavailable() -> None:
    worker = OCRWorker(RecordingEngine)
    worker.start()
    worker.stop(timeout=WAIT_S)

    future = worker.submit(_image())
    assert future.done()
    assert future.result().error_kind is ErrorKind.ENGINE_UNAVAILABLE


def test_context_manager_starts_and_stops() -> None:
    with OCRWorker(RecordingEngine) as worker:
        assert worker.submit(_image()).result(timeout=WAIT_S).ok
    assert worker.submit(_image()).result(timeout=WAIT_S).error_kind is ErrorKind.ENGINE_UNAVAILABLE


def test_cancelled_future_does_not_stall_the_worker(make_worker) -> None:
    engine = GatedEngine()
    delivered = []
    worker = make_worker(engine, on_result=delivered.append)

    first = worker.submit(_image())
    assert engine.started.wait(WAIT_S)
    second = worker.submit(_image())
    assert second.cancel()
    third = worker.submit(_image())

    engine.release()
    assert first.result(timeout=WAIT_S).ok
    assert third.result(timeout=WAIT_S).ok
    assert second.cancelled()
    # The abandoned request still ran, in order, and reached the callback.
    assert engine.calls == 3
    assert [r.request_id for r in delivered] == sorted(r.request_id for r in delivered)
    assert len(delivered) == 3
    assert worker.pending == 0


def test_running_request_cannot_be_cancelled(make_worker) -> None:
    engine = GatedEngine()
    worker = make_worker(engine)

    future = worker.submit(_image())
    assert engine.started.wait(WAIT_S)
    assert not future.cancel()

    engine.release()
    assert future.result(timeout=WAIT_S).ok
