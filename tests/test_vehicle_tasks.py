from __future__ import annotations

import threading

import pytest

try:
    from PySide6.QtTest import QTest
except ImportError as exc:  # pragma: no cover - environment-specific
    pytest.skip(f"PySide6 unavailable: {exc}", allow_module_level=True)

from modules.vehicles.services.tasks import ApiTaskRunner


def _wait_until(predicate, timeout_ms: int = 3000) -> None:
    waited = 0
    while not predicate() and waited < timeout_ms:
        QTest.qWait(10)
        waited += 10


def test_results_are_delivered_on_the_gui_thread(qt_app):
    runner = ApiTaskRunner()
    main_thread = threading.get_ident()
    seen: list[tuple[object, int]] = []

    runner.submit(lambda: threading.get_ident(), lambda result: seen.append((result, threading.get_ident())))
    _wait_until(lambda: bool(seen) and runner.pending == 0)

    worker_thread, callback_thread = seen[0]
    assert worker_thread != main_thread
    assert callback_thread == main_thread
    assert runner.pending == 0


def test_exceptions_become_error_callbacks(qt_app):
    runner = ApiTaskRunner()
    errors: list[str] = []

    def explode():
        raise RuntimeError("socket closed")

    runner.submit(explode, lambda _result: pytest.fail("unexpected success"), errors.append)
    _wait_until(lambda: bool(errors))
    assert errors == ["socket closed"]


def test_shutdown_waits_for_in_flight_work(qt_app):
    runner = ApiTaskRunner()
    release = threading.Event()
    results: list[str] = []

    def slow():
        release.wait(2)
        return "done"

    runner.submit(slow, results.append)
    assert runner.pending == 1
    release.set()
    runner.shutdown(2000)
    _wait_until(lambda: bool(results))
    assert results == ["done"]
