import threading

import pytest

pytest.importorskip("PySide6.QtTest")

from PySide6.QtCore import QThreadPool  # noqa: E402
from PySide6.QtTest import QSignalSpy  # noqa: E402

from bibliodesk.core.paging import PagedListModel  # noqa: E402
from bibliodesk.gui.async_loader import AsyncLoader, RequestSequencer  # noqa: E402


@pytest.fixture
def loader(qtbot):
    loader = AsyncLoader()
    yield loader
    QThreadPool.globalInstance().waitForDone(2000)


def test_success_callback_runs_on_gui_thread(loader, qtbot):
    gui_thread = threading.get_ident()
    seen = {}

    def produce():
        seen["producer"] = threading.get_ident()
        return [1, 2, 3]

    def on_success(result):
        seen["callback"] = threading.get_ident()
        seen["result"] = result

    loader.run(produce, on_success)
    qtbot.waitUntil(lambda: "result" in seen, timeout=3000)

    assert seen["result"] == [1, 2, 3]
    assert seen["callback"] == gui_thread
    assert seen["producer"] != gui_thread


def test_failure_is_delivered_and_loader_stays_usable(loader, qtbot):
    gui_thread = threading.get_ident()
    failures = []
    model = PagedListModel(10)

    def boom():
        raise RuntimeError("boom")

    loader.run(boom, lambda _: pytest.fail("unexpected success"), lambda exc: failures.append((exc, threading.get_ident())))
    qtbot.waitUntil(lambda: bool(failures), timeout=3000)

    error, thread = failures[0]
    assert isinstance(error, RuntimeError)
    assert str(error) == "boom"
    assert thread == gui_thread

    loaded = []
    loader.run(lambda: list(range(12)), loaded.append)
    qtbot.waitUntil(lambda: bool(loaded), timeout=3000)
    model.set_master(loaded[0])
    assert model.total_pages == 2


def test_handles_and_busy_state(loader, qtbot):
    gate = threading.Event()
    done = []

    handle = loader.run(lambda: gate.wait(2) or "ok", done.append, label="books")

    assert handle.label == "books"
    assert loader.is_busy()
    assert loader.active_count() == 1

    gate.set()
    qtbot.waitUntil(lambda: bool(done), timeout=3000)
    assert not loader.is_busy()


def test_task_ids_are_unique(loader, qtbot):
    results = []
    first = loader.run(lambda: 1, results.append)
    second = loader.run(lambda: 2, results.append)

    qtbot.waitUntil(lambda: len(results) == 2, timeout=3000)
    assert first.task_id != second.task_id
    assert sorted(results) == [1, 2]


def test_signals_report_lifecycle(loader, qtbot):
    started = QSignalSpy(loader.taskStarted)
    finished = QSignalSpy(loader.taskFinished)
    failed = QSignalSpy(loader.taskFailed)

    def boom():
        raise ValueError("bad")

    with qtbot.waitSignal(loader.taskFinished, timeout=3000):
        loader.run(lambda: None, lambda _: None)
    with qtbot.waitSignal(loader.taskFailed, timeout=3000):
        loader.run(boom, lambda _: None)

    assert started.count() == 2
    assert finished.count() == 1
    assert failed.count() == 1


def test_failure_without_handler_is_logged(loader, qtbot, caplog):
    def boom():
        raise RuntimeError("unhandled")

    with qtbot.waitSignal(loader.taskFailed, timeout=3000):
        loader.run(boom, lambda _: None, label="orphan")

    assert "unhandled" in caplog.text


def test_request_sequencer_keeps_latest_token():
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()

    assert not sequencer.is_current(first)
    assert sequencer.is_current(second)
    assert sequencer.latest == second
