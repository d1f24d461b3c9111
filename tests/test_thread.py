import threading
import time

import pytest

from ecat_client.thread import EcThread


class Counter(EcThread):
    def __init__(self, limit, **kwargs):
        super().__init__(**kwargs)
        self.limit = limit
        self.events = []
        self.loops = 0
        self.loop_thread_name = None

    def th_init(self):
        self.events.append("init")

    def th_loop(self):
        if self.loops == 0:
            self.events.append("loop")
            self.loop_thread_name = threading.current_thread().name
        self.loops += 1
        if self.loops >= self.limit:
            self.stop()


def test_non_periodic_detection():
    assert EcThread.is_non_periodic(Counter(1, period_usec=1, period_sec=0))
    assert not EcThread.is_non_periodic(Counter(1, period_usec=1000))
    assert not EcThread.is_non_periodic(Counter(1, period_usec=1, period_sec=1))


def test_non_periodic_runs_until_stopped():
    worker = Counter(50, name="free_run", period_usec=1)
    EcThread.create(worker, False, -1)
    EcThread.join(worker)
    assert worker.loops == 50
    assert worker.events == ["init", "loop"]
    assert worker.loop_thread_name == "free_run"
    assert not worker.running


def test_periodic_loop_is_paced():
    worker = Counter(5, name="paced", period_usec=2000)
    start = time.monotonic()
    EcThread.create(worker, True, -1)
    EcThread.join(worker)
    elapsed = time.monotonic() - start
    assert worker.loops == 5
    assert elapsed >= 0.009


def test_stop_from_outside():
    worker = Counter(10**9, period_usec=500)
    EcThread.create(worker)
    time.sleep(0.01)
    EcThread.stop(worker)
    EcThread.join(worker)
    assert 0 < worker.loops < 10**9


def test_join_is_idempotent_and_safe_before_create():
    worker = Counter(1)
    EcThread.join(worker)
    assert worker.joinable is False
    EcThread.create(worker)
    assert worker.joinable is True
    EcThread.join(worker)
    EcThread.join(worker)
    assert worker.joinable is False
    assert worker.loops == 1


def test_abstract_thread_cannot_be_built():
    with pytest.raises(TypeError):
        EcThread()