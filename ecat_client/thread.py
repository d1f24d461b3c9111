"""Periodic and free-running worker threads for the client loop."""

from __future__ import annotations

import logging
import os
import threading
import time
from abc import ABC, abstractmethod

_log = logging.getLogger(__name__)

SCHED_OTHER = getattr(os, "SCHED_OTHER", 0)
SCHED_FIFO = getattr(os, "SCHED_FIFO", 1)


class EcThread(ABC):
    """A thread that runs ``th_init`` once and then ``th_loop`` until stopped.

    A period of 0 s and 1 us marks a non-periodic thread, whose loop runs
    back to back; otherwise the loop is paced by ``period_usec``.
    """

    def __init__(
        self,
        name: str = "EcThread",
        period_usec: int = 1,
        period_sec: int = 0,
        schedpolicy: int = SCHED_OTHER,
        priority: int = 0,
        stacksize: int = 0,
    ) -> None:
        self.name = name
        self.period_sec = period_sec
        self.period_usec = period_usec
        self.schedpolicy = schedpolicy
        self.priority = priority
        self.stacksize = stacksize
        self.overruns = 0
        self.joinable = False
        self._run_loop = False
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._run_loop

    def is_non_periodic(self) -> bool:
        return self.period_sec == 0 and self.period_usec == 1

    @abstractmethod
    def th_init(self) -> None:
        """Thread-specific initialisation, run inside the thread."""

    @abstractmethod
    def th_loop(self) -> None:
        """One iteration of the thread's work."""

    def create(self, rt: bool = True, cpu_nr: int = -1) -> None:
        """Start the thread with its scheduling policy and optional CPU affinity."""
        self._run_loop = True
        started = threading.Event()
        failure: list[BaseException] = []

        def target() -> None:
            try:
                self._apply_scheduling(cpu_nr)
            except OSError as exc:
                failure.append(exc)
                started.set()
                return
            started.set()
            if self.is_non_periodic():
                self._non_periodic_loop()
            else:
                self._periodic_loop()

        previous_stack = None
        if self.stacksize > 0:
            previous_stack = threading.stack_size(self.stacksize)
        try:
            self._thread = threading.Thread(target=target, name=self.name, daemon=True)
            self._thread.start()
        finally:
            if previous_stack is not None:
                threading.stack_size(previous_stack)
        started.wait()
        if failure:
            self._run_loop = False
            self._thread.join()
            self._thread = None
            raise RuntimeError(f"cannot create thread {self.name}: {failure[0]}") from failure[0]
        self.joinable = True

    def _apply_scheduling(self, cpu_nr: int) -> None:
        setscheduler = getattr(os, "sched_setscheduler", None)
        if setscheduler is not None and (
            self.schedpolicy != SCHED_OTHER or self.priority != 0
        ):
            setscheduler(0, self.schedpolicy, os.sched_param(self.priority))
        if cpu_nr >= 0:
            setaffinity = getattr(os, "sched_setaffinity", None)
            if setaffinity is None:
                raise OSError("CPU affinity is not supported on this platform")
            setaffinity(0, {cpu_nr})

    def _periodic_loop(self) -> None:
        self.th_init()
        _log.debug(
            "%s period {%d,%d} tv", self.name, self.period_sec, self.period_usec
        )
        period = self.period_usec / 1_000_000
        deadline = time.monotonic()
        while self._run_loop:
            self.th_loop()
            deadline += period
            now = time.monotonic()
            if now > deadline and self.schedpolicy == SCHED_FIFO:
                self.overruns += 1
                _log.debug("%s overruns: %d", self.name, self.overruns)
            delay = deadline - now
            if delay > 0:
                time.sleep(delay)
        _log.debug("%s: exit thread", self.name)

    def _non_periodic_loop(self) -> None:
        self.th_init()
        while self._run_loop:
            self.th_loop()
        _log.debug("%s: exit thread", self.name)

    def stop(self) -> None:
        """Ask the loop to end after its current iteration."""
        self._run_loop = False

    def join(self) -> None:
        """Wait for the thread to finish; does nothing if it was not started."""
        if self.joinable and self._thread is not None:
            self.joinable = False
            self._thread.join()