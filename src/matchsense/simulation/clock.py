"""
ClockSet - Cooperative Scheduler for Independently-Clocked Producers

Holds a set of named periodic tasks that interleave on one execution
context. Each task fires every ``interval_ms`` milliseconds; when several
tasks are due at the same instant they fire in registration order.

The scheduler never sleeps on its own. Callers either push time forward
explicitly (``advance_to`` / ``advance_by``, used by tests and headless
runs) or hand control to ``run_realtime`` which reads a monotonic clock
and sleeps until the next deadline.

Usage:
    from matchsense.simulation.clock import ClockSet

    clock = ClockSet()
    clock.add_task("fusion", 50.0, on_fusion_tick)
    clock.start(now_ms=0.0)
    clock.advance_to(1000.0)   # fires on_fusion_tick 20 times
"""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable


TickCallback = Callable[[float], None]


def monotonic_ms() -> float:
    """Default time source: monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass
class PeriodicTask:
    """
    A named periodic callback.

    Attributes
    ----------
    name : str
        Task identifier (e.g. "frame", "emotion", "fusion").
    interval_ms : float
        Period between invocations.
    callback : Callable[[float], None]
        Called with the scheduled tick time in milliseconds.
    next_due_ms : float
        Deadline of the next invocation while armed.
    armed : bool
        False once the clock is stopped; an unarmed task never fires.
    fire_count : int
        Number of invocations since the last ``start``.
    """

    name: str
    interval_ms: float
    callback: TickCallback
    next_due_ms: float = 0.0
    armed: bool = False
    fire_count: int = 0


class ClockSet:
    """
    Named periodic tasks sharing one cooperative execution context.

    Parameters
    ----------
    time_source : Callable[[], float], optional
        Returns the current time in milliseconds. Defaults to the
        monotonic clock. Only consulted by ``start`` (when no explicit
        time is given) and ``run_realtime``.
    """

    def __init__(self, time_source: Callable[[], float] | None = None) -> None:
        self.time_source = time_source or monotonic_ms
        self._tasks: dict[str, PeriodicTask] = {}
        self._running = False
        self._now_ms = 0.0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def now_ms(self) -> float:
        """Time of the most recent ``advance_to``."""
        return self._now_ms

    @property
    def tasks(self) -> dict[str, PeriodicTask]:
        return dict(self._tasks)

    def add_task(
        self,
        name: str,
        interval_ms: float,
        callback: TickCallback,
    ) -> PeriodicTask:
        """Register a periodic task. Tasks can only be added while stopped."""
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if name in self._tasks:
            raise ValueError(f"Task '{name}' already registered")
        if self._running:
            raise RuntimeError("Cannot add tasks while the clock is running")

        task = PeriodicTask(name=name, interval_ms=float(interval_ms), callback=callback)
        self._tasks[name] = task
        return task

    def start(self, now_ms: float | None = None) -> None:
        """
        Arm every task. The first invocation of each happens one full
        interval after ``now_ms``. Calling start while running is a no-op.
        """
        if self._running:
            return
        if now_ms is None:
            now_ms = self.time_source()

        self._now_ms = float(now_ms)
        for task in self._tasks.values():
            task.next_due_ms = self._now_ms + task.interval_ms
            task.armed = True
            task.fire_count = 0
        self._running = True

    def stop(self) -> None:
        """Disarm every task. Idempotent."""
        self._running = False
        for task in self._tasks.values():
            task.armed = False

    def _next_due(self, until_ms: float) -> PeriodicTask | None:
        due = None
        for task in self._tasks.values():
            if not task.armed or task.next_due_ms > until_ms:
                continue
            # Strict comparison keeps registration order for ties
            if due is None or task.next_due_ms < due.next_due_ms:
                due = task
        return due

    def advance_to(self, now_ms: float) -> int:
        """
        Fire every task whose deadline is at or before ``now_ms``, in
        deadline order.

        A callback that stops the clock ends the pass: the in-flight
        callback completes but no task is re-armed.

        Returns
        -------
        int
            Number of callbacks invoked.
        """
        fired = 0
        while self._running:
            task = self._next_due(now_ms)
            if task is None:
                break
            tick_ms = task.next_due_ms
            self._now_ms = tick_ms
            task.next_due_ms = tick_ms + task.interval_ms
            task.fire_count += 1
            task.callback(tick_ms)
            fired += 1

        if self._running:
            self._now_ms = max(self._now_ms, float(now_ms))
        return fired

    def advance_by(self, delta_ms: float) -> int:
        """Advance virtual time by ``delta_ms`` from the current time."""
        return self.advance_to(self._now_ms + delta_ms)

    def time_until_next_ms(self) -> float | None:
        """Milliseconds until the earliest armed deadline, or None if stopped."""
        deadlines = [t.next_due_ms for t in self._tasks.values() if t.armed]
        if not deadlines:
            return None
        return max(0.0, min(deadlines) - self._now_ms)

    def run_realtime(
        self,
        duration_s: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Drive the tasks from the time source for ``duration_s`` seconds.

        Virtual time continues from ``now_ms``: if the clock was started
        at an explicit time unrelated to the time source, the source is
        only used for elapsed time and no backlog of ticks is fired.
        Returns early if the clock is stopped (e.g. from a callback).
        """
        if not self._running:
            self.start()

        offset_ms = self.time_source() - self._now_ms
        end_ms = self._now_ms + duration_s * 1000.0
        fired = 0
        while self._running:
            now = self.time_source() - offset_ms
            if now >= end_ms:
                fired += self.advance_to(end_ms)
                break
            fired += self.advance_to(now)
            wait_ms = self.time_until_next_ms()
            if wait_ms is None:
                break
            sleep(min(wait_ms, end_ms - now) / 1000.0)
        return fired

    def __repr__(self) -> str:
        names = ", ".join(
            f"{t.name}@{t.interval_ms:g}ms" for t in self._tasks.values()
        )
        state = "running" if self._running else "stopped"
        return f"ClockSet({names}; {state})"
