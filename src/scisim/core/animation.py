"""
Frame-driven effects: tweens and delayed callbacks.

Everything here runs on the single render loop. Tasks are plain generators
that receive the frame's dt through send() and finish by returning;
Animator.advance(dt) pumps them once per frame. Nothing runs on another
thread, so effects may mutate visual state directly.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Generator

logger = logging.getLogger(__name__)

Task = Generator[None, float, None]

BACK_C1 = 1.70158
BACK_C3 = BACK_C1 + 1


class Easing(Enum):
    """Easing curves mapping progress in [0, 1] to eased progress."""

    LINEAR = "linear"
    POWER2_IN_OUT = "power2.inOut"
    BACK_OUT = "back.out"

    def __call__(self, progress: float) -> float:
        p = min(max(progress, 0.0), 1.0)
        if self is Easing.LINEAR:
            return p
        if self is Easing.POWER2_IN_OUT:
            if p < 0.5:
                return 2 * p * p
            return 1 - (-2 * p + 2) ** 2 / 2
        # BACK_OUT overshoots past 1 before settling
        return 1 + BACK_C3 * (p - 1) ** 3 + BACK_C1 * (p - 1) ** 2


def tween(
    start: Any,
    end: Any,
    duration: float,
    on_update: Callable[[Any], None],
    easing: Easing = Easing.LINEAR,
    on_complete: Callable[[], None] | None = None,
    delay: float = 0.0,
) -> Task:
    """
    Interpolate from start to end over duration seconds.

    start and end may be floats or numpy arrays; anything supporting
    start + (end - start) * t works. on_update receives each interpolated
    value, the last one being exactly end.

    Args:
        start, end: Endpoint values
        duration: Length of the tween in seconds (0 jumps straight to end)
        on_update: Called once per frame with the current value
        easing: Easing curve
        on_complete: Called once after the final update
        delay: Seconds to wait before the first update
    """
    waited = 0.0
    while waited < delay:
        waited += yield

    elapsed = 0.0
    while duration > 0 and elapsed < duration:
        on_update(start + (end - start) * easing(elapsed / duration))
        elapsed += yield

    on_update(end)
    if on_complete is not None:
        on_complete()


def delayed(delay: float, callback: Callable[[], None]) -> Task:
    """Task that calls callback once, delay seconds after it starts."""
    waited = 0.0
    while waited < delay:
        waited += yield
    callback()


class Animator:
    """
    Runs frame tasks on the render loop.

    Tasks are primed when spawned (they run up to their first yield) and are
    then sent the frame dt on every advance() until they return.
    """

    def __init__(self):
        self._tasks: list[Task] = []

    @property
    def pending(self) -> int:
        """Number of unfinished tasks."""
        return len(self._tasks)

    def spawn(self, task: Task) -> Task:
        """Schedule a generator task; returns it for cancellation."""
        try:
            next(task)
        except StopIteration:
            return task
        self._tasks.append(task)
        return task

    def tween(self, start, end, duration: float, on_update, **kwargs) -> Task:
        """Schedule a tween (see tween())."""
        return self.spawn(tween(start, end, duration, on_update, **kwargs))

    def call_later(self, delay: float, callback: Callable[[], None]) -> Task:
        """Fire-and-forget callback after delay seconds of frame time."""
        return self.spawn(delayed(delay, callback))

    def cancel(self, task: Task) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
            task.close()

    def cancel_all(self) -> None:
        """Drop every pending task without running it."""
        for task in self._tasks:
            task.close()
        self._tasks.clear()

    def advance(self, dt: float) -> None:
        """Send dt to every task, dropping the ones that finish."""
        still_running = []
        # Tasks spawned by callbacks during this frame start next frame
        current, self._tasks = self._tasks, still_running
        for task in current:
            try:
                task.send(dt)
            except StopIteration:
                continue
            still_running.append(task)
