# tommyzki/services/debounce.py
"""
Trailing-edge debounce on the asyncio event loop.

Each call cancels the pending call and reschedules it; only the last call
of a burst runs. Return values are dropped. Give every call site its own
wrapper, otherwise unrelated callers cancel each other.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debounced:
    """Callable returned by debounce()."""

    def __init__(self, func: Callable[..., Any], wait: float):
        if wait < 0:
            raise ValueError(f"wait must be non-negative, got {wait}")
        self._func = func
        self._wait = wait
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending_args: tuple = ()
        self._pending_kwargs: dict = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def wait(self) -> float:
        return self._wait

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._pending_args = args
        self._pending_kwargs = kwargs
        self._handle = loop.call_later(self._wait, self._fire)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending_args = ()
        self._pending_kwargs = {}

    def _fire(self) -> None:
        args, kwargs = self._pending_args, self._pending_kwargs
        self._handle = None
        self._pending_args = ()
        self._pending_kwargs = {}
        try:
            result = self._func(*args, **kwargs)
        except Exception:
            logger.exception("Debounced call %s failed", getattr(self._func, '__name__', self._func))
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Debounced coroutine %s failed: %s",
                getattr(self._func, '__name__', self._func),
                exc,
                exc_info=exc,
            )


def debounce(func: Callable[..., Any], wait: float) -> Debounced:
    """Wrap func so bursts of calls within `wait` seconds collapse to the last one.

    Args:
        func: Plain function or coroutine function
        wait: Quiet period in seconds

    Returns:
        A Debounced callable with the same call signature (returns None)
    """
    return Debounced(func, wait)
