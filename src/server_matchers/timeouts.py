# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Bounded-wait facilities used to enforce deadlines on callables.

Two strategies are provided:

- ``SignalBoundedWait`` arms a ``SIGALRM`` interval timer whose handler raises
  inside the running callable, interrupting blocking calls such as
  ``time.sleep``. Only available on Unix, from the main thread.
- ``ThreadBoundedWait`` runs the callable on a daemon worker thread and stops
  waiting when the bound passes. Python threads cannot be killed, so an
  expired worker is abandoned and keeps running in the background.

Coroutine functions are awaited on a fresh event loop with
``asyncio.wait_for`` under either strategy.
"""

import asyncio
from collections.abc import Callable
import inspect
import logging
import signal
import threading
import time
from typing import Any, Protocol

from .exceptions import ConfigurationError, DeadlineExceededError

logger = logging.getLogger(__name__)

_MIN_TIMER_DELAY = 1e-6


class BoundedWait(Protocol):
    """Runs a unit of work with an externally enforced maximum duration."""

    def run_with_bound(self, duration: float, fn: Callable[[], Any]) -> None:
        """Run ``fn``; raise DeadlineExceededError if it outlives ``duration``."""
        ...


def _run_coroutine(duration: float, fn: Callable[[], Any]) -> None:
    async def bounded() -> None:
        await asyncio.wait_for(fn(), timeout=duration)

    try:
        asyncio.run(bounded())
    except asyncio.TimeoutError as e:
        logger.debug("Coroutine exceeded its %ss bound", duration)
        raise DeadlineExceededError(duration) from e


class ThreadBoundedWait:
    """Bounded wait built on a joinable daemon thread."""

    def run_with_bound(self, duration: float, fn: Callable[[], Any]) -> None:
        if inspect.iscoroutinefunction(fn):
            _run_coroutine(duration, fn)
            return

        failures: list[BaseException] = []

        def target() -> None:
            try:
                fn()
            except BaseException as e:  # noqa: BLE001 - re-raised in the caller's thread
                failures.append(e)

        worker = threading.Thread(target=target, name="bounded-wait", daemon=True)
        worker.start()
        worker.join(duration)

        if worker.is_alive():
            logger.debug("Abandoning worker still running after %ss", duration)
            raise DeadlineExceededError(duration)
        if failures:
            raise failures[0]


class SignalBoundedWait:
    """Bounded wait built on ``signal.setitimer`` and ``SIGALRM``.

    An interval timer armed by an enclosing caller (another bounded wait, or a
    test-timeout plugin) is honoured: the earlier of the two deadlines is armed
    first and the outer timer is re-armed, or delivered immediately if its time
    has passed, when ``fn`` finishes.
    """

    @staticmethod
    def is_supported() -> bool:
        return (
            hasattr(signal, "setitimer")
            and threading.current_thread() is threading.main_thread()
        )

    def run_with_bound(self, duration: float, fn: Callable[[], Any]) -> None:
        if inspect.iscoroutinefunction(fn):
            _run_coroutine(duration, fn)
            return

        if not self.is_supported():
            raise ConfigurationError(
                "Signal deadlines require setitimer and the main thread",
                user_message="Signal-based deadlines are unavailable here",
                recovery_suggestion="Use the 'thread' deadline strategy",
            )

        outer_handler = signal.getsignal(signal.SIGALRM)
        outer_delay, outer_interval = signal.getitimer(signal.ITIMER_REAL)
        start = time.monotonic()
        deadline = start + duration
        outer_deadline = start + outer_delay if outer_delay > 0 else None
        outer_first = outer_deadline is not None and outer_deadline < deadline
        outer_delivered = False
        expired = False
        running = True

        def on_alarm(signum: int, frame: Any) -> None:
            nonlocal outer_first, outer_delivered, expired
            if outer_first:
                outer_first = False
                signal.setitimer(
                    signal.ITIMER_REAL, max(deadline - time.monotonic(), _MIN_TIMER_DELAY)
                )
                if running and callable(outer_handler):
                    outer_delivered = True
                    outer_handler(signum, frame)
                return
            # Recorded first: the subject may swallow the raised error
            expired = True
            if running:
                raise DeadlineExceededError(duration)

        signal.signal(signal.SIGALRM, on_alarm)
        try:
            try:
                signal.setitimer(signal.ITIMER_REAL, outer_delay if outer_first else duration)
                fn()
            finally:
                running = False
                signal.setitimer(signal.ITIMER_REAL, 0)
        except Exception as e:
            if expired and not isinstance(e, DeadlineExceededError):
                raise DeadlineExceededError(duration) from e
            raise
        finally:
            signal.signal(
                signal.SIGALRM, outer_handler if outer_handler is not None else signal.SIG_DFL
            )
            if outer_deadline is not None:
                _resume_outer_timer(outer_deadline, outer_interval, outer_delivered)

        if expired:
            logger.debug("Callable ran past its %ss bound", duration)
            raise DeadlineExceededError(duration)


def _resume_outer_timer(deadline: float, interval: float, delivered: bool) -> None:
    if delivered:
        if interval > 0:
            signal.setitimer(signal.ITIMER_REAL, interval, interval)
        return

    remaining = deadline - time.monotonic()
    if remaining > 0:
        signal.setitimer(signal.ITIMER_REAL, remaining, interval)
    else:
        signal.raise_signal(signal.SIGALRM)


class AutoBoundedWait:
    """Chooses the signal strategy per call, else a worker thread.

    The choice is made when ``run_with_bound`` runs, so one instance works
    from the main thread and from worker threads alike.
    """

    def __init__(self) -> None:
        self._signal = SignalBoundedWait()
        self._thread = ThreadBoundedWait()

    def run_with_bound(self, duration: float, fn: Callable[[], Any]) -> None:
        if SignalBoundedWait.is_supported():
            self._signal.run_with_bound(duration, fn)
        else:
            self._thread.run_with_bound(duration, fn)


def create_bounded_wait(strategy: str = "auto") -> BoundedWait:
    """Build the bounded-wait facility for ``strategy``.

    Args:
        strategy: "signal", "thread", or "auto" (signal where supported at
            call time, otherwise thread)

    Raises:
        ConfigurationError: If the strategy is unknown
    """
    if strategy == "auto":
        return AutoBoundedWait()
    if strategy == "signal":
        return SignalBoundedWait()
    if strategy == "thread":
        return ThreadBoundedWait()

    raise ConfigurationError(
        f"Unknown deadline strategy: {strategy}",
        f"Deadline strategy '{strategy}' is not supported",
    )
