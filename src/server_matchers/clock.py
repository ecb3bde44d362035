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

"""Wall-clock measurement primitives.

``SystemClock`` wraps ``time.perf_counter()``, the highest-resolution timer
available, which comfortably resolves the 10ms calibration floor. Tests inject
a deterministic fake clock satisfying the same protocol.
"""

from collections.abc import Callable
import time
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Clock used to time subject callables."""

    def now(self) -> float:
        """Return the current instant in seconds from an arbitrary epoch."""
        ...

    def elapsed(self, start: float) -> float:
        """Return the seconds elapsed since ``start``."""
        ...


class SystemClock:
    """Production clock wrapping ``time.perf_counter()``."""

    def now(self) -> float:
        return time.perf_counter()

    def elapsed(self, start: float) -> float:
        return duration_between(start, self.now())


def duration_between(start: float, end: float) -> float:
    """Seconds between two instants of the same clock."""
    return end - start


def measure(clock: Clock, fn: Callable[[], Any], times: int = 1) -> float:
    """Time ``times`` consecutive calls of ``fn`` as one contiguous run."""
    start = clock.now()
    for _ in range(times):
        fn()
    return clock.elapsed(start)
