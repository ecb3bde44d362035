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

"""Self-calibrating repetition counts for timing arbitrary callables.

The calibrator runs the subject in batches of 1, 10, 100, ... calls until one
batch lasts at least ``min_sample_seconds``. From that sample it projects how
many calls fill ``clock_target_seconds``, which the benchmark matcher then
times as one contiguous run.
"""

from collections.abc import Callable
import logging
from typing import Any

from .clock import Clock, SystemClock, measure
from .config.schema import BenchmarkConfig
from .models import CalibrationResult, CalibrationSample

logger = logging.getLogger(__name__)

BATCH_GROWTH_FACTOR = 10


class Calibrator:
    """Finds a batch size whose duration dominates timing noise."""

    def __init__(
        self,
        clock: Clock | None = None,
        min_sample_seconds: float = 0.01,
        clock_target_seconds: float = 0.1,
        max_rounds: int = 10,
    ) -> None:
        self.clock = clock or SystemClock()
        self.min_sample_seconds = min_sample_seconds
        self.clock_target_seconds = clock_target_seconds
        self.max_rounds = max_rounds

    @classmethod
    def from_config(cls, config: BenchmarkConfig, clock: Clock | None = None) -> "Calibrator":
        return cls(
            clock=clock,
            min_sample_seconds=config.min_sample_seconds,
            clock_target_seconds=config.clock_target_seconds,
            max_rounds=config.max_calibration_rounds,
        )

    def calibrate(self, fn: Callable[[], Any]) -> CalibrationResult:
        """Calibrate ``fn`` and project the iteration count for a full run.

        Errors raised by ``fn`` propagate unchanged.
        """
        samples: list[CalibrationSample] = []
        sample_time, batch_size = 0.0, 1

        while sample_time < self.min_sample_seconds and len(samples) < self.max_rounds:
            sample_time = measure(self.clock, fn, batch_size)
            samples.append(CalibrationSample(batch_size, sample_time))
            logger.debug("Calibration round %d: %d calls in %.6fs", len(samples), batch_size, sample_time)
            batch_size *= BATCH_GROWTH_FACTOR

        # The loop grows the batch once more after the last sample
        batch_size //= BATCH_GROWTH_FACTOR

        if sample_time < self.min_sample_seconds:
            logger.debug(
                "Calibration stopped after %d rounds below the %.4fs floor",
                len(samples),
                self.min_sample_seconds,
            )

        iterations = self.project_iterations(sample_time, batch_size)
        logger.debug("Projected %d iterations for a %.3fs window", iterations, self.clock_target_seconds)
        return CalibrationResult(tuple(samples), batch_size, sample_time, iterations)

    def project_iterations(self, sample_time: float, batch_size: int) -> int:
        """Iterations expected to fill the target window, never less than 1.

        A sample that never registered any elapsed time falls back to the
        batch size that produced it.
        """
        if sample_time <= 0:
            return max(batch_size, 1)
        iterations = int(self.clock_target_seconds / sample_time) * batch_size
        return max(iterations, 1)
