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

"""Adaptive performance matcher: is the average call faster than a threshold?"""

from collections.abc import Callable
from datetime import timedelta
import logging
from typing import Any

from ..calibration import Calibrator
from ..clock import measure
from ..models import BenchmarkResult, MatcherKind
from .base import Matcher, to_seconds

logger = logging.getLogger(__name__)


class AdaptiveBenchmarkMatcher(Matcher):
    """Matches callables whose average per-call duration is below ``threshold``.

    The subject is executed many times (calibration rounds plus one timed
    run), so it must tolerate repeated invocation. The exact call count is
    not reproducible between evaluations.
    """

    kind = MatcherKind.BENCHMARK

    def __init__(self, threshold: float | timedelta, calibrator: Calibrator | None = None) -> None:
        self.threshold = to_seconds(threshold, "threshold")
        self.calibrator = calibrator or Calibrator()
        self.result: BenchmarkResult | None = None

    def evaluate(self, subject: Callable[[], Any]) -> bool:
        calibration = self.calibrator.calibrate(subject)
        iterations = calibration.iterations

        total = measure(self.calibrator.clock, subject, iterations)
        per_call = total / iterations

        self.result = BenchmarkResult(
            per_call=per_call,
            threshold=self.threshold,
            passed=per_call < self.threshold,
            iterations=iterations,
            calibration=calibration,
        )
        logger.debug(
            "Benchmark: %d iterations, %.9fs per call against %.9fs threshold",
            iterations,
            per_call,
            self.threshold,
        )
        return self.result.passed

    def describe_failure(self, negated: bool = False) -> str:
        less_more = "more" if negated else "less"
        if self.result is None:
            return f"was never measured, should take {less_more} than {self.threshold} seconds."
        return (
            f"took <{self.result.per_call!r} seconds>, "
            f"should take {less_more} than {self.threshold} seconds."
        )
