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

"""Data models for server matchers.

Key Classes:
    - MatcherKind: Enum tagging the closed set of matcher variants
    - CalibrationSample: One timed batch from the calibration loop
    - CalibrationResult: Outcome of calibrating a callable
    - BenchmarkResult: Per-call estimate compared against a threshold

Note:
    - All durations are floats in seconds
    - Results are immutable and recomputed on every evaluation
"""

from dataclasses import dataclass, field
from enum import Enum


class MatcherKind(str, Enum):
    """Registered matcher variants, keyed by their factory name.

    Attributes:
        BENCHMARK: Average per-call duration below a threshold
        CONFORMANCE: WSGI environ passes the conformance validator
        DEADLINE: Callable completes within a bound
    """

    BENCHMARK = "benchmark_faster_than"
    CONFORMANCE = "validate_with_external_checker"
    DEADLINE = "bounded_by"


@dataclass(frozen=True)
class CalibrationSample:
    """A single calibration round: ``batch_size`` calls took ``elapsed`` seconds."""

    batch_size: int
    elapsed: float


@dataclass(frozen=True)
class CalibrationResult:
    """Outcome of calibrating a callable.

    Attributes:
        samples: Every round in order; batch sizes are 1, 10, 100, ...
        batch_size: Batch size that produced ``sample_time``
        sample_time: Duration of the final calibration round
        iterations: Projected iteration count for the timed run, at least 1
    """

    samples: tuple[CalibrationSample, ...]
    batch_size: int
    sample_time: float
    iterations: int

    @property
    def rounds(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class BenchmarkResult:
    """Per-call duration estimate of a callable against a threshold."""

    per_call: float
    threshold: float
    passed: bool
    iterations: int = 1
    calibration: CalibrationResult | None = field(default=None, compare=False)
