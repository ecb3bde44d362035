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

"""Server Matchers - pluggable assertion matchers for web-server specs.

Matchers check a subject and explain failures:

- benchmark_faster_than(threshold): average call duration, self-calibrating
- validate_with_external_checker(): WSGI environ conformance
- bounded_by(max_duration): completion within a deadline

Example:
    >>> from server_matchers import MatcherRegistry, StubRequest, expect
    >>> matchers = MatcherRegistry()
    >>> expect(lambda: sum(range(100))).to(matchers.benchmark_faster_than(0.01))
    >>> expect(StubRequest("/")).to(matchers.validate_with_external_checker())

The library installs no logging handlers; matchers log at DEBUG level under
the ``server_matchers`` logger.
"""

from .calibration import Calibrator
from .clock import Clock, SystemClock
from .config import ConfigManager, ConfigSchema, load_config
from .exceptions import (
    ConfigurationError,
    ConfigValidationError,
    DeadlineExceededError,
    ExpectationNotMetError,
    LintError,
    MatcherError,
    ValidationError,
)
from .expectations import Expectation, expect
from .helpers import StubRequest, silence_stream
from .lint import check_environ
from .matchers import AdaptiveBenchmarkMatcher, ConformanceMatcher, DeadlineMatcher, Matcher
from .models import BenchmarkResult, CalibrationResult, CalibrationSample, MatcherKind
from .registry import (
    MatcherRegistry,
    benchmark_faster_than,
    bounded_by,
    validate_with_external_checker,
)
from .timeouts import (
    AutoBoundedWait,
    BoundedWait,
    SignalBoundedWait,
    ThreadBoundedWait,
    create_bounded_wait,
)

__version__ = "0.1.0"

__all__ = [
    "AdaptiveBenchmarkMatcher",
    "AutoBoundedWait",
    "BenchmarkResult",
    "BoundedWait",
    "CalibrationResult",
    "CalibrationSample",
    "Calibrator",
    "Clock",
    "ConfigManager",
    "ConfigSchema",
    "ConfigValidationError",
    "ConfigurationError",
    "ConformanceMatcher",
    "DeadlineExceededError",
    "DeadlineMatcher",
    "Expectation",
    "ExpectationNotMetError",
    "LintError",
    "Matcher",
    "MatcherError",
    "MatcherKind",
    "MatcherRegistry",
    "SignalBoundedWait",
    "StubRequest",
    "SystemClock",
    "ThreadBoundedWait",
    "ValidationError",
    "benchmark_faster_than",
    "bounded_by",
    "check_environ",
    "create_bounded_wait",
    "expect",
    "load_config",
    "silence_stream",
    "validate_with_external_checker",
]
