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

"""Matcher registry: named constructors for the closed set of matchers.

``MatcherRegistry`` is the composition root. It holds the collaborators the
matchers depend on (configuration, clock, conformance checker, bounded wait)
and builds ready-to-use matchers from them. The module-level functions build
matchers with a freshly loaded default configuration and keep no state.
"""

from collections.abc import Callable
from datetime import timedelta
import logging
from typing import Any

from .calibration import Calibrator
from .clock import Clock
from .config.manager import load_config
from .config.schema import ConfigSchema
from .exceptions import ConfigurationError, LintError
from .lint import check_environ, strict_check_environ
from .matchers import AdaptiveBenchmarkMatcher, ConformanceMatcher, DeadlineMatcher, Matcher
from .models import MatcherKind
from .timeouts import BoundedWait, create_bounded_wait

logger = logging.getLogger(__name__)


class MatcherRegistry:
    """Builds matchers wired to injected collaborators."""

    def __init__(
        self,
        config: ConfigSchema | None = None,
        clock: Clock | None = None,
        checker: Callable[[Any], None] | None = None,
        diagnostic: type[Exception] = LintError,
        bounded_wait: BoundedWait | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.clock = clock
        self.checker = checker or (
            strict_check_environ if self.config.lint.strict_warnings else check_environ
        )
        self.diagnostic = diagnostic
        self.bounded_wait = bounded_wait

        self._factories: dict[MatcherKind, Callable[..., Matcher]] = {
            MatcherKind.BENCHMARK: self.benchmark_faster_than,
            MatcherKind.CONFORMANCE: self.validate_with_external_checker,
            MatcherKind.DEADLINE: self.bounded_by,
        }

    def benchmark_faster_than(self, threshold: float | timedelta) -> AdaptiveBenchmarkMatcher:
        """Matcher passing when the average call takes less than ``threshold``."""
        calibrator = Calibrator.from_config(self.config.benchmark, clock=self.clock)
        return AdaptiveBenchmarkMatcher(threshold, calibrator=calibrator)

    def validate_with_external_checker(self) -> ConformanceMatcher:
        """Matcher passing when the subject's environ conforms to WSGI."""
        return ConformanceMatcher(checker=self.checker, diagnostic=self.diagnostic)

    def bounded_by(self, max_duration: float | timedelta) -> DeadlineMatcher:
        """Matcher passing when the callable finishes within ``max_duration``."""
        bounded_wait = self.bounded_wait or create_bounded_wait(self.config.deadline.strategy)
        return DeadlineMatcher(max_duration, bounded_wait=bounded_wait)

    def names(self) -> list[str]:
        return [kind.value for kind in self._factories]

    def create(self, name: str | MatcherKind, *args: Any) -> Matcher:
        """Build a matcher by factory name.

        Raises:
            ConfigurationError: If no matcher is registered under ``name``
        """
        try:
            kind = MatcherKind(name)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown matcher: {name}",
                f"Matcher '{name}' is not registered",
                context={"registered": self.names()},
            ) from e

        matcher = self._factories[kind](*args)
        logger.debug("Created %s matcher", kind.value)
        return matcher


def benchmark_faster_than(threshold: float | timedelta) -> AdaptiveBenchmarkMatcher:
    return MatcherRegistry().benchmark_faster_than(threshold)


def validate_with_external_checker() -> ConformanceMatcher:
    return MatcherRegistry().validate_with_external_checker()


def bounded_by(max_duration: float | timedelta) -> DeadlineMatcher:
    return MatcherRegistry().bounded_by(max_duration)
