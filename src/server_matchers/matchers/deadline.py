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

"""Deadline matcher: does a callable finish within a bound?"""

from collections.abc import Callable
from datetime import timedelta
import logging
from typing import Any

from ..exceptions import DeadlineExceededError
from ..models import MatcherKind
from ..timeouts import BoundedWait, create_bounded_wait
from .base import Matcher, to_seconds

logger = logging.getLogger(__name__)


class DeadlineMatcher(Matcher):
    """Matches callables that complete within ``max_duration``.

    Exceeding the bound is a normal negative result. Any other error raised
    by the callable propagates.
    """

    kind = MatcherKind.DEADLINE

    def __init__(
        self,
        max_duration: float | timedelta,
        bounded_wait: BoundedWait | None = None,
    ) -> None:
        self.max_duration = to_seconds(max_duration, "max_duration")
        self.bounded_wait = bounded_wait or create_bounded_wait()
        self.expired: bool | None = None

    def evaluate(self, subject: Callable[[], Any]) -> bool:
        try:
            self.bounded_wait.run_with_bound(self.max_duration, subject)
        except DeadlineExceededError:
            self.expired = True
            logger.debug("Callable exceeded its %ss bound", self.max_duration)
            return False
        self.expired = False
        return True

    def describe_failure(self, negated: bool = False) -> str:
        negation = " not" if negated else ""
        return f"should{negation} take less than {self.max_duration} seconds to run"
