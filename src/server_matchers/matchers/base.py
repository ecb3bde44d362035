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

"""Abstract base class for matcher implementations."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, ClassVar

from ..exceptions import ValidationError
from ..models import MatcherKind


class Matcher(ABC):
    """Abstract base class for all matchers.

    A matcher encapsulates one pass/fail check. The test runner calls
    ``evaluate`` with the subject and, when the verdict is not the expected
    one, asks ``describe_failure`` for the message to report.
    """

    kind: ClassVar[MatcherKind]

    @abstractmethod
    def evaluate(self, subject: Any) -> bool:
        """Check the subject.

        Args:
            subject: The callable or object under test

        Returns:
            True if the subject satisfies the matcher
        """

    @abstractmethod
    def describe_failure(self, negated: bool = False) -> str:
        """Describe why the expectation failed.

        Args:
            negated: True when the expectation was that the matcher would NOT match

        Returns:
            Human-readable failure message based on the last evaluation
        """

    def failure_message(self) -> str:
        return self.describe_failure(negated=False)

    def negative_failure_message(self) -> str:
        return self.describe_failure(negated=True)


def to_seconds(value: float | timedelta, field: str) -> float:
    """Normalize a duration argument to positive float seconds.

    Raises:
        ValidationError: If the value is not a number/timedelta or not positive
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise ValidationError(
            f"{field} must be a number of seconds or a timedelta, got {type(value).__name__}",
            user_message=f"Invalid {field}",
            context={"field": field, "value": repr(value)},
        )

    if seconds <= 0:
        raise ValidationError(
            f"{field} must be positive, got {seconds}",
            user_message=f"Invalid {field}",
            context={"field": field, "value": seconds},
            recovery_suggestion=f"Pass a {field} greater than zero",
        )
    return seconds
