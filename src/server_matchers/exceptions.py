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

"""Custom exceptions for server matchers."""

from datetime import datetime, timezone
from typing import Any


class MatcherError(Exception):
    """Base exception for all server matcher errors."""

    ERROR_CATEGORY = "GENERAL"
    ERROR_CODE = "SMX_0000"

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        recovery_suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message or "An error occurred"
        self.error_code = error_code or self.ERROR_CODE
        self.error_category = self.ERROR_CATEGORY
        self.context = context or {}
        self.recovery_suggestion = recovery_suggestion
        self.timestamp = datetime.now(timezone.utc)


class ValidationError(MatcherError):
    """Invalid matcher arguments (thresholds, deadlines)."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "SMX_1000"


class LintError(MatcherError):
    """A WSGI environ failed protocol conformance checks."""

    ERROR_CATEGORY = "CLIENT_ERROR"
    ERROR_CODE = "SMX_2001"

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        context = {"original_error": repr(original_error)} if original_error else {}
        super().__init__(
            message,
            user_message="Request environment does not conform to WSGI",
            error_code=self.ERROR_CODE,
            context=context,
            recovery_suggestion="Check the environ keys and value types against PEP 3333",
        )
        self.original_error = original_error


class DeadlineExceededError(MatcherError):
    """A unit of work did not finish within its bound."""

    ERROR_CATEGORY = "TIMEOUT"
    ERROR_CODE = "SMX_3001"

    def __init__(self, timeout: float, message: str | None = None) -> None:
        message = message or f"Execution exceeded the {timeout} second bound"
        context = {"timeout_seconds": timeout}
        super().__init__(
            message,
            user_message="Operation took too long and was abandoned",
            error_code=self.ERROR_CODE,
            context=context,
        )
        self.timeout = timeout


class ConfigurationError(MatcherError):
    """Configuration or setup errors."""

    ERROR_CATEGORY = "SERVER_ERROR"
    ERROR_CODE = "SMX_4000"


class ConfigValidationError(ConfigurationError):
    """Configuration validation error with detailed context."""

    ERROR_CODE = "SMX_4001"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, user_message="Invalid matcher configuration")
        self.errors = errors or []


class ExpectationNotMetError(AssertionError):
    """Raised by ``expect()`` when a matcher verdict goes the wrong way.

    Subclasses AssertionError so any test runner reports it as a plain
    assertion failure.
    """

    def __init__(self, message: str, matcher: Any = None, negated: bool = False) -> None:
        super().__init__(message)
        self.matcher = matcher
        self.negated = negated
