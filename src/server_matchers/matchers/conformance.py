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

"""Protocol conformance matcher backed by an external validator."""

from collections.abc import Callable, Mapping
import logging
from typing import Any

from ..exceptions import LintError
from ..lint import check_environ
from ..models import MatcherKind
from .base import Matcher

logger = logging.getLogger(__name__)


def environ_of(subject: Any) -> dict[str, Any]:
    """Extract the WSGI environ a subject represents.

    Accepts objects exposing ``environ`` (or ``env``) and plain mappings.
    """
    for attr in ("environ", "env"):
        value = getattr(subject, attr, None)
        if value is not None:
            return value
    if isinstance(subject, Mapping):
        return dict(subject)
    raise TypeError(f"Cannot derive a WSGI environ from {type(subject).__name__}")


class ConformanceMatcher(Matcher):
    """Matches subjects whose environ passes the conformance checker.

    Only ``diagnostic`` errors raised by the checker count as a failed
    match. Anything else raised while checking propagates.
    """

    kind = MatcherKind.CONFORMANCE

    def __init__(
        self,
        checker: Callable[[Any], None] = check_environ,
        diagnostic: type[Exception] = LintError,
        representation: Callable[[Any], Any] = environ_of,
        label: str = "WSGI lint",
    ) -> None:
        self.checker = checker
        self.diagnostic = diagnostic
        self.representation = representation
        self.label = label
        self.message: str | None = None

    def evaluate(self, subject: Any) -> bool:
        self.message = None
        environ = self.representation(subject)
        try:
            self.checker(environ)
        except self.diagnostic as e:
            self.message = str(e)
            logger.debug("Conformance check failed: %s", self.message)
            return False
        return True

    @property
    def diagnostic_message(self) -> str | None:
        """Message of the last captured diagnostic, if any."""
        return self.message

    def describe_failure(self, negated: bool = False) -> str:
        if negated:
            return f"should not validate with {self.label}"
        if self.message:
            return f"should validate with {self.label}: {self.message}"
        return f"should validate with {self.label}"
