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

"""Framework-neutral assertion helper for matchers.

Example:
    >>> expect(lambda: None).to(registry.bounded_by(0.01))
    >>> expect(StubRequest("/")).to(registry.validate_with_external_checker())
"""

from typing import Any

from .exceptions import ExpectationNotMetError
from .matchers import Matcher


class Expectation:
    """Pairs a subject with matchers and raises when a verdict is wrong."""

    def __init__(self, subject: Any) -> None:
        self.subject = subject

    def to(self, matcher: Matcher) -> None:
        if not matcher.evaluate(self.subject):
            raise ExpectationNotMetError(matcher.describe_failure(negated=False), matcher)

    def not_to(self, matcher: Matcher) -> None:
        if matcher.evaluate(self.subject):
            raise ExpectationNotMetError(
                matcher.describe_failure(negated=True), matcher, negated=True
            )


def expect(subject: Any) -> Expectation:
    return Expectation(subject)
