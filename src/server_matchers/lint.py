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

"""WSGI conformance checks for request environs.

Wraps the standard library's ``wsgiref.validate`` middleware around a minimal
application and replays an environ through it. Violations surface as
``LintError`` carrying the validator's message.
"""

from collections.abc import Iterable
import logging
from typing import Any
import warnings
from wsgiref.validate import WSGIWarning, validator

from .exceptions import LintError

logger = logging.getLogger(__name__)

REQUIRED_ENVIRON_KEYS = (
    "REQUEST_METHOD",
    "SERVER_NAME",
    "SERVER_PORT",
    "wsgi.version",
    "wsgi.input",
    "wsgi.errors",
    "wsgi.multithread",
    "wsgi.multiprocess",
    "wsgi.run_once",
    "wsgi.url_scheme",
)


def _ok_app(environ: dict[str, Any], start_response: Any) -> Iterable[bytes]:
    start_response("200 OK", [("Content-Type", "text/html")])
    return []


_linted_app = validator(_ok_app)


def _start_response(status: str, headers: list[tuple[str, str]], exc_info: Any = None) -> Any:
    return lambda data: None


def check_environ(environ: Any, strict: bool = False) -> None:
    """Validate a WSGI environ.

    Args:
        environ: The environ dict to check
        strict: Also fail on WSGIWarning (e.g. a missing QUERY_STRING)

    Raises:
        LintError: If the environ violates the WSGI specification
    """
    if not isinstance(environ, dict):
        raise LintError(f"Environment is not of the right type: {type(environ).__name__}")

    missing = [key for key in REQUIRED_ENVIRON_KEYS if key not in environ]
    if missing:
        raise LintError(f"Environment missing required keys: {', '.join(missing)}")

    with warnings.catch_warnings():
        if strict:
            warnings.simplefilter("error", WSGIWarning)
        try:
            result = _linted_app(dict(environ), _start_response)
            try:
                for _ in result:
                    pass
            finally:
                result.close()
        except AssertionError as e:
            raise LintError(str(e), original_error=e) from e
        except WSGIWarning as e:
            raise LintError(str(e), original_error=e) from e

    logger.debug("Environ for %s passed WSGI lint", environ.get("PATH_INFO", ""))


def strict_check_environ(environ: Any) -> None:
    """``check_environ`` with warnings treated as failures."""
    check_environ(environ, strict=True)
