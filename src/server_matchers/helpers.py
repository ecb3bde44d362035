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

"""Test helpers for exercising a WSGI server component.

- StubRequest: builds a complete WSGI environ for a path and verb
- silence_stream: discards output written to a file-backed stream
"""

from collections.abc import Iterator, Mapping
import contextlib
import io
import os
from typing import Any, TextIO

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "3000"


class StubRequest:
    """A request stub exposing a WSGI ``environ``.

    Example:
        >>> request = StubRequest("/users?page=2", "post")
        >>> request.environ["REQUEST_METHOD"]
        'POST'
        >>> request.request_line
        'POST /users?page=2 HTTP/1.1'
    """

    def __init__(
        self,
        path: str,
        verb: str = "GET",
        params: Mapping[str, Any] | None = None,
        body: bytes = b"",
    ) -> None:
        self.path = path
        self.verb = str(verb).upper()
        self.body = body
        self.environ = self._build_environ(params or {})

    def _build_environ(self, params: Mapping[str, Any]) -> dict[str, Any]:
        path_info, _, query = self.path.partition("?")
        environ: dict[str, Any] = {
            "REQUEST_METHOD": self.verb,
            "SCRIPT_NAME": "",
            "PATH_INFO": path_info,
            "QUERY_STRING": query,
            "REQUEST_URI": self.path,
            "REQUEST_PATH": path_info,
            "SERVER_NAME": DEFAULT_HOST,
            "SERVER_PORT": DEFAULT_PORT,
            "SERVER_PROTOCOL": "HTTP/1.1",
            "HTTP_HOST": f"{DEFAULT_HOST}:{DEFAULT_PORT}",
            "wsgi.version": (1, 0),
            "wsgi.url_scheme": "http",
            "wsgi.input": io.BytesIO(self.body),
            "wsgi.errors": io.StringIO(),
            "wsgi.multithread": False,
            "wsgi.multiprocess": False,
            "wsgi.run_once": False,
        }
        if self.body:
            environ["CONTENT_LENGTH"] = str(len(self.body))
        environ.update(params)
        return environ

    @property
    def request_line(self) -> str:
        return f"{self.verb} {self.path} HTTP/1.1"

    def __repr__(self) -> str:
        return f"StubRequest({self.path!r}, {self.verb!r})"


@contextlib.contextmanager
def silence_stream(stream: TextIO) -> Iterator[None]:
    """Silence a file-backed stream for the duration of the block.

    The stream's file descriptor is pointed at the null device, so output
    from subprocesses and C extensions sharing the descriptor is discarded
    too.

    Example:
        with silence_stream(sys.stdout):
            print("This will never be seen")

        print("But this will")

    Raises:
        io.UnsupportedOperation: If the stream has no file descriptor
    """
    fd = stream.fileno()
    stream.flush()
    saved_fd = os.dup(fd)
    try:
        with open(os.devnull, "w") as devnull:
            os.dup2(devnull.fileno(), fd)
        try:
            yield
        finally:
            stream.flush()
            os.dup2(saved_fd, fd)
    finally:
        os.close(saved_fd)
