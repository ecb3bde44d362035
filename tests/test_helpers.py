"""Tests for request stubs and stream silencing"""

import io
import os

import pytest

from server_matchers import StubRequest, silence_stream


class TestStubRequest:
    """Test StubRequest environ construction"""

    def test_defaults(self):
        request = StubRequest("/")

        assert request.verb == "GET"
        assert request.environ["REQUEST_METHOD"] == "GET"
        assert request.environ["PATH_INFO"] == "/"
        assert request.environ["HTTP_HOST"] == "localhost:3000"
        assert request.environ["wsgi.url_scheme"] == "http"

    def test_verb_is_upper_cased(self):
        assert StubRequest("/", "delete").environ["REQUEST_METHOD"] == "DELETE"

    def test_query_string_split_from_path(self):
        request = StubRequest("/search?q=thin&page=2")

        assert request.environ["PATH_INFO"] == "/search"
        assert request.environ["REQUEST_PATH"] == "/search"
        assert request.environ["QUERY_STRING"] == "q=thin&page=2"
        assert request.environ["REQUEST_URI"] == "/search?q=thin&page=2"

    def test_params_override_defaults(self):
        request = StubRequest("/", params={"HTTP_HOST": "example.com", "HTTP_ACCEPT": "*/*"})

        assert request.environ["HTTP_HOST"] == "example.com"
        assert request.environ["HTTP_ACCEPT"] == "*/*"

    def test_body_sets_content_length(self):
        request = StubRequest("/upload", "put", body=b"hello")

        assert request.environ["CONTENT_LENGTH"] == "5"
        assert request.environ["wsgi.input"].read() == b"hello"

    def test_request_line(self):
        assert StubRequest("/users", "post").request_line == "POST /users HTTP/1.1"

    def test_repr(self):
        assert repr(StubRequest("/a")) == "StubRequest('/a', 'GET')"


class TestSilenceStream:
    """Test silence_stream on file-backed streams"""

    def test_output_inside_block_is_discarded(self, tmp_path):
        path = tmp_path / "out.txt"

        with path.open("w") as stream:
            stream.write("before ")
            with silence_stream(stream):
                stream.write("hidden ")
                os.write(stream.fileno(), b"also hidden ")
            stream.write("after")

        assert path.read_text() == "before after"

    def test_restored_after_error(self, tmp_path):
        path = tmp_path / "out.txt"

        with path.open("w") as stream:
            with pytest.raises(RuntimeError):
                with silence_stream(stream):
                    stream.write("hidden")
                    raise RuntimeError("boom")
            stream.write("visible")

        assert path.read_text() == "visible"

    def test_stream_without_descriptor(self):
        with pytest.raises(io.UnsupportedOperation):
            with silence_stream(io.StringIO()):
                pass
