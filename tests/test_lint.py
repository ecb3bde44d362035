"""Tests for WSGI environ lint"""

from wsgiref.validate import WSGIWarning

import pytest

from server_matchers import LintError, StubRequest, check_environ
from server_matchers.lint import REQUIRED_ENVIRON_KEYS, strict_check_environ


class TestCheckEnviron:
    """Test check_environ against stub and broken environs"""

    def test_stub_request_passes(self):
        check_environ(StubRequest("/posts?page=1", "post").environ)

    @pytest.mark.parametrize("key", REQUIRED_ENVIRON_KEYS)
    def test_missing_required_key(self, key):
        environ = StubRequest("/").environ
        del environ[key]

        with pytest.raises(LintError, match=key):
            check_environ(environ)

    def test_non_dict_environ(self):
        with pytest.raises(LintError, match="right type"):
            check_environ([("PATH_INFO", "/")])

    def test_non_string_cgi_value(self):
        environ = StubRequest("/", params={"SERVER_PORT": 3000}).environ

        with pytest.raises(LintError, match="SERVER_PORT") as exc_info:
            check_environ(environ)
        assert isinstance(exc_info.value.original_error, AssertionError)

    def test_relative_path_info(self):
        environ = StubRequest("/", params={"PATH_INFO": "relative"}).environ

        with pytest.raises(LintError):
            check_environ(environ)

    def test_unknown_method_warns_by_default(self):
        environ = StubRequest("/", "brew").environ

        with pytest.warns(WSGIWarning):
            check_environ(environ)

    def test_unknown_method_fails_when_strict(self):
        environ = StubRequest("/", "brew").environ

        with pytest.raises(LintError, match="BREW"):
            strict_check_environ(environ)

    def test_environ_not_mutated(self):
        environ = StubRequest("/").environ
        snapshot = dict(environ)

        check_environ(environ)

        assert environ == snapshot
