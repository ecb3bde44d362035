"""Tests for the configuration CLI"""

import json

from server_matchers.__main__ import main


class TestMain:
    """Test python -m server_matchers"""

    def test_prints_json_config_and_env_help(self, capsys, monkeypatch):
        monkeypatch.setenv("SMX_DEADLINE_STRATEGY", "thread")

        assert main([]) == 0

        output = capsys.readouterr().out
        config_text, _, help_text = output.partition("\n\n")
        assert json.loads(config_text)["deadline"]["strategy"] == "thread"
        assert "SMX_CLOCK_TARGET_SECONDS: Type: float" in help_text

    def test_prints_yaml(self, capsys):
        assert main(["yaml"]) == 0

        assert "benchmark:" in capsys.readouterr().out

    def test_invalid_configuration_exits_non_zero(self, capsys, monkeypatch):
        monkeypatch.setenv("SMX_CLOCK_TARGET_SECONDS", "0.0001")

        assert main([]) == 1
