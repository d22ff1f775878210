"""Tests for layered configuration."""

import json

from zerodeploy import config as config_module
from zerodeploy.config import (
    DetectConfig,
    ZerodeployConfig,
    configure,
    get_config,
    reset_config,
)


class TestDefaults:
    def test_defaults(self):
        config = ZerodeployConfig.load()
        assert config.detect.tag == ""
        assert config.output.format == "json"
        assert config.output.indent == 2
        assert config.cli.mode == "human"

    def test_to_dict(self):
        assert ZerodeployConfig().to_dict() == {
            "detect": {"tag": ""},
            "output": {"format": "json", "indent": 2},
            "cli": {"mode": "human"},
        }


class TestConfigFile:
    def test_save_and_load(self):
        config = ZerodeployConfig()
        config.detect.tag = "canary"
        config.output.format = "yaml"
        config.save()

        assert config_module.CONFIG_FILE.exists()
        loaded = ZerodeployConfig.load()
        assert loaded.detect.tag == "canary"
        assert loaded.output.format == "yaml"

    def test_unknown_keys_are_ignored(self, caplog):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps({"detect": {"tag": "beta", "bogus": 1}, "output": {"indent": "4"}})
        )
        with caplog.at_level("WARNING"):
            config = ZerodeployConfig.load()
        assert config.detect.tag == "beta"
        assert config.output.indent == 4
        assert "detect.bogus" in caplog.text

    def test_broken_file_is_skipped(self, caplog):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text("{not json")
        with caplog.at_level("WARNING"):
            config = ZerodeployConfig.load()
        assert config.detect.tag == ""
        assert "Failed to load config" in caplog.text

    def test_invalid_file_values_are_ignored(self, caplog):
        config_module.CONFIG_DIR.mkdir(parents=True)
        config_module.CONFIG_FILE.write_text(
            json.dumps(
                {
                    "detect": {"tag": 5},
                    "output": {"format": "xml", "indent": 4},
                    "cli": {"mode": "robot"},
                }
            )
        )
        with caplog.at_level("WARNING"):
            config = ZerodeployConfig.load()
        assert config.detect.tag == ""
        assert config.output.format == "json"
        assert config.output.indent == 4
        assert config.cli.mode == "human"
        assert "detect.tag" in caplog.text
        assert "output.format" in caplog.text
        assert "cli.mode" in caplog.text


class TestEnvOverrides:
    def test_env_beats_file(self, monkeypatch):
        config = ZerodeployConfig()
        config.detect.tag = "beta"
        config.save()
        monkeypatch.setenv("ZERODEPLOY_TAG", "canary")
        monkeypatch.setenv("ZERODEPLOY_OUTPUT_FORMAT", "yaml")
        monkeypatch.setenv("ZERODEPLOY_OUTPUT_INDENT", "4")
        monkeypatch.setenv("ZERODEPLOY_CLI_MODE", "agent")

        loaded = ZerodeployConfig.load()
        assert loaded.detect.tag == "canary"
        assert loaded.output.format == "yaml"
        assert loaded.output.indent == 4
        assert loaded.cli.mode == "agent"

    def test_invalid_env_values_are_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("ZERODEPLOY_OUTPUT_FORMAT", "xml")
        monkeypatch.setenv("ZERODEPLOY_OUTPUT_INDENT", "wide")
        monkeypatch.setenv("ZERODEPLOY_CLI_MODE", "robot")
        with caplog.at_level("WARNING"):
            loaded = ZerodeployConfig.load()
        assert loaded.output.format == "json"
        assert loaded.output.indent == 2
        assert loaded.cli.mode == "human"
        assert "ZERODEPLOY_OUTPUT_FORMAT" in caplog.text


class TestSingleton:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_configure_and_reset(self):
        custom = ZerodeployConfig(detect=DetectConfig(tag="canary"))
        configure(custom)
        assert get_config() is custom
        reset_config()
        assert get_config() is not custom
