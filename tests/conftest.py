"""Shared test configuration."""

import pytest

from zerodeploy import config as config_module

ENV_VARS = (
    "ZERODEPLOY_TAG",
    "ZERODEPLOY_OUTPUT_FORMAT",
    "ZERODEPLOY_OUTPUT_INDENT",
    "ZERODEPLOY_CLI_MODE",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's config file, env vars and .env."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield config_dir
    config_module.reset_config()
