"""Configuration management for zerodeploy.

The detection engines never read this module: they take explicit options.
Configuration only shapes how the CLI calls them and writes their output.

Config resolution order (highest priority first):
1. Programmatic (ZerodeployConfig constructed in code, see configure())
2. Environment variables (ZERODEPLOY_TAG, ZERODEPLOY_OUTPUT_FORMAT, ...)
3. Config file (~/.config/zerodeploy/config.json, managed by `zerodeploy config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "zerodeploy"
CONFIG_FILE = CONFIG_DIR / "config.json"

OUTPUT_FORMATS = ("json", "yaml")
CLI_MODES = ("human", "agent")


# =============================================================================
# Config sections
# =============================================================================


@dataclass
class DetectConfig:
    """Defaults passed to builder detection by the CLI.

    - tag: release channel appended to builder identifiers ("" = none)
    """

    tag: str = ""


@dataclass
class OutputConfig:
    """How deployment documents are written."""

    format: str = "json"  # json | yaml
    indent: int = 2


@dataclass
class CliConfig:
    """CLI behaviour.

    Agent mode means JSON output regardless of --json, for scripting.
    """

    mode: str = "human"


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class ZerodeployConfig:
    """Top-level zerodeploy configuration.

    Examples:
        # Package use, no files needed
        config = ZerodeployConfig(detect=DetectConfig(tag="canary"))

        # CLI use, loads from ~/.config/zerodeploy/config.json
        config = ZerodeployConfig.load()
    """

    detect: DetectConfig = field(default_factory=DetectConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    cli: CliConfig = field(default_factory=CliConfig)

    @classmethod
    def load(cls) -> "ZerodeployConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    _apply_dict(config, data)
                else:
                    logger.warning("Ignoring config %s: not a JSON object", CONFIG_FILE)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        _ensure_dotenv()
        if (val := os.environ.get("ZERODEPLOY_TAG")) is not None:
            config.detect.tag = val
        if val := os.environ.get("ZERODEPLOY_OUTPUT_FORMAT"):
            if val in OUTPUT_FORMATS:
                config.output.format = val
            else:
                logger.warning("Invalid ZERODEPLOY_OUTPUT_FORMAT=%r, ignoring", val)
        if val := os.environ.get("ZERODEPLOY_OUTPUT_INDENT"):
            try:
                config.output.indent = int(val)
            except ValueError:
                logger.warning("Invalid ZERODEPLOY_OUTPUT_INDENT=%r, ignoring", val)
        if val := os.environ.get("ZERODEPLOY_CLI_MODE"):
            if val in CLI_MODES:
                config.cli.mode = val
            else:
                logger.warning("Invalid ZERODEPLOY_CLI_MODE=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/zerodeploy/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "detect": asdict(self.detect),
            "output": asdict(self.output),
            "cli": asdict(self.cli),
        }


# =============================================================================
# Config dict application
# =============================================================================


_CHOICES = {
    ("output", "format"): OUTPUT_FORMATS,
    ("cli", "mode"): CLI_MODES,
}


def _apply_dict(config: ZerodeployConfig, data: dict) -> None:
    """Apply a dict of values onto a ZerodeployConfig.

    Values get the same checks as their environment variable counterparts.
    """
    for zone in ("detect", "output", "cli"):
        values = data.get(zone)
        if not isinstance(values, dict):
            continue
        target = getattr(config, zone)
        for k, v in values.items():
            if not hasattr(target, k):
                logger.warning("Unknown config key %s.%s, ignoring", zone, k)
                continue
            if k == "indent":
                try:
                    v = int(v)
                except (TypeError, ValueError):
                    logger.warning("Invalid output.indent=%r, ignoring", v)
                    continue
            elif not isinstance(v, str):
                logger.warning("Invalid %s.%s=%r, expected a string, ignoring", zone, k, v)
                continue
            elif (choices := _CHOICES.get((zone, k))) and v not in choices:
                logger.warning("Invalid %s.%s=%r, ignoring", zone, k, v)
                continue
            setattr(target, k, v)


_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load a .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        from dotenv import find_dotenv, load_dotenv

        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config singleton
# =============================================================================

_config: ZerodeployConfig | None = None


def get_config() -> ZerodeployConfig:
    """Get the global ZerodeployConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = ZerodeployConfig.load()
    return _config


def configure(config: ZerodeployConfig) -> None:
    """Set the global ZerodeployConfig programmatically.

    Use this when zerodeploy is used as a package:
        from zerodeploy.config import configure, ZerodeployConfig, DetectConfig
        configure(ZerodeployConfig(detect=DetectConfig(tag="canary")))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
