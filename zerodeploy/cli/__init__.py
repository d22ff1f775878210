"""Command-line interface for zerodeploy."""

from .app import app

__all__ = ["app"]
