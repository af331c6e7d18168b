"""HTTP binding service."""

from graph_config.server.app import app

__all__ = ["app"]
