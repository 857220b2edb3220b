"""
HTTP Interface
"""

from .metrics_server import MetricsServer, create_app

__all__ = ["MetricsServer", "create_app"]
