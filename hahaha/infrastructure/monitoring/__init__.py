"""
Monitoring Infrastructure
"""

from .metrics import ShutdownMetrics

__all__ = ["ShutdownMetrics"]
