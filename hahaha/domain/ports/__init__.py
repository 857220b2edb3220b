"""
Domain Ports

Port interfaces defining contracts between layers.
All dependencies on the cluster are abstracted through ports.
"""

from .pod_port import IPodPort
from .event_port import IEventPort
from .watch_port import IPodWatchPort
from .metrics_port import IShutdownMetricsPort

__all__ = [
    # Exec / port-forward
    "IPodPort",
    # Audit trail
    "IEventPort",
    # Pod stream
    "IPodWatchPort",
    # Counters
    "IShutdownMetricsPort",
]
