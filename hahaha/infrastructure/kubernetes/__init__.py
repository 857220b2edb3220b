"""
Kubernetes Infrastructure

Adapters implementing the domain ports with the official kubernetes client.
"""

from .client import create_core_v1_api, load_configuration
from .converters import snapshot_from_pod
from .event_recorder import KubernetesEventRecorder
from .pod_client import KubernetesPodClient
from .pod_watcher import KubernetesPodWatcher

__all__ = [
    "create_core_v1_api",
    "load_configuration",
    "snapshot_from_pod",
    "KubernetesEventRecorder",
    "KubernetesPodClient",
    "KubernetesPodWatcher",
]
