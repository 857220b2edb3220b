"""
Kubernetes client bootstrap

Loads cluster credentials and builds the CoreV1Api shared by all adapters.
"""
from typing import Optional

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from hahaha.infrastructure.logging import get_logger

logger = get_logger(__name__)


def load_configuration(kube_config_path: Optional[str] = None) -> None:
    """
    Load Kubernetes credentials into the default client configuration.

    Order: explicit kubeconfig file, in-cluster ServiceAccount, default kubeconfig.

    Args:
        kube_config_path: kubeconfig file path (local development)

    Raises:
        ConfigException: If no configuration could be loaded
    """
    if kube_config_path:
        config.load_kube_config(config_file=kube_config_path)
        logger.info("Loaded Kubernetes config from file", path=kube_config_path)
        return

    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes config")
    except ConfigException:
        config.load_kube_config()
        logger.info("Loaded default kubeconfig")


def create_core_v1_api(kube_config_path: Optional[str] = None) -> client.CoreV1Api:
    """Load credentials and return a CoreV1Api client."""
    load_configuration(kube_config_path)
    return client.CoreV1Api()
