"""
Infrastructure Layer

Adapters for the cluster, configuration, logging and metrics.
"""
