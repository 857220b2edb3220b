"""
Watch Port Interface

Defines the contract for the stream of observed pods.
This is an input port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from hahaha.domain.value_objects import PodSnapshot


class IPodWatchPort(ABC):
    """Port interface delivering applied (created or updated) pod states."""

    @abstractmethod
    def snapshots(self) -> AsyncIterator[PodSnapshot]:
        """
        Iterate over pod snapshots until the subscription ends.

        Raises:
            WatchError: If the subscription fails
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Ask the subscription to end; the iterator finishes normally."""
        pass
