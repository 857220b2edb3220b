"""
Pod Port Interface

Defines the contract for reaching into a live pod: running a command in
one of its containers, or calling an HTTP endpoint through a port-forward.
This is an output port - implemented by infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from hahaha.domain.value_objects import HttpReply, PodIdentity


class IPodPort(ABC):
    """
    Port interface for remote operations against a running pod.

    Implementations make exactly one attempt per call and raise an
    exception on any transport-level failure.
    """

    @abstractmethod
    async def exec_command(
        self,
        pod: PodIdentity,
        container: str,
        command: Sequence[str],
    ) -> None:
        """
        Run a command inside a container, discarding its output.

        The command's exit status is not reported.

        Args:
            pod: Target pod
            container: Target container name
            command: Command line tokens

        Raises:
            ExecError: If the exec call itself fails
        """
        pass

    @abstractmethod
    async def send_http_request(
        self,
        pod: PodIdentity,
        port: int,
        method: str,
        path: str,
    ) -> HttpReply:
        """
        Send one HTTP request to a port inside the pod over a port-forward.

        The tunnel is opened for this single request/response exchange and
        closed before returning, on every exit path.

        Args:
            pod: Target pod
            port: Pod port to forward
            method: HTTP method
            path: Request target

        Returns:
            Status code and body of the response

        Raises:
            TunnelError: If the tunnel cannot be opened or the exchange fails
        """
        pass
