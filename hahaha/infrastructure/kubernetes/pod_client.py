"""
Kubernetes pod client

Implements IPodPort with the exec and port-forward subresources of the
official kubernetes client. The client is synchronous, so every call runs
in a worker thread.
"""
import asyncio
from typing import Sequence

from kubernetes import client
from kubernetes.client.rest import ApiException
from kubernetes.stream import portforward, stream
from websocket import WebSocketException

from hahaha.domain.ports import IPodPort
from hahaha.domain.value_objects import HttpReply, PodIdentity
from hahaha.infrastructure.http import HTTP_EXCHANGE_ERRORS, send_request
from hahaha.infrastructure.logging import get_logger
from hahaha.shared.errors import ExecError, TunnelError

logger = get_logger(__name__)

# Errors raised while upgrading to, or talking over, a streaming connection
STREAM_ERRORS = (ApiException, WebSocketException, OSError)


class KubernetesPodClient(IPodPort):
    """
    Exec and port-forward into pods through the Kubernetes API.

    Every call is a single attempt; failures are raised as ExecError or
    TunnelError. An exec session still open after ``request_timeout`` is
    abandoned and counts as delivered, since its exit status is never read.
    """

    def __init__(
        self,
        core_v1: client.CoreV1Api,
        http_timeout: float = 10.0,
        request_timeout: float = 30.0,
    ):
        """
        Args:
            core_v1: Kubernetes CoreV1Api client
            http_timeout: Read/write timeout for the HTTP exchange over a tunnel
            request_timeout: Deadline for an exec session and for opening a tunnel
        """
        self._core_v1 = core_v1
        self._http_timeout = http_timeout
        self._request_timeout = request_timeout

    async def exec_command(
        self,
        pod: PodIdentity,
        container: str,
        command: Sequence[str],
    ) -> None:
        try:
            await asyncio.to_thread(
                stream,
                self._core_v1.connect_get_namespaced_pod_exec,
                pod.name,
                pod.namespace,
                container=container,
                command=list(command),
                stderr=True,
                stdin=False,
                stdout=False,
                tty=False,
                _request_timeout=self._request_timeout,
            )
        except STREAM_ERRORS as e:
            raise ExecError(
                f"exec into {container}@{pod.name} failed: {e}",
                original_error=e,
            ) from e

    async def send_http_request(
        self,
        pod: PodIdentity,
        port: int,
        method: str,
        path: str,
    ) -> HttpReply:
        return await asyncio.to_thread(self._forward_and_send, pod, port, method, path)

    def _forward_and_send(
        self,
        pod: PodIdentity,
        port: int,
        method: str,
        path: str,
    ) -> HttpReply:
        """Open a tunnel, do one exchange over it, and always close it."""
        try:
            forward = portforward(
                self._core_v1.connect_get_namespaced_pod_portforward,
                pod.name,
                pod.namespace,
                ports=str(port),
                _request_timeout=self._request_timeout,
            )
        except STREAM_ERRORS as e:
            raise TunnelError(
                f"port-forward to {pod}:{port} failed: {e}",
                original_error=e,
            ) from e

        try:
            return send_request(
                forward.socket(port),
                port,
                method,
                path,
                timeout=self._http_timeout,
            )
        except HTTP_EXCHANGE_ERRORS as e:
            message = f"{method} {path} to {pod}:{port} failed: {e}"
            forward_error = forward.error(port)
            if forward_error:
                message += f" (port-forward: {forward_error})"
            raise TunnelError(message, original_error=e) from e
        finally:
            forward.close()
            logger.debug("Closed port-forward", pod=str(pod), port=port)
