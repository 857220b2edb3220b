"""
Action Dispatcher

Runs a sidecar's shutdown action against the live pod and classifies
the result. One attempt per call, no retries: the next watch update for
the same pod re-triggers dispatch if the sidecar is still running.
"""

import structlog

from hahaha.domain.ports import IPodPort
from hahaha.domain.value_objects import (
    CommandExec,
    DispatchOutcome,
    HttpSignal,
    PodIdentity,
    ShutdownAction,
)


logger = structlog.get_logger(__name__)

HTTP_OK = 200


class ActionDispatcher:
    """
    Executes CommandExec and HttpSignal actions through the pod port.

    dispatch() never raises: every transport error becomes a
    TransportFailure outcome carrying the error as detail.
    """

    def __init__(self, pod_port: IPodPort):
        """
        Initialize dispatcher.

        Args:
            pod_port: Port for exec and port-forward calls into pods
        """
        self._pod_port = pod_port

    async def dispatch(
        self,
        action: ShutdownAction,
        pod: PodIdentity,
        container: str,
    ) -> DispatchOutcome:
        """
        Ask one sidecar to shut down.

        Args:
            action: Shutdown action looked up for the container
            pod: Pod hosting the sidecar
            container: Sidecar container name

        Returns:
            Success or TransportFailure
        """
        if isinstance(action, CommandExec):
            return await self._dispatch_exec(action, pod, container)
        if isinstance(action, HttpSignal):
            return await self._dispatch_http(action, pod, container)
        raise TypeError(f"Unsupported shutdown action: {action!r}")

    async def _dispatch_exec(
        self,
        action: CommandExec,
        pod: PodIdentity,
        container: str,
    ) -> DispatchOutcome:
        try:
            await self._pod_port.exec_command(pod, container, action.command)
        except Exception as e:
            logger.error(
                "Failed to exec into container",
                pod=pod.name,
                namespace=pod.namespace,
                container=container,
                error=str(e),
            )
            return DispatchOutcome.transport_failure(str(e))

        logger.info(
            "Sent command",
            command=action.describe(),
            pod=pod.name,
            namespace=pod.namespace,
            container=container,
        )
        return DispatchOutcome.success()

    async def _dispatch_http(
        self,
        action: HttpSignal,
        pod: PodIdentity,
        container: str,
    ) -> DispatchOutcome:
        try:
            reply = await self._pod_port.send_http_request(
                pod, action.port, action.method, action.path
            )
        except Exception as e:
            logger.error(
                "Failed to send HTTP signal",
                signal=action.describe(),
                pod=pod.name,
                namespace=pod.namespace,
                container=container,
                error=str(e),
            )
            return DispatchOutcome.transport_failure(str(e))

        if reply.status != HTTP_OK:
            detail = f"HTTP request failed: code {reply.status}: {reply.body}"
            logger.error(
                "HTTP signal rejected",
                signal=action.describe(),
                pod=pod.name,
                namespace=pod.namespace,
                container=container,
                status=reply.status,
                body=reply.body,
            )
            return DispatchOutcome.transport_failure(detail)

        logger.info(
            "Sent HTTP signal",
            signal=action.describe(),
            pod=pod.name,
            namespace=pod.namespace,
            container=container,
        )
        return DispatchOutcome.success()
