"""
Kubernetes event recorder

Implements IEventPort by posting core/v1 Events that reference the pod.
"""
import asyncio
from datetime import datetime, timezone

from kubernetes import client
from kubernetes.client import CoreV1Event, V1EventSource, V1ObjectMeta, V1ObjectReference
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from hahaha.domain.ports import IEventPort
from hahaha.domain.value_objects import EventType, PodIdentity
from hahaha.shared.errors import EventPublishError


class KubernetesEventRecorder(IEventPort):
    """
    Publishes audit events to the pod's namespace.

    Attributes:
        controller: Reporting component name (source.component)
        instance: Reporting instance, usually the hostname of this process
    """

    def __init__(
        self,
        core_v1: client.CoreV1Api,
        controller: str = "hahaha",
        instance: str = "unknown",
    ):
        self._core_v1 = core_v1
        self.controller = controller
        self.instance = instance

    def build_event(
        self,
        pod: PodIdentity,
        event_type: EventType,
        reason: str,
        message: str,
    ) -> CoreV1Event:
        now = datetime.now(timezone.utc)
        return CoreV1Event(
            metadata=V1ObjectMeta(generate_name=f"{pod.name}.", namespace=pod.namespace),
            involved_object=V1ObjectReference(
                api_version="v1",
                kind="Pod",
                name=pod.name,
                namespace=pod.namespace,
                uid=pod.uid,
            ),
            type=event_type.value,
            reason=reason,
            action=reason,
            message=message,
            source=V1EventSource(component=self.controller, host=self.instance),
            reporting_component=self.controller,
            reporting_instance=self.instance,
            first_timestamp=now,
            last_timestamp=now,
            count=1,
        )

    async def publish(
        self,
        pod: PodIdentity,
        event_type: EventType,
        reason: str,
        message: str,
    ) -> None:
        body = self.build_event(pod, event_type, reason, message)
        try:
            await asyncio.to_thread(
                self._core_v1.create_namespaced_event,
                namespace=pod.namespace,
                body=body,
            )
        except (ApiException, HTTPError) as e:
            raise EventPublishError(
                f"Failed to post {event_type.value} event for {pod}: {e}",
                original_error=e,
            ) from e
