"""
Kubernetes pod watcher

Implements IPodWatchPort on top of kubernetes.watch. Each watch request
ends after ``timeout_seconds``; the watcher then re-opens it from the last
seen resourceVersion, so callers see one continuous stream.
"""
import asyncio
from typing import AsyncIterator, Optional

from kubernetes import client, watch
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from hahaha.domain.ports import IPodWatchPort
from hahaha.domain.value_objects import PodSnapshot
from hahaha.infrastructure.kubernetes.converters import snapshot_from_pod
from hahaha.infrastructure.logging import get_logger
from hahaha.shared.errors import WatchError

logger = get_logger(__name__)

# Watch event types carrying the current state of a pod
APPLIED_EVENT_TYPES = ("ADDED", "MODIFIED")

# Sentinel returned by next() when a watch request has ended
_END = object()


class KubernetesPodWatcher(IPodWatchPort):
    """Streams applied pod states for all namespaces, filtered by label selector."""

    def __init__(
        self,
        core_v1: client.CoreV1Api,
        label_selector: str,
        timeout_seconds: int = 20,
    ):
        self._core_v1 = core_v1
        self.label_selector = label_selector
        self.timeout_seconds = timeout_seconds
        self._watch: Optional[watch.Watch] = None
        self._stop_event = asyncio.Event()

    def stop(self) -> None:
        """
        End the snapshot stream.

        The stream ends at once, but the worker thread blocked in the open
        watch request only exits when that request times out, so process
        shutdown can wait up to ``timeout_seconds`` for it.
        """
        self._stop_event.set()
        if self._watch is not None:
            self._watch.stop()

    async def snapshots(self) -> AsyncIterator[PodSnapshot]:
        resource_version: Optional[str] = None

        while not self._stop_event.is_set():
            self._watch = watch.Watch()
            kwargs = {
                "label_selector": self.label_selector,
                "timeout_seconds": self.timeout_seconds,
            }
            if resource_version:
                kwargs["resource_version"] = resource_version
            events = self._watch.stream(self._core_v1.list_pod_for_all_namespaces, **kwargs)

            logger.debug(
                "Watching pods",
                label_selector=self.label_selector,
                resource_version=resource_version,
            )

            while True:
                try:
                    event = await self._next_event(events)
                except ApiException as e:
                    if e.status == 410:
                        # History expired, start over from a fresh list
                        logger.info("Watch expired, restarting", reason=e.reason)
                        resource_version = None
                        break
                    raise WatchError(f"Pod watch failed: {e}", original_error=e) from e
                except HTTPError as e:
                    raise WatchError(f"Pod watch failed: {e}", original_error=e) from e

                if event is _END:
                    break

                event_type = event["type"]
                if event_type == "ERROR":
                    raw = event.get("raw_object") or {}
                    if raw.get("code") == 410:
                        logger.info("Watch expired, restarting", reason=raw.get("message"))
                        resource_version = None
                        break
                    raise WatchError(f"Pod watch failed: {raw.get('reason')}: {raw.get('message')}")

                pod = event["object"]
                resource_version = pod.metadata.resource_version or resource_version
                if event_type in APPLIED_EVENT_TYPES:
                    yield snapshot_from_pod(pod)

    async def _next_event(self, events):
        """
        Wait for the next watch event without blocking the event loop.

        Returns _END when the watch request finished or stop() was called.
        """
        if self._stop_event.is_set():
            return _END

        next_event = asyncio.ensure_future(asyncio.to_thread(next, events, _END))
        stopped = asyncio.ensure_future(self._stop_event.wait())
        done, _ = await asyncio.wait({next_event, stopped}, return_when=asyncio.FIRST_COMPLETED)

        if next_event in done:
            stopped.cancel()
            return next_event.result()

        # The worker thread finishes on its own once the request times out
        next_event.add_done_callback(_discard_result)
        return _END


def _discard_result(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()
