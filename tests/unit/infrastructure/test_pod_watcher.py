"""
Unit tests for KubernetesPodWatcher.

kubernetes.watch.Watch is patched; each call to stream() hands out the
next scripted watch request.
"""

import asyncio
import threading
from unittest.mock import Mock, patch

import pytest
from kubernetes.client.rest import ApiException

from hahaha.infrastructure.kubernetes.pod_watcher import KubernetesPodWatcher
from hahaha.shared.errors import WatchError
from tests.unit.infrastructure.k8s_objects import make_v1_pod, running


WATCH = "hahaha.infrastructure.kubernetes.pod_watcher.watch.Watch"


def watch_request(events, error=None):
    """One watch request: yields events, then ends or fails with ``error``."""
    yield from events
    if error is not None:
        raise error


def event(event_type, name="job-7-abcde", resource_version="100"):
    pod = make_v1_pod(name=name, resource_version=resource_version, statuses=[running("istio-proxy")])
    return {"type": event_type, "object": pod, "raw_object": {}}


async def collect(watcher):
    names = []
    async for snapshot in watcher.snapshots():
        names.append(snapshot.name)
    return names


@pytest.fixture
def mock_core_v1():
    return Mock()


@pytest.fixture
def watcher(mock_core_v1):
    return KubernetesPodWatcher(mock_core_v1, label_selector="nais.io/ginuudan=enabled", timeout_seconds=5)


class TestSnapshots:
    """Tests for the snapshot stream."""

    @pytest.mark.asyncio
    async def test_applied_events_are_yielded(self, watcher, mock_core_v1):
        """Test that ADDED and MODIFIED are delivered and DELETED is skipped."""
        fatal = ApiException(status=500, reason="Internal Server Error")
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [
                watch_request(
                    [event("ADDED", "a"), event("DELETED", "b"), event("MODIFIED", "c")],
                    error=fatal,
                ),
            ]
            names = []
            with pytest.raises(WatchError):
                async for snapshot in watcher.snapshots():
                    names.append(snapshot.name)

        assert names == ["a", "c"]
        mock_watch.return_value.stream.assert_called_once_with(
            mock_core_v1.list_pod_for_all_namespaces,
            label_selector="nais.io/ginuudan=enabled",
            timeout_seconds=5,
        )

    @pytest.mark.asyncio
    async def test_resumes_from_last_resource_version(self, watcher, mock_core_v1):
        """Test that a timed out request is re-opened where it left off."""
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [
                watch_request([event("ADDED", "a", resource_version="101")]),
                watch_request([], error=ApiException(status=500, reason="boom")),
            ]
            with pytest.raises(WatchError):
                await collect(watcher)

        second = mock_watch.return_value.stream.call_args_list[1]
        assert second.kwargs["resource_version"] == "101"

    @pytest.mark.asyncio
    async def test_expired_watch_restarts_from_fresh_list(self, watcher):
        """Test that 410 Gone restarts the watch without a resource version."""
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [
                watch_request([event("ADDED", "a", resource_version="101")], error=ApiException(status=410, reason="Gone")),
                watch_request([event("ADDED", "b")], error=ApiException(status=500, reason="boom")),
            ]
            names = []
            with pytest.raises(WatchError):
                async for snapshot in watcher.snapshots():
                    names.append(snapshot.name)

        assert names == ["a", "b"]
        second = mock_watch.return_value.stream.call_args_list[1]
        assert "resource_version" not in second.kwargs

    @pytest.mark.asyncio
    async def test_expired_error_event_restarts(self, watcher):
        expired = {"type": "ERROR", "object": None, "raw_object": {"code": 410, "message": "too old resource version"}}
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [
                watch_request([expired]),
                watch_request([], error=ApiException(status=500, reason="boom")),
            ]
            with pytest.raises(WatchError):
                await collect(watcher)

        assert mock_watch.return_value.stream.call_count == 2

    @pytest.mark.asyncio
    async def test_error_event_fails_watch(self, watcher):
        failed = {"type": "ERROR", "object": None, "raw_object": {"code": 403, "reason": "Forbidden", "message": "no list"}}
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [watch_request([failed])]
            with pytest.raises(WatchError, match="Forbidden"):
                await collect(watcher)

    @pytest.mark.asyncio
    async def test_api_error_keeps_original(self, watcher):
        error = ApiException(status=401, reason="Unauthorized")
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [watch_request([], error=error)]
            with pytest.raises(WatchError) as exc_info:
                await collect(watcher)

        assert exc_info.value.original_error is error


class TestStop:
    """Tests for stop."""

    @pytest.mark.asyncio
    async def test_stop_before_start(self, watcher):
        watcher.stop()

        with patch(WATCH) as mock_watch:
            names = await collect(watcher)

        assert names == []
        mock_watch.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_while_consuming(self, watcher):
        """Test that the stream ends after stop() and the watch is stopped."""
        with patch(WATCH) as mock_watch:
            mock_watch.return_value.stream.side_effect = [
                watch_request([event("ADDED", "a"), event("ADDED", "b")]),
            ]
            names = []
            async for snapshot in watcher.snapshots():
                names.append(snapshot.name)
                watcher.stop()

        assert names == ["a"]
        mock_watch.return_value.stop.assert_called_once()

    @pytest.mark.asyncio
    async def test_stop_does_not_wait_for_open_request(self, watcher):
        """Test that the stream ends on stop() while a watch request is still blocked."""
        release = threading.Event()

        def blocked_request():
            release.wait(5)
            return
            yield

        try:
            with patch(WATCH) as mock_watch:
                mock_watch.return_value.stream.side_effect = [blocked_request()]
                consumer = asyncio.create_task(collect(watcher))
                await asyncio.sleep(0.1)
                watcher.stop()
                names = await asyncio.wait_for(consumer, timeout=1)
        finally:
            release.set()

        assert names == []
