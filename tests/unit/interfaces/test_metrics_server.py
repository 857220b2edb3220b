"""
Unit tests for the metrics endpoint.
"""

import asyncio
import socket

import httpx
import pytest
from fastapi.testclient import TestClient

from hahaha.interfaces.http.metrics_server import MetricsServer, create_app


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestMetricsApp:
    """Tests for the FastAPI application."""

    @pytest.fixture
    def client(self, metrics):
        return TestClient(create_app(metrics))

    def test_metrics_path(self, client, metrics):
        metrics.record_shutdown("istio-proxy", "job-7", "team-a")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'hahaha_sidecar_shutdowns{container="istio-proxy",job_name="job-7",namespace="team-a"} 1.0' in response.text

    @pytest.mark.parametrize("path", ["/", "/healthz", "/some/nested/path"])
    def test_any_path_serves_metrics(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert "hahaha_total_unsuccessful_event_posts" in response.text

    def test_reflects_later_increments(self, client, metrics):
        client.get("/metrics")
        metrics.record_failed_event_post()

        assert "hahaha_total_unsuccessful_event_posts 1.0" in client.get("/metrics").text


class TestMetricsServer:
    """Tests for serving with uvicorn."""

    @pytest.mark.asyncio
    async def test_serve_until_shutdown(self, metrics):
        """Test that the server answers while running and returns once shutdown is set."""
        server = MetricsServer(metrics, host="127.0.0.1", port=free_port())
        shutdown = asyncio.Event()
        task = asyncio.create_task(server.serve(shutdown))

        for _ in range(100):
            if server.started:
                break
            await asyncio.sleep(0.05)
        assert server.started

        metrics.record_unsupported_sidecar("sidecar-x", "job-7", "team-a")
        for _ in range(7):
            metrics.record_failed_event_post()
        async with httpx.AsyncClient() as client:
            response = await client.get(f"http://127.0.0.1:{server.port}/metrics")

        assert response.status_code == 200
        assert 'hahaha_unsupported_sidecars{container="sidecar-x"' in response.text
        assert "\nhahaha_total_unsuccessful_event_posts 7.0\n" in response.text

        shutdown.set()
        await asyncio.wait_for(task, timeout=5)
        assert task.done()
