"""
Unit tests for sidecar extraction and label derivation.
"""

from hahaha.domain.sidecars import (
    extract_running_sidecars,
    resolve_namespace,
    resolve_workload,
)
from hahaha.domain.value_objects import (
    ContainerState,
    ContainerStatus,
    OwnerReference,
    PodSnapshot,
)
from tests.helpers import make_pod


class TestExtractRunningSidecars:
    """Tests for extract_running_sidecars."""

    def test_only_running_containers(self):
        """Test that terminated and waiting containers are dropped."""
        pod = PodSnapshot(
            name="job-7",
            container_statuses=(
                ContainerStatus("main", ContainerState.TERMINATED),
                ContainerStatus("istio-proxy", ContainerState.RUNNING),
                ContainerStatus("init-ish", ContainerState.WAITING),
                ContainerStatus("cloudsql-proxy", ContainerState.RUNNING),
            ),
        )

        names = [c.name for c in extract_running_sidecars(pod)]

        assert names == ["istio-proxy", "cloudsql-proxy"]

    def test_unknown_names_are_kept(self):
        """Test that extraction does not consult the registry."""
        pod = make_pod(running=("unknown-sidecar",))

        assert [c.name for c in extract_running_sidecars(pod)] == ["unknown-sidecar"]

    def test_no_running_containers(self):
        pod = make_pod(running=(), terminated=("main", "istio-proxy"))

        assert extract_running_sidecars(pod) == []

    def test_no_statuses(self):
        assert extract_running_sidecars(PodSnapshot(name="pending")) == []


class TestResolveNamespace:
    """Tests for resolve_namespace."""

    def test_pod_namespace(self):
        assert resolve_namespace(make_pod(namespace="team-a"), "default") == "team-a"

    def test_default_namespace(self):
        assert resolve_namespace(make_pod(namespace=None), "default") == "default"


class TestResolveWorkload:
    """Tests for resolve_workload."""

    def test_job_owner(self):
        assert resolve_workload(make_pod(job="job-7")) == "job-7"

    def test_controller_owner_preferred(self):
        """Test that the controlling owner wins over other owners."""
        pod = PodSnapshot(
            name="p",
            owner_references=(
                OwnerReference(kind="Job", name="not-controller"),
                OwnerReference(kind="Job", name="controller", controller=True),
            ),
        )

        assert resolve_workload(pod) == "controller"

    def test_non_workload_owners_ignored(self):
        """Test that owners of other kinds fall through to the app label."""
        pod = PodSnapshot(
            name="p",
            labels={"app": "my-app"},
            owner_references=(OwnerReference(kind="ReplicaSet", name="rs-1", controller=True),),
        )

        assert resolve_workload(pod) == "my-app"

    def test_app_label_fallback(self):
        assert resolve_workload(make_pod(job=None, labels={"app": "batch"})) == "batch"

    def test_no_workload(self):
        assert resolve_workload(make_pod(job=None)) is None
