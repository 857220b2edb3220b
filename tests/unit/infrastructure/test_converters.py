"""
Unit tests for the V1Pod to PodSnapshot conversion.
"""

from kubernetes.client import V1ContainerState, V1ObjectMeta, V1Pod

from hahaha.domain.value_objects import ContainerState, OwnerReference
from hahaha.infrastructure.kubernetes.converters import container_state, snapshot_from_pod
from tests.unit.infrastructure.k8s_objects import (
    container_status,
    job_owner,
    make_v1_pod,
    running,
    terminated,
    waiting,
)


class TestContainerState:
    """Tests for container_state."""

    def test_states(self):
        assert container_state(running("a")) == ContainerState.RUNNING
        assert container_state(terminated("a")) == ContainerState.TERMINATED
        assert container_state(waiting("a")) == ContainerState.WAITING

    def test_empty_state_is_unknown(self):
        assert container_state(container_status("a", V1ContainerState())) == ContainerState.UNKNOWN

    def test_missing_state_is_unknown(self):
        status = running("a")
        status.state = None
        assert container_state(status) == ContainerState.UNKNOWN


class TestSnapshotFromPod:
    """Tests for snapshot_from_pod."""

    def test_full_pod(self):
        pod = make_v1_pod(
            statuses=[terminated("main"), running("istio-proxy")],
            owners=[job_owner("job-7")],
            labels={"app": "job-7"},
        )

        snapshot = snapshot_from_pod(pod)

        assert snapshot.name == "job-7-abcde"
        assert snapshot.namespace == "team-a"
        assert snapshot.uid == "uid-job-7-abcde"
        assert snapshot.labels == {"app": "job-7"}
        assert snapshot.owner_references == (OwnerReference(kind="Job", name="job-7", controller=True),)
        assert [(s.name, s.state) for s in snapshot.container_statuses] == [
            ("main", ContainerState.TERMINATED),
            ("istio-proxy", ContainerState.RUNNING),
        ]

    def test_pod_without_status(self):
        """Test that a pod that was never scheduled has no container statuses."""
        pod = V1Pod(metadata=V1ObjectMeta(name="job-7-abcde", namespace="team-a"))

        snapshot = snapshot_from_pod(pod)

        assert snapshot.container_statuses == ()
        assert snapshot.labels == {}
        assert snapshot.owner_references == ()

    def test_missing_namespace_is_kept_empty(self):
        pod = make_v1_pod(namespace=None, statuses=[running("istio-proxy")])

        snapshot = snapshot_from_pod(pod)

        assert snapshot.namespace is None
