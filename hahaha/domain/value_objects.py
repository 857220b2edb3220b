"""
Sidecar Shutdown Value Objects

Immutable value objects describing observed pods, the shutdown actions
known for platform-injected sidecars, and the outcome of a shutdown attempt.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class ContainerState(str, Enum):
    """Run state of a container as reported in the pod status."""

    RUNNING = "running"
    TERMINATED = "terminated"
    WAITING = "waiting"
    UNKNOWN = "unknown"


class OutcomeKind(str, Enum):
    """Classification of a single sidecar shutdown attempt."""

    SUCCESS = "success"
    TRANSPORT_FAILURE = "transport_failure"
    UNRECOGNIZED_SIDECAR = "unrecognized_sidecar"


class EventType(str, Enum):
    """Audit event severity, matching the Kubernetes event types."""

    NORMAL = "Normal"
    WARNING = "Warning"


@dataclass(frozen=True)
class CommandExec:
    """
    Shutdown by running a command inside the sidecar container.

    The command's own exit status is never inspected: a signal that kills
    the container's main process usually tears down the exec session too.

    Attributes:
        command: Command line tokens, e.g. ("/bin/kill", "-s", "INT", "1")
    """

    command: Tuple[str, ...]

    def __post_init__(self):
        if not self.command:
            raise ValueError("command must contain at least one token")
        # Accept any sequence but store a tuple so the action stays hashable
        object.__setattr__(self, "command", tuple(self.command))

    @classmethod
    def from_string(cls, command_line: str) -> "CommandExec":
        """Build an action from a space separated command line."""
        return cls(command=tuple(command_line.split(" ")))

    def describe(self) -> str:
        return " ".join(self.command)


@dataclass(frozen=True)
class HttpSignal:
    """
    Shutdown by calling a local HTTP control endpoint of the sidecar.

    The request is sent through a port-forward tunnel to ``port`` inside
    the pod's network namespace.

    Attributes:
        method: HTTP verb, stored upper-case
        path: Request target, must start with '/'
        port: Container port of the control endpoint (1-65535)
    """

    method: str
    path: str
    port: int

    def __post_init__(self):
        if not self.method or not self.method.isalpha():
            raise ValueError(f"Invalid HTTP method: {self.method!r}")
        if not self.path.startswith("/"):
            raise ValueError(f"Path must start with '/': {self.path!r}")
        if not 0 < self.port <= 65535:
            raise ValueError(f"Port out of range: {self.port}")
        object.__setattr__(self, "method", self.method.upper())

    def describe(self) -> str:
        return f"{self.method} {self.path} at port {self.port}"


ShutdownAction = Union[CommandExec, HttpSignal]


@dataclass(frozen=True)
class ContainerStatus:
    """Name and run state of one container in a pod."""

    name: str
    state: ContainerState

    @property
    def is_running(self) -> bool:
        return self.state == ContainerState.RUNNING


@dataclass(frozen=True)
class OwnerReference:
    """Owning object of a pod (e.g. the Job that created it)."""

    kind: str
    name: str
    controller: bool = False


@dataclass(frozen=True)
class PodIdentity:
    """
    Identity of a pod, enough to address it for exec, port-forward
    and event publishing.
    """

    name: str
    namespace: str
    uid: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class PodSnapshot:
    """
    View of one pod at a point in time, as delivered by the watch stream.

    Attributes:
        name: Pod name
        namespace: Pod namespace, None when the API object carries none
        uid: Pod UID
        labels: Pod labels
        owner_references: Owning workloads
        container_statuses: Container statuses in pod-reported order
    """

    name: str
    namespace: Optional[str] = None
    uid: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    owner_references: Tuple[OwnerReference, ...] = ()
    container_statuses: Tuple[ContainerStatus, ...] = ()


@dataclass(frozen=True)
class SidecarCandidate:
    """A running container of a pod that may be a known sidecar."""

    name: str


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of one shutdown attempt for one sidecar.

    Consumed immediately by the outcome reporter, never persisted.
    """

    kind: OutcomeKind
    detail: Optional[str] = None

    @classmethod
    def success(cls) -> "DispatchOutcome":
        return cls(kind=OutcomeKind.SUCCESS)

    @classmethod
    def transport_failure(cls, detail: str) -> "DispatchOutcome":
        return cls(kind=OutcomeKind.TRANSPORT_FAILURE, detail=detail)

    @classmethod
    def unrecognized_sidecar(cls) -> "DispatchOutcome":
        return cls(kind=OutcomeKind.UNRECOGNIZED_SIDECAR)

    @property
    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS


@dataclass(frozen=True)
class HttpReply:
    """Status code and body of the response from a sidecar control endpoint."""

    status: int
    body: str = ""
