"""
Action Registry

Maps sidecar container names to the action that politely asks that
sidecar to stop. Adding or changing a sidecar's shutdown behaviour means
editing DEFAULT_ACTIONS.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from hahaha.domain.value_objects import CommandExec, HttpSignal, ShutdownAction


DEFAULT_ACTIONS: Tuple[Tuple[str, ShutdownAction], ...] = (
    ("cloudsql-proxy", HttpSignal(method="POST", path="/quitquitquit", port=9091)),
    ("vks-sidecar", CommandExec.from_string("/bin/kill -s INT 1")),
    ("istio-proxy", HttpSignal(method="POST", path="/quitquitquit", port=15000)),
    ("linkerd-proxy", HttpSignal(method="POST", path="/shutdown", port=4191)),
)


class ActionRegistry:
    """
    Immutable mapping from sidecar container name to shutdown action.

    Built once at startup and shared read-only by every reconciliation pass.
    """

    def __init__(self, entries: Iterable[Tuple[str, ShutdownAction]]):
        actions = {}
        for name, action in entries:
            if name in actions:
                raise ValueError(f"Duplicate shutdown action for sidecar {name!r}")
            actions[name] = action
        self._actions: Mapping[str, ShutdownAction] = MappingProxyType(actions)

    @classmethod
    def default(cls) -> "ActionRegistry":
        """Registry of every sidecar this controller knows how to shut down."""
        return cls(DEFAULT_ACTIONS)

    def lookup(self, name: str) -> Optional[ShutdownAction]:
        return self._actions.get(name)

    def as_mapping(self) -> Mapping[str, ShutdownAction]:
        return self._actions

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)

    def __repr__(self) -> str:
        return f"ActionRegistry({sorted(self._actions)})"
