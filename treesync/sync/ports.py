"""Output ports and parser hooks used by the sync orchestrator.

The orchestrator publishes three observable values: parsed entries, parsed
assets, and a load-complete flag. Hosts inject the ports; nothing is stored in
module-level state.

Usage
-----
>>> outputs = SyncOutputs.in_memory()
>>> outputs.loaded.publish(True)
>>> outputs.loaded.value
True

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from treesync.files.models import ClassifiedFile

T = typ.TypeVar("T")

FileParser: typ.TypeAlias = cabc.Callable[
    [list["ClassifiedFile"]], cabc.Sequence[object]
]


@typ.runtime_checkable
class OutputPort(typ.Protocol[T]):
    """Sink for one observable value."""

    def publish(self, value: T) -> None:
        """Replace the observed value with ``value``."""
        ...


class ValuePort(typ.Generic[T]):
    """In-memory output port remembering every published value."""

    def __init__(self, initial: T | None = None) -> None:
        """Start with ``initial`` as the current value."""
        self.value: T | None = initial
        self.history: list[T] = []

    def publish(self, value: T) -> None:
        """Record ``value`` and make it current."""
        self.value = value
        self.history.append(value)


@dc.dataclass(frozen=True, slots=True)
class SyncOutputs:
    """The three ports a sync publishes to."""

    entries: OutputPort[list[object]]
    assets: OutputPort[list[object]]
    loaded: OutputPort[bool]

    @classmethod
    def in_memory(cls) -> SyncOutputs:
        """Return outputs backed by fresh :class:`ValuePort` instances."""
        return cls(entries=ValuePort(), assets=ValuePort(), loaded=ValuePort(False))


def passthrough_parser(files: list[ClassifiedFile]) -> list[object]:
    """Return the classified files unchanged."""
    return list(files)


__all__ = [
    "FileParser",
    "OutputPort",
    "SyncOutputs",
    "ValuePort",
    "passthrough_parser",
]
