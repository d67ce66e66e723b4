"""
Step snapshots — the trace contract handed to the renderer.

Every tracer run produces a StepSequence: an ordered, immutable list of
steps.  Each step is a frozen dataclass whose class is selected by its
tag, so a consumer can ``match`` on the step type and get the fields
that belong to that tag:

    show-edges       ShowEdgesStep        edges listed once for display
    init             InitStep             source set to 0
    extract          ExtractStep          node moved to the permanent set
    update           UpdateStep           edge relaxed, distance improved
    no-update        NoUpdateStep         edge inspected, nothing changed
    skip             SkipStep             edge source still unreached
    iteration-start  IterationStartStep   Bellman-Ford pass begins
    iteration-end    IterationEndStep     Bellman-Ford pass ends
    negative-cycle   NegativeCycleStep    terminal: a cycle is reachable
    complete         CompleteStep         terminal: path reconstructed

Distance and predecessor maps are copied when a step is built and
wrapped read-only, so no step shares state with the running tracer or
with any other step.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, ClassVar, Iterator, Literal, Mapping, NamedTuple, Union, overload

from app.core.graph import Edge, EdgeKey
from app.core.state import Distance

StepTag = Literal[
    "show-edges",
    "init",
    "extract",
    "update",
    "no-update",
    "skip",
    "iteration-start",
    "iteration-end",
    "negative-cycle",
    "complete",
]

TERMINAL_TAGS: frozenset[str] = frozenset({"complete", "negative-cycle"})


class Entry(NamedTuple):
    """A (node, distance) pair in the permanent or tentative set."""

    node: str
    distance: Distance


# ── Base ───────────────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class BaseStep:
    """
    Fields shared by every step.

    Attributes
    ----------
    distances : read-only DistanceMap at emission time (None = unreached)
    previous : read-only PreviousMap at emission time
    active_edges : (source, target) pairs the renderer should highlight
    message : human-readable description of the transition
    """

    tag: ClassVar[StepTag]

    distances: Mapping[str, Distance]
    previous: Mapping[str, str | None]
    active_edges: tuple[EdgeKey, ...] = ()
    message: str = ""

    def __post_init__(self) -> None:
        # Copy-on-emit: never keep a reference to the caller's maps.
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))
        object.__setattr__(self, "previous", MappingProxyType(dict(self.previous)))
        object.__setattr__(self, "active_edges", tuple(self.active_edges))

    @property
    def is_terminal(self) -> bool:
        return self.tag in TERMINAL_TAGS

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys; unreached distances become null."""
        data: dict[str, Any] = {"tag": self.tag}
        for f in fields(self):
            data[_camel(f.name)] = _jsonable(getattr(self, f.name))
        return data


# ── Shared by both algorithms ──────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class InitStep(BaseStep):
    """Source distance set to 0.  Dijkstra fills the sets, Bellman-Ford the iteration."""

    tag: ClassVar[StepTag] = "init"

    current: str | None = None
    permanent: tuple[Entry, ...] | None = None
    tentative: tuple[Entry, ...] | None = None
    iteration: int | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateStep(BaseStep):
    tag: ClassVar[StepTag] = "update"

    updated: str
    previous_distance: Distance = None
    # Dijkstra context
    current: str | None = None
    permanent: tuple[Entry, ...] | None = None
    tentative: tuple[Entry, ...] | None = None
    # Bellman-Ford context
    iteration: int | None = None
    edge: Edge | None = None
    edge_number: int | None = None


@dataclass(frozen=True, kw_only=True)
class NoUpdateStep(BaseStep):
    tag: ClassVar[StepTag] = "no-update"

    target: str
    candidate: int
    # Dijkstra context
    current: str | None = None
    permanent: tuple[Entry, ...] | None = None
    tentative: tuple[Entry, ...] | None = None
    # Bellman-Ford context
    iteration: int | None = None
    edge: Edge | None = None
    edge_number: int | None = None


@dataclass(frozen=True, kw_only=True)
class CompleteStep(BaseStep):
    """Terminal step: reconstructed path (empty when unreachable)."""

    tag: ClassVar[StepTag] = "complete"

    path: tuple[str, ...] = ()
    distance: Distance = None
    permanent: tuple[Entry, ...] | None = None
    tentative: tuple[Entry, ...] | None = None


# ── Dijkstra only ──────────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class ExtractStep(BaseStep):
    tag: ClassVar[StepTag] = "extract"

    current: str
    permanent: tuple[Entry, ...] = ()
    tentative: tuple[Entry, ...] = ()
    neighbors: tuple[str, ...] = ()


# ── Bellman-Ford only ──────────────────────────────────────────────

@dataclass(frozen=True, kw_only=True)
class ShowEdgesStep(BaseStep):
    tag: ClassVar[StepTag] = "show-edges"

    iteration: int = 0
    edges: tuple[Edge, ...] = ()


@dataclass(frozen=True, kw_only=True)
class SkipStep(BaseStep):
    tag: ClassVar[StepTag] = "skip"

    iteration: int
    edge: Edge
    edge_number: int


@dataclass(frozen=True, kw_only=True)
class IterationStartStep(BaseStep):
    tag: ClassVar[StepTag] = "iteration-start"

    iteration: int


@dataclass(frozen=True, kw_only=True)
class IterationEndStep(BaseStep):
    tag: ClassVar[StepTag] = "iteration-end"

    iteration: int
    updated: bool


@dataclass(frozen=True, kw_only=True)
class NegativeCycleStep(BaseStep):
    """Terminal step: distances and path are undefined past this point."""

    tag: ClassVar[StepTag] = "negative-cycle"

    edge: Edge
    cycle: tuple[str, ...] = ()


Step = Union[
    ShowEdgesStep,
    InitStep,
    ExtractStep,
    UpdateStep,
    NoUpdateStep,
    SkipStep,
    IterationStartStep,
    IterationEndStep,
    NegativeCycleStep,
    CompleteStep,
]


# ── Sequence ───────────────────────────────────────────────────────

class StepSequence(Sequence):
    """
    Immutable, ordered trace of one tracer run.

    Behaves like a read-only sequence of steps and remembers which
    algorithm, source and destination produced it.
    """

    __slots__ = ("_steps", "_algorithm", "_source", "_destination")

    def __init__(
        self,
        steps: Sequence[Step],
        algorithm: str,
        source: str,
        destination: str,
    ) -> None:
        self._steps: tuple[Step, ...] = tuple(steps)
        self._algorithm = algorithm
        self._source = source
        self._destination = destination

    @overload
    def __getitem__(self, index: int) -> Step: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Step, ...]: ...

    def __getitem__(self, index):
        return self._steps[index]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def source(self) -> str:
        return self._source

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def final(self) -> Step:
        """The terminal step (complete or negative-cycle)."""
        return self._steps[-1]

    @property
    def outcome(self) -> str:
        return self.final.tag

    def tags(self) -> list[str]:
        return [step.tag for step in self._steps]

    def of_tag(self, tag: str) -> list[Step]:
        return [step for step in self._steps if step.tag == tag]

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "source": self.source,
            "destination": self.destination,
            "total": len(self._steps),
            "steps": [step.to_dict() for step in self._steps],
        }

    def __repr__(self) -> str:
        return (
            f"StepSequence(algorithm={self.algorithm!r}, "
            f"steps={len(self._steps)}, outcome={self.outcome!r})"
        )


# ── Serialization helpers ──────────────────────────────────────────

def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Entry):
        return {"node": value.node, "distance": value.distance}
    if isinstance(value, Edge):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    return value
