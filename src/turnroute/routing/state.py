# turnroute/routing/state.py
from dataclasses import dataclass, field
from enum import Enum
from math import inf


@dataclass(frozen=True, order=True)
class QueueEntry:
    """heapq entry: smallest cost first, ties broken by the smaller node id."""

    cost: float
    node: int


class PredKind(Enum):
    UNSET = "unset"
    START = "start"
    VIA = "via"


@dataclass(frozen=True)
class Predecessor:
    kind: PredKind
    node: int | None = None  # only set for VIA

    @classmethod
    def via(cls, node: int) -> "Predecessor":
        return cls(PredKind.VIA, node)


UNSET = Predecessor(PredKind.UNSET)
START = Predecessor(PredKind.START)


@dataclass
class SearchState:
    """Per-query scratch arrays, indexed by node id. Never shared between searches."""

    distance: list[float]
    settled: list[bool]
    predecessor: list[Predecessor]
    pushes: int = 0
    stale: int = 0
    settled_count: int = 0
    frontier: list[QueueEntry] = field(default_factory=list)

    @classmethod
    def fresh(cls, node_count: int, start: int) -> "SearchState":
        st = cls(
            distance=[inf] * node_count,
            settled=[False] * node_count,
            predecessor=[UNSET] * node_count,
        )
        st.distance[start] = 0.0
        st.predecessor[start] = START
        return st
