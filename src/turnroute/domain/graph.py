# turnroute/domain/graph.py
import operator
from collections.abc import Iterable, Sequence

from turnroute.domain.entities.geography import CoordinateStore, Edge, Point, euclidean
from turnroute.errors import MalformedInput


class AdjacencyGraph:
    """
    Undirected, Euclidean-weighted graph over a CoordinateStore.

    Every edge i->j has a mirror j->i of the same weight. Built once by
    build_graph and read-only afterwards, so one instance can back any
    number of concurrent searches.
    """

    __slots__ = ("_coords", "_adj", "_edge_count")

    def __init__(
        self, coordinates: CoordinateStore, adjacency: Sequence[Sequence[Edge]], edge_count: int
    ):
        self._coords = coordinates
        self._adj = tuple(tuple(edges) for edges in adjacency)
        self._edge_count = edge_count

    @property
    def coordinates(self) -> CoordinateStore:
        return self._coords

    @property
    def node_count(self) -> int:
        return len(self._adj)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def neighbors(self, node: int) -> tuple[Edge, ...]:
        return self._adj[node]

    def node_point(self, node: int) -> Point:
        return self._coords[node]

    def edge_weight(self, u: int, v: int) -> float | None:
        """Cheapest weight among the (possibly parallel) u-v edges, None if not adjacent."""
        ws = [e.weight for e in self._adj[u] if e.node == v]
        return min(ws) if ws else None

    def __repr__(self) -> str:
        return f"AdjacencyGraph(nodes={self.node_count}, edges={self.edge_count})"


def _node_id(i: int, raw, n: int) -> int:
    if isinstance(raw, bool):
        raise MalformedInput(f"edge {i}: node id must be an integer, got {raw!r}")
    try:
        node = operator.index(raw)
    except TypeError:
        raise MalformedInput(f"edge {i}: node id must be an integer, got {raw!r}") from None
    if not 0 <= node < n:
        raise MalformedInput(f"edge {i}: node {node} is outside [0, {n})")
    return node


def build_graph(
    coordinates: CoordinateStore | Iterable[Point | tuple[float, float]],
    edges: Iterable[tuple[int, int]],
) -> AdjacencyGraph:
    coords = coordinates if isinstance(coordinates, CoordinateStore) else CoordinateStore(coordinates)
    n = len(coords)
    adjacency: list[list[Edge]] = [[] for _ in range(n)]
    k = -1
    for k, pair in enumerate(edges):
        try:
            a, b = pair
        except (TypeError, ValueError):
            raise MalformedInput(f"edge {k} is not an (i, j) pair: {pair!r}") from None
        i, j = _node_id(k, a, n), _node_id(k, b, n)
        w = euclidean(coords[i], coords[j])
        adjacency[i].append(Edge(j, w))
        if i != j:
            adjacency[j].append(Edge(i, w))
    return AdjacencyGraph(coords, adjacency, edge_count=k + 1)
