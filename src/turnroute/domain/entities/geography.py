# turnroute/domain/entities/geography.py
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from turnroute.errors import MalformedInput


# Core geometry types used by the graph and the turn annotator
@dataclass(frozen=True)
class Point:
    x: float  # map units; y grows "up"
    y: float

    def __sub__(self, other: "Point") -> tuple[float, float]:
        return (self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Edge:
    node: int  # neighbor id
    weight: float


def euclidean(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


class CoordinateStore:
    """Immutable, positionally indexed points: node id == index."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Point | tuple[float, float]]):
        self._points = tuple(self._as_point(i, p) for i, p in enumerate(points))

    @staticmethod
    def _as_point(i: int, p) -> Point:
        if isinstance(p, Point):
            x, y = p.x, p.y
        else:
            try:
                x, y = p
            except (TypeError, ValueError):
                raise MalformedInput(f"coordinate {i} is not an (x, y) pair: {p!r}") from None
        try:
            x, y = float(x), float(y)
        except (TypeError, ValueError):
            raise MalformedInput(f"coordinate {i} is not numeric: {p!r}") from None
        if not (math.isfinite(x) and math.isfinite(y)):
            raise MalformedInput(f"coordinate {i} is not finite: {p!r}")
        return Point(x, y)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, node: int) -> Point:
        return self._points[node]

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __eq__(self, other) -> bool:
        return isinstance(other, CoordinateStore) and self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"CoordinateStore({len(self._points)} points)"

    def contains(self, node: int) -> bool:
        return 0 <= node < len(self._points)
