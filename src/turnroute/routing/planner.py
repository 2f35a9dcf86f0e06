# turnroute/routing/planner.py
from dataclasses import dataclass

from turnroute.domain.graph import AdjacencyGraph

from .dijkstra import Route, ShortestPathEngine, route_cost
from .hooks import SearchHooks
from .turns import STRAIGHT_THRESHOLD_DEG, TurnAnnotation, TurnAnnotator


@dataclass(frozen=True)
class AnnotatedRoute:
    route: Route
    turns: tuple[TurnAnnotation, ...]
    cost: float

    def __iter__(self):
        return zip(self.route, self.turns)


class RoutePlanner:
    """Facade bundling search and turn annotation over one graph."""

    def __init__(
        self,
        graph: AdjacencyGraph,
        *,
        threshold_deg: float = STRAIGHT_THRESHOLD_DEG,
        hooks: SearchHooks | None = None,
    ):
        self.graph = graph
        self.engine = ShortestPathEngine(graph, hooks=hooks)
        self.annotator = TurnAnnotator(graph.coordinates, threshold_deg)

    def route(self, start: int, goal: int) -> Route:
        return self.engine.dijkstra(start, goal)

    def plan(self, start: int, goal: int) -> AnnotatedRoute:
        path = self.route(start, goal)
        return AnnotatedRoute(path, self.annotator.annotate(path), route_cost(self.graph, path))
