# turnroute/routing/dijkstra.py

import heapq
import time
from collections.abc import Sequence

from turnroute.domain.graph import AdjacencyGraph
from turnroute.errors import InvalidNode, MalformedInput, NotReachable

from .hooks import NoopHooks, SearchHooks
from .state import PredKind, Predecessor, QueueEntry, SearchState

Route = tuple[int, ...]


class ShortestPathEngine:
    """
    Early-exit Dijkstra over a read-only AdjacencyGraph.

    A node can sit in the queue several times; only the entry carrying its
    current best distance settles it, the rest are skipped on pop.
    """

    def __init__(self, graph: AdjacencyGraph, hooks: SearchHooks | None = None):
        self.graph = graph
        self._hooks = hooks or NoopHooks()

    def _check(self, node: int) -> None:
        if not self.graph.coordinates.contains(node):
            raise InvalidNode(node, self.graph.node_count)

    def search(self, start: int, goal: int) -> SearchState:
        self._check(start)
        self._check(goal)
        return self._run(start, goal)

    def _run(self, start: int, goal: int) -> SearchState:
        st = SearchState.fresh(self.graph.node_count, start)
        q = st.frontier
        heapq.heappush(q, QueueEntry(0.0, start))
        st.pushes += 1

        while q:
            entry = heapq.heappop(q)
            cost, node = entry.cost, entry.node
            if st.settled[node] or cost > st.distance[node]:
                st.stale += 1
                self._hooks.stale(node=node, cost=cost, best=st.distance[node])
                continue
            st.settled[node] = True
            st.settled_count += 1
            self._hooks.settle(node=node, cost=cost, qsize=len(q))
            if node == goal:
                break
            for edge in self.graph.neighbors(node):
                nxt = cost + edge.weight
                if nxt < st.distance[edge.node]:
                    st.distance[edge.node] = nxt
                    st.predecessor[edge.node] = Predecessor.via(node)
                    heapq.heappush(q, QueueEntry(nxt, edge.node))
                    st.pushes += 1
        return st

    def dijkstra(self, start: int, goal: int) -> Route:
        self._check(start)
        self._check(goal)
        t0 = time.perf_counter()
        self._hooks.search_start(start=start, goal=goal, nodes=self.graph.node_count)
        st = self._run(start, goal)
        found = st.predecessor[goal].kind is not PredKind.UNSET
        self._hooks.search_end(
            start=start,
            goal=goal,
            found=found,
            cost=st.distance[goal] if found else None,
            settled=st.settled_count,
            pushes=st.pushes,
            stale=st.stale,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return reconstruct(st, start, goal)


def reconstruct(st: SearchState, start: int, goal: int) -> Route:
    path = [goal]
    pred = st.predecessor[goal]
    while pred.kind is not PredKind.START:
        if pred.kind is PredKind.UNSET:
            raise NotReachable(start, goal)
        path.append(pred.node)
        pred = st.predecessor[pred.node]
    path.reverse()
    return tuple(path)


def shortest_path(graph: AdjacencyGraph, start: int, goal: int) -> Route:
    return ShortestPathEngine(graph).dijkstra(start, goal)


def route_cost(graph: AdjacencyGraph, route: Sequence[int]) -> float:
    total = 0.0
    for u, v in zip(route, route[1:]):
        w = graph.edge_weight(u, v)
        if w is None:
            raise MalformedInput(f"route steps from {u} to {v} without an edge")
        total += w
    return total
