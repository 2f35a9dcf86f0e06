# tests/routing/test_dijkstra.py
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from turnroute.domain.graph import build_graph
from turnroute.errors import InvalidNode, MalformedInput, NotReachable
from turnroute.routing.dijkstra import ShortestPathEngine, route_cost, shortest_path
from turnroute.routing.hooks import NoopHooks
from turnroute.routing.planner import RoutePlanner
from turnroute.routing.state import PredKind

# ---------- Fixtures


@pytest.fixture
def triangle():
    # direct 0-2 edge (sqrt 2) beats the two-hop path through 1 (cost 2)
    return build_graph([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], [(0, 1), (1, 2), (0, 2)])


@pytest.fixture
def late_improvement():
    # node 2 is first reached through 1 (cost ~11.05), later improved through 3 (cost 10)
    coords = [(0.0, 0.0), (0.0, 1.0), (10.0, 0.0), (5.0, 0.0), (20.0, 0.0)]
    return build_graph(coords, [(0, 1), (1, 2), (0, 3), (3, 2), (2, 4)])


# ---------- Core search


def test_direct_edge_beats_two_hops(triangle):
    route = shortest_path(triangle, 0, 2)
    assert route == (0, 2)
    assert route_cost(triangle, route) == pytest.approx(math.sqrt(2))


def test_start_equals_goal_is_single_node(triangle):
    assert shortest_path(triangle, 1, 1) == (1,)
    assert route_cost(triangle, (1,)) == 0.0


def test_improvement_found_after_first_relaxation_propagates(late_improvement):
    engine = ShortestPathEngine(late_improvement)
    assert engine.dijkstra(0, 4) == (0, 3, 2, 4)

    st = engine.search(0, 4)
    assert st.distance[2] == pytest.approx(10.0)
    assert st.distance[4] == pytest.approx(20.0)
    # the stale (0 -> 1 -> 2) entry is popped and skipped before the goal settles
    assert st.stale == 1


def test_equal_cost_ties_break_on_smaller_node_id():
    square = build_graph([(0, 0), (1, 0), (0, 1), (1, 1)], [(0, 1), (0, 2), (1, 3), (2, 3)])
    assert shortest_path(square, 0, 3) == (0, 1, 3)
    assert shortest_path(square, 3, 0) == (3, 1, 0)


def test_search_stops_once_goal_settles():
    # a long tail past the goal should stay unsettled
    coords = [(float(i), 0.0) for i in range(10)]
    g = build_graph(coords, [(i, i + 1) for i in range(9)])
    st = ShortestPathEngine(g).search(0, 2)
    assert st.settled[:3] == [True, True, True]
    assert not any(st.settled[4:])


def test_disconnected_goal_is_not_reachable():
    g = build_graph([(0, 0), (1, 0), (5, 5), (6, 5)], [(0, 1), (2, 3)])
    with pytest.raises(NotReachable) as ei:
        shortest_path(g, 0, 3)
    assert (ei.value.start, ei.value.goal) == (0, 3)

    st = ShortestPathEngine(g).search(0, 3)
    assert st.predecessor[3].kind is PredKind.UNSET


def test_isolated_nodes_without_edges():
    g = build_graph([(0, 0), (1, 1)], [])
    assert shortest_path(g, 0, 0) == (0,)
    with pytest.raises(NotReachable):
        shortest_path(g, 0, 1)


@pytest.mark.parametrize("start,goal", [(3, 0), (0, 3), (-1, 0), (0, 99)])
def test_out_of_range_nodes_rejected_before_search(triangle, start, goal):
    with pytest.raises(InvalidNode):
        shortest_path(triangle, start, goal)


def test_route_cost_rejects_non_adjacent_steps():
    g = build_graph([(0, 0), (1, 0), (2, 0)], [(0, 1), (1, 2)])
    with pytest.raises(MalformedInput):
        route_cost(g, (0, 2))


# ---------- Hooks


class TraceHooks(NoopHooks):
    def __init__(self):
        self.settled, self.ends = [], []

    def settle(self, *, node, cost, qsize):
        self.settled.append(node)

    def search_end(self, **kw):
        self.ends.append(kw)


def test_hooks_see_settle_order_and_summary(late_improvement):
    hooks = TraceHooks()
    ShortestPathEngine(late_improvement, hooks=hooks).dijkstra(0, 4)
    assert hooks.settled == [0, 1, 3, 2, 4]
    (end,) = hooks.ends
    assert end["found"] is True
    assert end["cost"] == pytest.approx(20.0)
    assert end["stale"] == 1


def test_hooks_report_failed_search():
    hooks = TraceHooks()
    g = build_graph([(0, 0), (1, 0)], [])
    with pytest.raises(NotReachable):
        ShortestPathEngine(g, hooks=hooks).dijkstra(0, 1)
    assert hooks.ends[0]["found"] is False and hooks.ends[0]["cost"] is None


# ---------- Properties on small random graphs


def _random_graph(rng, n):
    coords = [tuple(map(float, rng.integers(0, 20, size=2))) for _ in range(n)]
    pairs = [(i, j) for i in range(n) for j in range(i + 1, n) if rng.random() < 0.4]
    return build_graph(coords, pairs)


def _brute_force_cost(g, start, goal):
    best = math.inf

    def walk(node, seen, cost):
        nonlocal best
        if node == goal:
            best = min(best, cost)
            return
        for e in g.neighbors(node):
            if e.node not in seen:
                walk(e.node, seen | {e.node}, cost + e.weight)

    walk(start, {start}, 0.0)
    return best


@pytest.mark.parametrize("seed", range(25))
def test_matches_exhaustive_search_on_small_graphs(seed):
    rng = np.random.default_rng(seed)
    n = int(rng.integers(2, 9))
    g = _random_graph(rng, n)
    for start in range(n):
        for goal in range(n):
            expected = _brute_force_cost(g, start, goal)
            if math.isinf(expected):
                with pytest.raises(NotReachable):
                    shortest_path(g, start, goal)
                continue
            route = shortest_path(g, start, goal)
            assert route[0] == start and route[-1] == goal
            assert route_cost(g, route) == pytest.approx(expected)


def test_rebuilt_graph_gives_identical_routes_and_turns():
    rng = np.random.default_rng(7)
    coords = [tuple(map(float, rng.integers(0, 50, size=2))) for _ in range(30)]
    pairs = [(int(a), int(b)) for a, b in rng.integers(0, 30, size=(80, 2))]
    g1, g2 = build_graph(coords, pairs), build_graph(coords, pairs)

    def all_routes(g):
        out = []
        for goal in range(30):
            try:
                out.append(shortest_path(g, 0, goal))
            except NotReachable:
                out.append(None)
        return out

    assert all_routes(g1) == all_routes(g2) == all_routes(g1)

    p1, p2 = RoutePlanner(g1), RoutePlanner(g2)
    for goal in range(30):
        try:
            a = p1.plan(0, goal)
        except NotReachable:
            with pytest.raises(NotReachable):
                p2.plan(0, goal)
            continue
        b = p2.plan(0, goal)
        assert (a.route, a.turns, a.cost) == (b.route, b.turns, b.cost)


def test_one_graph_serves_concurrent_queries():
    coords = [(float(x), float(y)) for y in range(6) for x in range(6)]
    pairs = [(i, i + 1) for i in range(36) if (i + 1) % 6] + [(i, i + 6) for i in range(30)]
    g = build_graph(coords, pairs)
    engine = ShortestPathEngine(g)
    queries = [(s, t) for s in range(0, 36, 5) for t in range(36)]

    serial = [engine.dijkstra(s, t) for s, t in queries]
    with ThreadPoolExecutor(max_workers=8) as pool:
        threaded = list(pool.map(lambda q: engine.dijkstra(*q), queries))
    assert threaded == serial


def test_engine_validates_against_coordinate_store(triangle):
    engine = ShortestPathEngine(triangle)
    assert triangle.coordinates.contains(2) and not triangle.coordinates.contains(3)
    with pytest.raises(InvalidNode):
        engine.search(0, 3)
    hooks = TraceHooks()
    with pytest.raises(InvalidNode):
        ShortestPathEngine(triangle, hooks=hooks).dijkstra(3, 0)
    assert hooks.ends == []
