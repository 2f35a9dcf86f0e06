# turnroute/errors.py


class RoutingError(Exception):
    """Base class for everything the routing core raises on purpose."""


class MalformedInput(RoutingError, ValueError):
    pass


class InvalidNode(RoutingError, ValueError):
    def __init__(self, node: int, node_count: int):
        super().__init__(f"node {node} is outside [0, {node_count})")
        self.node, self.node_count = node, node_count


class NotReachable(RoutingError):
    def __init__(self, start: int, goal: int):
        super().__init__(f"node {goal} is not reachable from node {start}")
        self.start, self.goal = start, goal
