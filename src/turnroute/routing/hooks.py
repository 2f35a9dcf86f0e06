# turnroute/routing/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def search_start(self, *, start, goal, nodes): ...
    def settle(self, *, node, cost, qsize): ...
    def stale(self, *, node, cost, best): ...
    def search_end(self, *, start, goal, found, cost, settled, pushes, stale, wall_ms): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def settle(self, **_):
        pass

    def stale(self, **_):
        pass

    def search_end(self, **_):
        pass
