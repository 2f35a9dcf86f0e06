# turnroute/io/map_loader.py
import itertools
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from turnroute.domain.entities.geography import CoordinateStore
from turnroute.domain.graph import AdjacencyGraph, build_graph
from turnroute.errors import MalformedInput

log = logging.getLogger("turnroute.map")

_NUM = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
COORDINATE_RE = re.compile(rf"^\s*\d+\s+({_NUM})\s+({_NUM})\s*$")
CONNECTION_RE = re.compile(r"^\s*(\d+)\s+(\d+)\s*$")


@dataclass(frozen=True)
class RoadMap:
    coordinates: CoordinateStore
    edges: tuple[tuple[int, int], ...]
    graph: AdjacencyGraph


def parse_map(lines: Iterable[str]) -> RoadMap:
    """
    Parse the text map format:

        NODES:            <- header, skipped
        0 12.5 3.0        <- "<id> <x> <y>", ids are positional
        ...
        EDGES:            <- first non-matching line ends the node section;
                             it is skipped unless it is itself "<i> <j>"
        0 1               <- "<i> <j>" undirected connection
    """
    it = iter(lines)
    next(it, None)
    lineno = 1

    points: list[tuple[float, float]] = []
    for line in it:
        lineno += 1
        m = COORDINATE_RE.match(line)
        if not m:
            if CONNECTION_RE.match(line):
                # no edge-section header; this line is already a connection
                log.debug("edge section without header", extra={"extra": {"line": lineno}})
                it = itertools.chain([line], it)
                lineno -= 1
            break
        points.append((float(m[1]), float(m[2])))

    n = len(points)
    edges: list[tuple[int, int]] = []
    for line in it:
        lineno += 1
        if not line.strip():
            continue
        m = CONNECTION_RE.match(line)
        if not m:
            raise MalformedInput(f"line {lineno}: expected '<node_i> <node_j>', got {line.rstrip()!r}")
        i, j = int(m[1]), int(m[2])
        if i >= n or j >= n:
            raise MalformedInput(f"line {lineno}: node id out of range [0, {n}): {i} {j}")
        edges.append((i, j))

    coords = CoordinateStore(points)
    graph = build_graph(coords, edges)
    log.debug("map parsed", extra={"extra": {"nodes": n, "edges": len(edges)}})
    return RoadMap(coords, tuple(edges), graph)


def load_map(path: str) -> RoadMap:
    with open(path, encoding="utf-8") as f:
        return parse_map(f)
