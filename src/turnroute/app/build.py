# turnroute/app/build.py
import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from turnroute.config.models import MapByPath, QueryModel, ScenarioModel
from turnroute.errors import RoutingError
from turnroute.io.map_loader import RoadMap, parse_map
from turnroute.io.search_logging import SearchLogging
from turnroute.routing.hooks import NoopHooks, SearchHooks
from turnroute.routing.planner import AnnotatedRoute, RoutePlanner
from turnroute.runtime.resources import load_map_from_path


@dataclass
class App:
    road_map: RoadMap
    planner: RoutePlanner
    hooks: SearchHooks
    queries: list[QueryModel]

    def run(self) -> Iterator[tuple[QueryModel, AnnotatedRoute | RoutingError]]:
        for q in self.queries:
            try:
                yield q, self.planner.plan(q.start, q.goal)
            except RoutingError as exc:
                yield q, exc


def resolve_map(ref: MapByPath) -> RoadMap:
    if not ref.must_exist and not os.path.exists(ref.file):
        return parse_map(())
    return load_map_from_path(ref.file)


def build(cfg: ScenarioModel | Mapping, *, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Map (graph is built once, shared by every query)
    road_map = resolve_map(model.map)

    # 2) Hooks
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Planner
    planner = RoutePlanner(
        road_map.graph, threshold_deg=model.turns.straight_threshold_deg, hooks=hooks
    )
    return App(road_map, planner, hooks, list(model.queries))
