# turnroute/runtime/resources.py
from functools import lru_cache

from turnroute.io.map_loader import RoadMap, load_map


@lru_cache(maxsize=8)
def load_map_from_path(file: str) -> RoadMap:
    # RoadMap is immutable; callers share the cached instance
    return load_map(file)
