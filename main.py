# main.py
import json
import sys

from turnroute.app.build import build
from turnroute.errors import RoutingError
from turnroute.io.render import render_route


def run(scenario_path: str) -> int:
    with open(scenario_path, encoding="utf-8") as f:
        app = build(json.load(f))

    failures = 0
    for q, result in app.run():
        print(f"{q.start} -> {q.goal}")
        if isinstance(result, RoutingError):
            failures += 1
            print(f"  error: {result}")
            continue
        print(render_route(result))
    return 1 if failures else 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit(f"usage: {sys.argv[0]} SCENARIO.json")
    sys.exit(run(sys.argv[1]))
