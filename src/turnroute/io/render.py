# turnroute/io/render.py
from turnroute.routing.planner import AnnotatedRoute

NODE_W, GO_W = 5, 14


def render_route(annotated: AnnotatedRoute) -> str:
    lines = [f"{'Node':^{NODE_W}}|{'Go':^{GO_W}}", "=" * (NODE_W + 1 + GO_W)]
    for node, turn in annotated:
        lines.append(f"{node:^{NODE_W}}|{str(turn):<{GO_W}}")
    return "\n".join(lines) + "\n"
