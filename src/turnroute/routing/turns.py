# turnroute/routing/turns.py
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from turnroute.domain.entities.geography import CoordinateStore, Point

STRAIGHT_THRESHOLD_DEG = 10.0


class Direction(Enum):
    LEFT = "Left"
    RIGHT = "Right"


@dataclass(frozen=True)
class Straight:
    def __str__(self) -> str:
        return "Straight"


@dataclass(frozen=True)
class Turn:
    angle_deg: float  # (threshold, 180]
    direction: Direction

    def __str__(self) -> str:
        return f"{self.direction.value} by {self.angle_deg:<5.2f}"


TurnAnnotation = Straight | Turn
STRAIGHT = Straight()


def classify(
    frm: Point, at: Point, to: Point, *, threshold_deg: float = STRAIGHT_THRESHOLD_DEG
) -> TurnAnnotation:
    """
    Turn taken at `at` when travelling frm -> at -> to.

    With y pointing up, delta > 0 is a right turn. Zero-length legs, zero
    bends and anything bending less than `threshold_deg` count as straight.
    """
    from_at = np.array(at - frm, dtype=float)
    at_to = np.array(to - at, dtype=float)
    norms = np.linalg.norm(from_at) * np.linalg.norm(at_to)
    if norms == 0.0:
        return STRAIGHT
    cos = np.clip(np.dot(from_at, at_to) / norms, -1.0, 1.0)
    angle = float(np.degrees(np.arccos(cos)))
    if angle == 0.0 or angle < threshold_deg:
        return STRAIGHT
    delta = -from_at[0] * at_to[1] + from_at[1] * at_to[0]
    return Turn(angle, Direction.RIGHT if delta > 0 else Direction.LEFT)


class TurnAnnotator:
    def __init__(self, coordinates: CoordinateStore, threshold_deg: float = STRAIGHT_THRESHOLD_DEG):
        self.coords, self.threshold_deg = coordinates, threshold_deg

    def annotate(self, route: Sequence[int]) -> tuple[TurnAnnotation, ...]:
        if not route:
            return ()
        inner = (
            classify(
                self.coords[a], self.coords[b], self.coords[c], threshold_deg=self.threshold_deg
            )
            for a, b, c in zip(route, route[1:], route[2:])
        )
        if len(route) == 1:
            return (STRAIGHT,)
        return (STRAIGHT, *inner, STRAIGHT)


def annotate_turns(
    route: Sequence[int],
    coordinates: CoordinateStore,
    *,
    threshold_deg: float = STRAIGHT_THRESHOLD_DEG,
) -> tuple[TurnAnnotation, ...]:
    return TurnAnnotator(coordinates, threshold_deg).annotate(route)
