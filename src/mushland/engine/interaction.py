"""Pointer-drag gesture recognition.

Turns a grab / move / release sequence over the habitat drop zones into at
most one PlayCardAction. The tracker never looks at game state; legality is
decided by `game.apply` when the emitted action is applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .actions import PlayCardAction
from .types import HABITATS, Habitat

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        # Edges are outside the zone.
        return self.left < x < self.right and self.top < y < self.bottom


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    card_id: int
    x: float
    y: float


DragState = Idle | Dragging

IDLE = Idle()


def hit_test(zones: Mapping[Habitat, Rect], x: float, y: float) -> Habitat | None:
    for hab in HABITATS:
        rect = zones.get(hab)
        if rect is not None and rect.contains(x, y):
            return hab
    return None


def pointer_down(drag: DragState, card_id: int, pos: Point) -> DragState:
    if isinstance(drag, Dragging):
        return drag
    return Dragging(card_id=card_id, x=pos[0], y=pos[1])


def pointer_move(drag: DragState, pos: Point) -> DragState:
    if isinstance(drag, Idle):
        return drag
    return Dragging(card_id=drag.card_id, x=pos[0], y=pos[1])


def pointer_up(
    drag: DragState,
    zones: Mapping[Habitat, Rect],
    pos: Point | None = None,
) -> tuple[Idle, PlayCardAction | None]:
    if isinstance(drag, Idle):
        return IDLE, None
    x, y = pos if pos is not None else (drag.x, drag.y)
    target = hit_test(zones, x, y)
    if target is None:
        return IDLE, None
    return IDLE, PlayCardAction(card_id=drag.card_id, habitat=target)


class DragTracker:
    """Holds the live drag state for an event loop."""

    def __init__(self) -> None:
        self.state: DragState = IDLE

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    @property
    def card_id(self) -> int | None:
        if isinstance(self.state, Dragging):
            return self.state.card_id
        return None

    @property
    def position(self) -> Point | None:
        if isinstance(self.state, Dragging):
            return self.state.x, self.state.y
        return None

    def grab(self, card_id: int, pos: Point) -> None:
        self.state = pointer_down(self.state, card_id, pos)

    def move(self, pos: Point) -> None:
        self.state = pointer_move(self.state, pos)

    def release(self, zones: Mapping[Habitat, Rect], pos: Point | None = None) -> PlayCardAction | None:
        self.state, action = pointer_up(self.state, zones, pos)
        return action
