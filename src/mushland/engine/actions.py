from __future__ import annotations

from dataclasses import dataclass

from .types import Habitat


@dataclass(frozen=True)
class DrawAction:
    pass


@dataclass(frozen=True)
class PlayCardAction:
    card_id: int
    habitat: Habitat


@dataclass(frozen=True)
class ActivateAction:
    habitat: Habitat


Action = DrawAction | PlayCardAction | ActivateAction
