"""Deterministic, headless rules engine for Mushland.

IMPORTANT: This package must never import pygame.
"""

from .actions import Action, ActivateAction, DrawAction, PlayCardAction
from .game import HABITAT_CAPACITY, GameConfig, GameState, apply, new_game, replay
from .interaction import DragTracker, Rect
from .types import HABITATS, Card, CardCatalog, CardTemplate, Habitat, Power

__all__ = [
    "Action",
    "ActivateAction",
    "Card",
    "CardCatalog",
    "CardTemplate",
    "DragTracker",
    "DrawAction",
    "GameConfig",
    "GameState",
    "HABITATS",
    "HABITAT_CAPACITY",
    "Habitat",
    "PlayCardAction",
    "Power",
    "Rect",
    "apply",
    "new_game",
    "replay",
]
