from __future__ import annotations

from typing import Mapping

from .actions import Action, ActivateAction, DrawAction, PlayCardAction
from .game import GameState
from .types import HABITATS, Card


def card_to_dict(c: Card) -> dict[str, object]:
    return {"id": c.id, "template": c.template.id}


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, DrawAction):
        return {"type": "draw"}
    if isinstance(a, PlayCardAction):
        return {"type": "play", "card_id": a.card_id, "habitat": a.habitat}
    if isinstance(a, ActivateAction):
        return {"type": "activate", "habitat": a.habitat}
    # should be unreachable
    return {"type": "unknown"}


def action_from_dict(raw: Mapping[str, object]) -> Action:
    t = raw.get("type")
    if t == "draw":
        return DrawAction()
    if t == "play":
        card_id = raw.get("card_id")
        habitat = raw.get("habitat")
        if not isinstance(card_id, int) or habitat not in HABITATS:
            raise ValueError(f"Invalid play action: {dict(raw)}")
        return PlayCardAction(card_id=card_id, habitat=habitat)  # type: ignore[arg-type]
    if t == "activate":
        habitat = raw.get("habitat")
        if habitat not in HABITATS:
            raise ValueError(f"Invalid activate action: {dict(raw)}")
        return ActivateAction(habitat=habitat)  # type: ignore[arg-type]
    raise ValueError(f"Unknown action type: {t!r}")


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the game state."""
    return {
        "deck": [card_to_dict(c) for c in state.deck],
        "hand": [card_to_dict(c) for c in state.hand],
        "habitats": {h: [card_to_dict(c) for c in state.habitats[h]] for h in HABITATS},
        "nutrients": state.nutrients,
        "spores": state.spores,
        "score": state.score,
    }
