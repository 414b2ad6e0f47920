from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping

from .actions import Action, ActivateAction, DrawAction, PlayCardAction
from .deck import build_deck
from .types import HABITATS, Card, CardCatalog, Habitat

HABITAT_CAPACITY = 5


@dataclass(frozen=True)
class GameConfig:
    starting_nutrients: int = 8
    copies_per_card: int = 6
    opening_hand: int = 5  # dealt by the client as plain draws


def _empty_habitats() -> Mapping[Habitat, tuple[Card, ...]]:
    return MappingProxyType({h: () for h in HABITATS})


@dataclass(frozen=True)
class GameState:
    deck: tuple[Card, ...] = ()
    hand: tuple[Card, ...] = ()
    habitats: Mapping[Habitat, tuple[Card, ...]] = field(default_factory=_empty_habitats, hash=False)
    nutrients: int = 0
    spores: int = 0
    score: int = 0

    def __post_init__(self) -> None:
        # Each state owns a read-only copy of the board.
        board = {h: tuple(self.habitats.get(h, ())) for h in HABITATS}
        object.__setattr__(self, "habitats", MappingProxyType(board))


def new_game(catalog: CardCatalog, seed: int, config: GameConfig | None = None) -> GameState:
    cfg = config or GameConfig()
    if cfg.starting_nutrients < 0:
        raise ValueError("starting_nutrients must be non-negative.")

    rng = random.Random(seed)
    deck = build_deck(catalog, cfg.copies_per_card, rng)
    return GameState(
        deck=deck,
        hand=(),
        habitats=_empty_habitats(),
        nutrients=cfg.starting_nutrients,
        spores=0,
        score=0,
    )


def find_in_hand(state: GameState, card_id: int) -> Card | None:
    for card in state.hand:
        if card.id == card_id:
            return card
    return None


def can_play(state: GameState, card_id: int, habitat: Habitat) -> bool:
    card = find_in_hand(state, card_id)
    if card is None:
        return False
    if card.habitat != habitat:
        return False
    if state.nutrients < card.cost:
        return False
    return len(state.habitats[habitat]) < HABITAT_CAPACITY


def legal_drop_slot(state: GameState, card_id: int) -> tuple[Habitat, int] | None:
    """Where a dragged card would land if dropped now, or None if nowhere.

    Read-only; used by the renderer to highlight the target slot.
    """
    card = find_in_hand(state, card_id)
    if card is None or not can_play(state, card_id, card.habitat):
        return None
    return card.habitat, len(state.habitats[card.habitat])


def display_score(state: GameState) -> int:
    # HUD figure only; `state.score` stays the canonical points total.
    return state.score + state.spores * 2 + state.nutrients


def _draw(state: GameState) -> GameState:
    if not state.deck:
        return state
    return replace(state, deck=state.deck[1:], hand=state.hand + (state.deck[0],))


def _play_card(state: GameState, action: PlayCardAction) -> GameState:
    if not can_play(state, action.card_id, action.habitat):
        return state

    card = find_in_hand(state, action.card_id)
    assert card is not None
    habitats = dict(state.habitats)
    habitats[action.habitat] = habitats[action.habitat] + (card,)
    played = replace(
        state,
        hand=tuple(c for c in state.hand if c.id != card.id),
        habitats=habitats,
        nutrients=state.nutrients - card.cost,
        score=state.score + card.points,
    )

    # Powers resolve against the already-updated state, inside the same transition.
    if card.power == "gain_spore":
        return replace(played, spores=played.spores + 1)
    if card.power == "gain_nutrient":
        return replace(played, nutrients=played.nutrients + 1)
    if card.power == "draw_card":
        return _draw(played)
    return played


def _activate(state: GameState, action: ActivateAction) -> GameState:
    gain = len(state.habitats[action.habitat])
    if gain == 0:
        return state
    return replace(state, nutrients=state.nutrients + gain)


def apply(state: GameState, action: Action) -> GameState:
    """Return the state that results from `action`.

    Pure: `state` is never modified, and no clock or randomness is read.
    Rejected actions return the input state unchanged; callers detect
    success by comparing the states before and after.
    """
    if isinstance(action, DrawAction):
        return _draw(state)
    if isinstance(action, PlayCardAction):
        return _play_card(state, action)
    if isinstance(action, ActivateAction):
        return _activate(state, action)
    return state


def replay(
    catalog: CardCatalog,
    seed: int,
    actions: Iterable[Action],
    config: GameConfig | None = None,
) -> GameState:
    state = new_game(catalog, seed=seed, config=config)
    for a in actions:
        state = apply(state, a)
    return state
