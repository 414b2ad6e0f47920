from __future__ import annotations

import random
from collections.abc import Sequence

import pytest

from mushland.engine.actions import ActivateAction, DrawAction, PlayCardAction
from mushland.engine.game import (
    HABITAT_CAPACITY,
    GameState,
    apply,
    can_play,
    display_score,
    legal_drop_slot,
    new_game,
)
from mushland.engine.serialize import snapshot
from mushland.engine.types import HABITATS, Card, CardCatalog, CardTemplate
from mushland.paths import get_paths
from mushland.services.content import ContentService


def _load_catalog() -> CardCatalog:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_catalog()


def _state_with_deck(template_ids: Sequence[str], nutrients: int = 8) -> GameState:
    catalog = _load_catalog()
    deck = tuple(Card(id=i, template=catalog.get(t)) for i, t in enumerate(template_ids))
    return GameState(deck=deck, nutrients=nutrients)


def _draw(state: GameState, n: int) -> GameState:
    for _ in range(n):
        state = apply(state, DrawAction())
    return state


def test_new_game_initial_configuration() -> None:
    catalog = _load_catalog()
    state = new_game(catalog, seed=123)

    assert state.hand == ()
    assert all(state.habitats[h] == () for h in HABITATS)
    assert state.nutrients == 8
    assert state.spores == 0
    assert state.score == 0
    assert len(state.deck) == 36
    assert sorted(c.id for c in state.deck) == list(range(36))
    for template_id in catalog.all_ids():
        assert sum(1 for c in state.deck if c.template.id == template_id) == 6


def test_draw_moves_front_of_deck_to_end_of_hand() -> None:
    state = _state_with_deck(["morel", "oyster", "reishi"])
    state = _draw(state, 2)
    assert [c.template.id for c in state.hand] == ["morel", "oyster"]
    assert [c.template.id for c in state.deck] == ["reishi"]


def test_draw_from_empty_deck_is_silent_noop() -> None:
    state = _state_with_deck(["oyster"])
    state = _draw(state, 1)
    assert state.deck == ()
    after = apply(state, DrawAction())
    assert after == state


def test_scenario_play_fly_agaric_into_forest() -> None:
    state = _state_with_deck(["fly_agaric", "morel"])
    state = apply(state, DrawAction())
    assert [c.id for c in state.hand] == [0]
    assert len(state.deck) == 1

    card = state.hand[0]
    state = apply(state, PlayCardAction(card_id=card.id, habitat="forest"))
    assert state.nutrients == 6
    assert state.spores == 1
    assert state.score == 2
    assert state.habitats["forest"] == (card,)
    assert state.hand == ()


def test_insufficient_nutrients_rejects_without_partial_deduction() -> None:
    state = _draw(_state_with_deck(["fly_agaric"], nutrients=1), 1)
    after = apply(state, PlayCardAction(card_id=0, habitat="forest"))
    assert after == state
    assert after.nutrients == 1


def test_play_rejects_card_not_in_hand() -> None:
    state = _draw(_state_with_deck(["fly_agaric", "morel"]), 1)
    # id 1 is still in the deck, id 99 does not exist
    assert apply(state, PlayCardAction(card_id=1, habitat="soil")) == state
    assert apply(state, PlayCardAction(card_id=99, habitat="forest")) == state


def test_play_rejects_off_habitat() -> None:
    state = _draw(_state_with_deck(["fly_agaric"]), 1)
    for hab in ("log", "soil"):
        assert apply(state, PlayCardAction(card_id=0, habitat=hab)) == state


def test_full_habitat_rejects_sixth_card() -> None:
    state = _draw(_state_with_deck(["oyster"] * 6), 6)
    for card_id in range(5):
        state = apply(state, PlayCardAction(card_id=card_id, habitat="log"))
    assert len(state.habitats["log"]) == HABITAT_CAPACITY

    sixth = state.hand[0]
    assert sixth.habitat == "log"
    assert state.nutrients >= sixth.cost
    assert not can_play(state, sixth.id, "log")
    assert apply(state, PlayCardAction(card_id=sixth.id, habitat="log")) == state


def test_gain_nutrient_power_refunds_one() -> None:
    state = _draw(_state_with_deck(["shiitake"]), 1)
    state = apply(state, PlayCardAction(card_id=0, habitat="log"))
    assert state.nutrients == 8  # 8 - 1 + 1
    assert state.score == 3
    assert state.spores == 0


def test_draw_power_keeps_hand_size_and_shortens_deck() -> None:
    state = _draw(_state_with_deck(["lions_mane", "morel", "oyster"]), 1)
    hand_before = len(state.hand)
    deck_before = len(state.deck)

    state = apply(state, PlayCardAction(card_id=0, habitat="forest"))
    assert len(state.hand) == hand_before - 1 + 1
    assert len(state.deck) == deck_before - 1
    assert [c.template.id for c in state.hand] == ["morel"]
    assert state.nutrients == 6
    assert state.score == 4


def test_draw_power_matches_play_then_draw() -> None:
    catalog = _load_catalog()
    lions = catalog.get("lions_mane")
    plain = CardTemplate(
        id=lions.id,
        name=lions.name,
        habitat=lions.habitat,
        cost=lions.cost,
        points=lions.points,
        power=None,
    )
    rest = tuple(Card(id=i, template=catalog.get("morel")) for i in range(1, 4))

    with_power = GameState(deck=(Card(id=0, template=lions),) + rest, nutrients=8)
    without_power = GameState(deck=(Card(id=0, template=plain),) + rest, nutrients=8)
    play = PlayCardAction(card_id=0, habitat="forest")

    one_step = apply(apply(with_power, DrawAction()), play)
    two_step = apply(apply(apply(without_power, DrawAction()), play), DrawAction())
    assert snapshot(one_step) == snapshot(two_step)


def test_draw_power_with_empty_deck_still_plays() -> None:
    state = _draw(_state_with_deck(["lions_mane"]), 1)
    state = apply(state, PlayCardAction(card_id=0, habitat="forest"))
    assert state.hand == ()
    assert state.deck == ()
    assert len(state.habitats["forest"]) == 1
    assert state.score == 4


def test_activate_gains_card_count_every_time() -> None:
    state = _state_with_deck(["oyster", "oyster"])
    assert apply(state, ActivateAction(habitat="log")) == state

    state = _draw(state, 2)
    state = apply(state, PlayCardAction(card_id=0, habitat="log"))
    state = apply(state, PlayCardAction(card_id=1, habitat="log"))
    base = state.nutrients

    for i in range(1, 4):
        state = apply(state, ActivateAction(habitat="log"))
        assert state.nutrients == base + 2 * i
    assert apply(state, ActivateAction(habitat="soil")) == state


def test_apply_never_mutates_its_input() -> None:
    state = _draw(_state_with_deck(["lions_mane", "fly_agaric", "oyster"]), 2)
    before = snapshot(state)
    apply(state, PlayCardAction(card_id=0, habitat="forest"))
    apply(state, DrawAction())
    apply(state, ActivateAction(habitat="forest"))
    assert snapshot(state) == before


def test_unknown_action_is_ignored() -> None:
    state = _state_with_deck(["oyster"])
    assert apply(state, object()) is state  # type: ignore[arg-type]


def test_legal_drop_slot_and_display_score() -> None:
    state = _draw(_state_with_deck(["fly_agaric", "morel"]), 2)
    assert legal_drop_slot(state, 0) == ("forest", 0)
    assert legal_drop_slot(state, 1) == ("soil", 0)
    assert legal_drop_slot(state, 42) is None

    state = apply(state, PlayCardAction(card_id=0, habitat="forest"))
    # score 2 + spores 1 * 2 + nutrients 6
    assert display_score(state) == 10
    assert state.score == 2

    broke = GameState(hand=state.hand, habitats=state.habitats, nutrients=2)
    assert legal_drop_slot(broke, 1) is None


def test_invariants_hold_over_random_play() -> None:
    catalog = _load_catalog()
    state = new_game(catalog, seed=7)
    rng = random.Random(99)
    total = len(state.deck)

    for _ in range(600):
        roll = rng.random()
        if roll < 0.3:
            action = DrawAction()
        elif roll < 0.85:
            if state.hand and rng.random() < 0.8:
                card_id = rng.choice(state.hand).id
            else:
                card_id = rng.randrange(total + 5)
            action = PlayCardAction(card_id=card_id, habitat=rng.choice(HABITATS))
        else:
            action = ActivateAction(habitat=rng.choice(HABITATS))

        prev_score = state.score
        state = apply(state, action)

        assert state.nutrients >= 0
        assert state.spores >= 0
        assert state.score >= prev_score
        assert all(len(state.habitats[h]) <= HABITAT_CAPACITY for h in HABITATS)
        assert all(c.habitat == h for h in HABITATS for c in state.habitats[h])
        ids = [c.id for c in state.deck] + [c.id for c in state.hand]
        ids += [c.id for h in HABITATS for c in state.habitats[h]]
        assert len(ids) == total
        assert len(set(ids)) == total


def test_board_is_read_only_and_not_shared() -> None:
    s0 = _state_with_deck(["oyster", "oyster"])
    s1 = apply(s0, DrawAction())
    card = s1.hand[0]

    with pytest.raises(TypeError):
        s1.habitats["log"] = (card,) * HABITAT_CAPACITY  # type: ignore[index]
    assert s1.habitats is not s0.habitats
    assert all(s0.habitats[h] == () for h in HABITATS)

    s2 = apply(s1, PlayCardAction(card_id=card.id, habitat="log"))
    assert s2.habitats["log"] == (card,)
    assert s1.habitats["log"] == ()


def test_board_passed_to_constructor_is_copied() -> None:
    board = {"forest": (), "log": (), "soil": ()}
    state = GameState(habitats=board)  # type: ignore[arg-type]
    board["log"] = ("tampered",)  # type: ignore[assignment]
    assert state.habitats["log"] == ()


def test_game_state_is_hashable() -> None:
    state = _draw(_state_with_deck(["fly_agaric", "morel"]), 1)
    played = apply(state, PlayCardAction(card_id=0, habitat="forest"))
    assert hash(state) == hash(_draw(_state_with_deck(["fly_agaric", "morel"]), 1))
    assert {state, played} == {played, state}
