from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from mushland.engine.actions import Action, ActivateAction, DrawAction
from mushland.engine.game import (
    HABITAT_CAPACITY,
    GameState,
    apply,
    display_score,
    find_in_hand,
    legal_drop_slot,
    new_game,
)
from mushland.engine.interaction import DragTracker, Rect
from mushland.engine.types import HABITATS, Card, Habitat

from ..app import GameContext, SceneTransition
from ..ui import HABITAT_COLORS, POWER_TEXT, Button, blend, draw_text

CARD_W, CARD_H = 116, 190
HAND_X, HAND_Y, HAND_STEP = 20, 530, 124
HAND_VISIBLE = 8

POWER_SHORT = {
    "gain_spore": "+1 Spore",
    "gain_nutrient": "+1 Worm",
    "draw_card": "Draw 1",
    None: "",
}


class GameScene:
    def __init__(self, ctx: GameContext) -> None:
        assert ctx.catalog is not None
        self.ctx = ctx
        self.state: GameState = new_game(ctx.catalog, seed=ctx.seed, config=ctx.config)
        self.tracker = DragTracker()

        self._message: str = ""
        self._hover_card: Card | None = None
        self._music_on = False

        self.title_rect = pygame.Rect(20, 12, 200, 44)
        self.btn_draw = Button(rect=pygame.Rect(540, 12, 170, 40), text="", on_click=self._on_draw)

        ctx.telemetry.log("game_started", {"seed": ctx.seed, "deck": len(self.state.deck)})
        for _ in range(ctx.config.opening_hand):
            self._dispatch(DrawAction())

    # --- engine boundary -------------------------------------------------

    def _dispatch(self, action: Action) -> bool:
        before = self.state
        after = apply(before, action)
        self.state = after
        self.ctx.telemetry.log_action(action, before, after)
        return after != before

    def _on_draw(self) -> None:
        if self._dispatch(DrawAction()):
            self.ctx.assets.play_sound("draw")
            self._message = ""
        else:
            self._message = "The deck is empty."

    # --- layout ----------------------------------------------------------

    def _habitat_rect(self, hab: Habitat) -> pygame.Rect:
        i = HABITATS.index(hab)
        return pygame.Rect(20 + i * 335, 70, 315, 410)

    def _slot_rect(self, hab: Habitat, slot: int) -> pygame.Rect:
        r = self._habitat_rect(hab)
        return pygame.Rect(r.x + 15, r.y + 46 + slot * 72, r.w - 30, 64)

    def _hand_rect(self, index: int) -> pygame.Rect:
        return pygame.Rect(HAND_X + index * HAND_STEP, HAND_Y, CARD_W, CARD_H)

    def _drop_zones(self) -> dict[Habitat, Rect]:
        zones: dict[Habitat, Rect] = {}
        for hab in HABITATS:
            r = self._habitat_rect(hab)
            zones[hab] = Rect(left=r.x, top=r.y, width=r.w, height=r.h)
        return zones

    def _hit_test_hand(self, pos: tuple[int, int]) -> Card | None:
        for i, card in enumerate(self.state.hand[:HAND_VISIBLE]):
            if self._hand_rect(i).collidepoint(pos):
                return card
        return None

    def _hit_test_habitat(self, pos: tuple[int, int]) -> Habitat | None:
        for hab in HABITATS:
            if self._habitat_rect(hab).collidepoint(pos):
                return hab
        return None

    # --- events ----------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if not self.tracker.is_dragging and self.btn_draw.handle_event(event):
                return
            self._on_pointer_down(event.pos)
        elif event.type == pygame.MOUSEMOTION:
            if self.tracker.is_dragging:
                self.tracker.move(event.pos)
            else:
                self._hover_card = self._hit_test_hand(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._on_pointer_up(event.pos)

    def _on_pointer_down(self, pos: tuple[int, int]) -> None:
        if self.tracker.is_dragging:
            return
        if self.title_rect.collidepoint(pos):
            self._music_on = self.ctx.assets.toggle_music()
            return

        card = self._hit_test_hand(pos)
        if card is not None:
            self.tracker.grab(card.id, pos)
            self.ctx.assets.play_sound("click")
            return

        hab = self._hit_test_habitat(pos)
        if hab is not None:
            gained = len(self.state.habitats[hab])
            self._dispatch(ActivateAction(habitat=hab))
            if gained:
                self._message = f"Harvested {gained} worm(s) from the {hab}."
            else:
                self._message = f"Nothing grows in the {hab} yet."

    def _on_pointer_up(self, pos: tuple[int, int]) -> None:
        card_id = self.tracker.card_id
        if card_id is None:
            return
        action = self.tracker.release(self._drop_zones(), pos)
        if action is None:
            self.ctx.assets.play_sound("click")
            return
        if self._dispatch(action):
            self.ctx.assets.play_sound("play")
            self._message = ""
        else:
            self.ctx.assets.play_sound("click")
            self._message = "That mushroom can't grow there right now."

    def update(self, dt: float) -> SceneTransition | None:
        return None

    # --- rendering -------------------------------------------------------

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 14, 10))
        fonts = self.ctx.assets.fonts

        draw_text(screen, fonts.big, "Mushland", (self.title_rect.x, self.title_rect.y + 6))
        if self._music_on:
            draw_text(screen, fonts.small, "theme on", (self.title_rect.right + 4, 30), color=(160, 200, 160))
        self.btn_draw.text = f"Draw ({len(self.state.deck)})"
        self.btn_draw.enabled = bool(self.state.deck)
        self.btn_draw.draw(screen, fonts.ui)
        hud = f"Worms {self.state.nutrients}  |  Spores {self.state.spores}  |  Score {display_score(self.state)}"
        draw_text(screen, fonts.ui, hud, (730, 24))

        for hab in HABITATS:
            self._draw_habitat(screen, hab)

        self._draw_hand(screen)

        status = self._message
        if not status and self._hover_card is not None and not self.tracker.is_dragging:
            status = f"{self._hover_card.name}: {POWER_TEXT[self._hover_card.power]}"
        if status:
            draw_text(screen, fonts.ui, status, (20, 494), color=(240, 200, 120))

        self._draw_drag_ghost(screen)

    def _draw_habitat(self, screen: pygame.Surface, hab: Habitat) -> None:
        fonts = self.ctx.assets.fonts
        rect = self._habitat_rect(hab)
        color = HABITAT_COLORS[hab]
        pygame.draw.rect(screen, blend(color, 0.4), rect, border_radius=10)

        dragged = self._dragged_card()
        border = (240, 240, 120) if dragged is not None and dragged.habitat == hab else (0, 0, 0)
        pygame.draw.rect(screen, border, rect, width=2, border_radius=10)
        played = self.state.habitats[hab]
        draw_text(screen, fonts.ui, f"{hab.capitalize()}  {len(played)}/{HABITAT_CAPACITY}", (rect.x + 12, rect.y + 12))

        target = legal_drop_slot(self.state, dragged.id) if dragged is not None else None
        for slot in range(HABITAT_CAPACITY):
            srect = self._slot_rect(hab, slot)
            if slot < len(played):
                card = played[slot]
                pygame.draw.rect(screen, blend(color, 0.9), srect, border_radius=8)
                pygame.draw.rect(screen, (0, 0, 0), srect, width=2, border_radius=8)
                art = self.ctx.assets.get_image(card.template.art_path, size=(56, 56))
                screen.blit(art, (srect.x + 4, srect.y + 4))
                draw_text(screen, fonts.ui, card.name, (srect.x + 68, srect.y + 10))
                draw_text(screen, fonts.small, f"{card.points} pts", (srect.x + 68, srect.y + 38))
                continue
            pygame.draw.rect(screen, blend(color, 0.2), srect, border_radius=8)
            if target == (hab, slot):
                pygame.draw.rect(screen, (240, 240, 120), srect, width=3, border_radius=8)

    def _dragged_card(self) -> Card | None:
        card_id = self.tracker.card_id
        if card_id is None:
            return None
        return find_in_hand(self.state, card_id)

    def _draw_card(self, screen: pygame.Surface, card: Card, rect: pygame.Rect, dim: bool = False) -> None:
        fonts = self.ctx.assets.fonts
        color = HABITAT_COLORS[card.habitat]
        pygame.draw.rect(screen, blend(color, 0.35 if dim else 0.8), rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), rect, width=2, border_radius=8)
        if dim:
            return
        art = self.ctx.assets.get_image(card.template.art_path, size=(rect.w - 12, 84))
        screen.blit(art, (rect.x + 6, rect.y + 6))
        draw_text(screen, fonts.small, card.name, (rect.x + 6, rect.y + 96))
        draw_text(screen, fonts.small, f"Cost {card.cost}   {card.points} pts", (rect.x + 6, rect.y + 118))
        draw_text(screen, fonts.small, card.habitat.capitalize(), (rect.x + 6, rect.y + 140), color=(200, 220, 200))
        short = POWER_SHORT[card.power]
        if short:
            draw_text(screen, fonts.small, short, (rect.x + 6, rect.y + 162), color=(180, 180, 240))

    def _draw_hand(self, screen: pygame.Surface) -> None:
        dragged_id = self.tracker.card_id
        for i, card in enumerate(self.state.hand[:HAND_VISIBLE]):  # limit for UI readability
            self._draw_card(screen, card, self._hand_rect(i), dim=card.id == dragged_id)
        extra = len(self.state.hand) - HAND_VISIBLE
        if extra > 0:
            draw_text(screen, self.ctx.assets.fonts.small, f"+{extra} more", (HAND_X, HAND_Y + CARD_H + 6))

    def _draw_drag_ghost(self, screen: pygame.Surface) -> None:
        card = self._dragged_card()
        pos = self.tracker.position
        if card is None or pos is None:
            return
        rect = pygame.Rect(0, 0, CARD_W, CARD_H)
        rect.center = (int(pos[0]), int(pos[1]))
        self._draw_card(screen, card, rect)
