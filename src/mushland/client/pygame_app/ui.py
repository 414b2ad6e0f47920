from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from mushland.engine.types import Habitat, Power


Color = tuple[int, int, int]

HABITAT_COLORS: dict[Habitat, Color] = {
    "forest": (45, 106, 79),
    "log": (139, 90, 43),
    "soil": (91, 70, 54),
}

POWER_TEXT: dict[Power | None, str] = {
    "gain_spore": "Gain 1 Spore when played.",
    "gain_nutrient": "Gain 1 Worm (nutrient) when played.",
    "draw_card": "Draw 1 card immediately when played.",
    None: "No special ability.",
}


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def blend(color: Color, alpha: float, base: Color = (12, 14, 10)) -> Color:
    return (
        int(base[0] + (color[0] - base[0]) * alpha),
        int(base[1] + (color[1] - base[1]) * alpha),
        int(base[2] + (color[2] - base[2]) * alpha),
    )


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)
