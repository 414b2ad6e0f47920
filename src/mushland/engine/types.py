from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Habitat = Literal["forest", "log", "soil"]
Power = Literal["gain_spore", "gain_nutrient", "draw_card"]

# Fixed order used wherever habitats are enumerated (drop-zone hit tests included).
HABITATS: tuple[Habitat, ...] = ("forest", "log", "soil")


@dataclass(frozen=True)
class CardTemplate:
    id: str
    name: str
    habitat: Habitat
    cost: int
    points: int
    power: Power | None = None
    art_path: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if self.cost < 0 or self.points < 0:
            raise ValueError(f"Card {self.id!r}: cost and points must be non-negative.")


@dataclass(frozen=True)
class Card:
    """A single card in play. `id` is unique for the whole session."""

    id: int
    template: CardTemplate

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def habitat(self) -> Habitat:
        return self.template.habitat

    @property
    def cost(self) -> int:
        return self.template.cost

    @property
    def points(self) -> int:
        return self.template.points

    @property
    def power(self) -> Power | None:
        return self.template.power


@dataclass(frozen=True)
class CardCatalog:
    """Immutable, ordered list of card templates used to build the deck."""

    templates: tuple[CardTemplate, ...]

    def get(self, template_id: str) -> CardTemplate:
        for t in self.templates:
            if t.id == template_id:
                return t
        raise KeyError(template_id)

    def all_ids(self) -> Sequence[str]:
        return [t.id for t in self.templates]
