from __future__ import annotations

import random

from .types import Card, CardCatalog


def build_deck(
    catalog: CardCatalog,
    copies: int,
    rng: random.Random,
    first_id: int = 0,
) -> tuple[Card, ...]:
    """Instantiate `copies` of every template and shuffle once.

    Ids are assigned in catalog order before the shuffle, so they are unique
    and independent of the permutation.
    """
    if copies < 1:
        raise ValueError("copies must be at least 1.")
    if not catalog.templates:
        raise ValueError("Catalog has no card templates.")

    cards: list[Card] = []
    next_id = first_id
    for _ in range(copies):
        for template in catalog.templates:
            cards.append(Card(id=next_id, template=template))
            next_id += 1
    rng.shuffle(cards)
    return tuple(cards)
