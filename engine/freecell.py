"""Freecell rules: everything dealt face-up, 4 free cells, supermove limit."""
from __future__ import annotations

import logging
import random
from typing import Optional

from engine import solitaire
from engine.cards import Card, create_deck, shuffle_deck
from engine.model import WRONG_COLOR, WRONG_RANK
from engine.state import FREECELL, FreecellState

log = logging.getLogger(__name__)

GAME_TYPE = FREECELL
DECK_SIZE = 52
TABLEAU_COUNT = 8
FOUNDATION_COUNT = 4
FREECELL_COUNT = 4
AUTO_FLIP = False


def create_initial_state(rng: random.Random | None = None) -> FreecellState:
    deck = shuffle_deck(create_deck(face_up=True), rng)
    tableau = [[] for _ in range(TABLEAU_COUNT)]
    for i, card in enumerate(deck):
        tableau[i % TABLEAU_COUNT].append(card)
    log.debug("dealt freecell: %s", [len(p) for p in tableau])
    return FreecellState(
        tableau=tableau,
        foundation=[[] for _ in range(FOUNDATION_COUNT)],
        freecells=[None] * FREECELL_COUNT,
    )


def tableau_rejection(card: Card, destination: Optional[Card]) -> Optional[str]:
    if destination is None:
        return None
    if card.color == destination.color:
        return WRONG_COLOR
    if destination.value != card.value + 1:
        return WRONG_RANK
    return None


def can_move_to_tableau(card: Card, destination: Optional[Card]) -> bool:
    return tableau_rejection(card, destination) is None


foundation_rejection = solitaire.foundation_rejection
can_move_to_foundation = solitaire.can_move_to_foundation
is_run = solitaire.is_run


def get_movable_card_count(state: FreecellState, destination_is_empty: bool) -> int:
    """
    Largest run that can be moved in one go:
    (1 + empty free cells) * 2 ** empty tableau piles,
    not counting the destination pile itself when it is empty.
    """
    empty_cells = sum(1 for cell in state.freecells if cell is None)
    empty_piles = sum(1 for pile in state.tableau if len(pile) == 0)
    if destination_is_empty and empty_piles > 0:
        empty_piles -= 1
    return (1 + empty_cells) * (2 ** empty_piles)


def is_game_won(state: FreecellState) -> bool:
    return all(len(pile) == 13 for pile in state.foundation)
