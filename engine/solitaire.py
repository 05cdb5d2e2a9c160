"""Klondike rules: 7 tableau piles, 4 foundations, stock and waste."""
from __future__ import annotations

import logging
import random
from typing import Optional

from engine.cards import Card, create_deck, last, shuffle_deck
from engine.model import FACE_DOWN, OK, STOCK_EMPTY, WRONG_COLOR, WRONG_RANK, WRONG_SUIT, MoveCheck
from engine.state import SOLITAIRE, SolitaireState

log = logging.getLogger(__name__)

GAME_TYPE = SOLITAIRE
DECK_SIZE = 52
TABLEAU_COUNT = 7
FOUNDATION_COUNT = 4
DRAW_COUNTS = (1, 3)
# Removing cards from a tableau pile turns the newly exposed card face-up.
AUTO_FLIP = True


def create_initial_state(draw_count: int = 1, rng: random.Random | None = None) -> SolitaireState:
    if draw_count not in DRAW_COUNTS:
        draw_count = 1
    deck = shuffle_deck(create_deck(), rng)
    tableau = [[] for _ in range(TABLEAU_COUNT)]
    for i in range(TABLEAU_COUNT):
        for j in range(i, TABLEAU_COUNT):
            tableau[j].append(deck.pop())
    for pile in tableau:
        pile[-1] = pile[-1].flipped()
    log.debug("dealt solitaire: draw_count=%d stock=%d", draw_count, len(deck))
    return SolitaireState(
        tableau=tableau,
        foundation=[[] for _ in range(FOUNDATION_COUNT)],
        stock=deck,
        waste=[],
        draw_count=draw_count,
    )


def tableau_rejection(card: Card, destination: Optional[Card]) -> Optional[str]:
    if destination is None:
        # Only a King may start an empty pile.
        return None if card.rank == "K" else WRONG_RANK
    if not destination.face_up:
        return FACE_DOWN
    if card.color == destination.color:
        return WRONG_COLOR
    if destination.value != card.value + 1:
        return WRONG_RANK
    return None


def can_move_to_tableau(card: Card, destination: Optional[Card]) -> bool:
    return tableau_rejection(card, destination) is None


def foundation_rejection(card: Card, pile) -> Optional[str]:
    top = last(pile)
    if top is None:
        return None if card.rank == "A" else WRONG_RANK
    if card.suit != top.suit:
        return WRONG_SUIT
    if card.value != top.value + 1:
        return WRONG_RANK
    return None


def can_move_to_foundation(card: Card, pile) -> bool:
    return foundation_rejection(card, pile) is None


def is_run(cards) -> bool:
    """Alternating colors, each card one rank below the card under it."""
    for lower, upper in zip(cards, cards[1:]):
        if lower.color == upper.color:
            return False
        if lower.value != upper.value + 1:
            return False
    return True


def is_game_won(state: SolitaireState) -> bool:
    return all(len(pile) == 13 for pile in state.foundation)


def draw_from_stock(state: SolitaireState) -> tuple[Optional[SolitaireState], MoveCheck]:
    """Turn `draw_count` cards onto the waste, or recycle the waste when the stock is empty."""
    if not state.stock and not state.waste:
        return None, MoveCheck(STOCK_EMPTY)
    new_state = state.clone()
    if new_state.stock:
        count = min(new_state.draw_count, len(new_state.stock))
        drawn = [new_state.stock.pop().flipped() for _ in range(count)]
        # The packet keeps its order: the old stock top ends up on top of the waste.
        new_state.waste.extend(reversed(drawn))
    else:
        new_state.stock = [card.flipped(False) for card in reversed(new_state.waste)]
        new_state.waste = []
        log.debug("recycled waste into stock (%d cards)", len(new_state.stock))
    new_state.moves += 1
    return new_state, OK
