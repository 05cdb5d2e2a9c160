"""Spider rules: 104 cards over 10 piles, same-suit K..A runs are cleared off."""
from __future__ import annotations

import logging
import random
from typing import Optional

from engine.cards import NUM_PER_SUIT, SUITS, Card, create_deck, shuffle_deck
from engine.model import EMPTY_PILE, INVALID_DESTINATION, OK, STOCK_EMPTY, WRONG_RANK, MoveCheck
from engine.state import SPIDER, SpiderState

log = logging.getLogger(__name__)

GAME_TYPE = SPIDER
DECK_SIZE = 104
TABLEAU_COUNT = 10
INITIAL_DEAL = 54
SUIT_COUNTS = (1, 2, 4)
SETS_TO_WIN = 8
COMPLETED_SET_BONUS = 100
INITIAL_SCORE = 500
AUTO_FLIP = True


def create_spider_deck(suit_count: int) -> list[Card]:
    """Fill the 8 suit slots of a double deck with `suit_count` distinct suits."""
    return create_deck(SUITS[:suit_count], copies=SETS_TO_WIN // suit_count)


def create_initial_state(suit_count: int = 2, rng: random.Random | None = None) -> SpiderState:
    if suit_count not in SUIT_COUNTS:
        suit_count = 2
    deck = shuffle_deck(create_spider_deck(suit_count), rng)
    tableau = [[] for _ in range(TABLEAU_COUNT)]
    for i in range(INITIAL_DEAL):
        tableau[i % TABLEAU_COUNT].append(deck.pop())
    for pile in tableau:
        pile[-1] = pile[-1].flipped()
    log.debug("dealt spider: suits=%d stock=%d", suit_count, len(deck))
    return SpiderState(
        tableau=tableau,
        foundation=[],
        stock=deck,
        suit_count=suit_count,
        score=INITIAL_SCORE,
    )


def tableau_rejection(card: Card, destination: Optional[Card]) -> Optional[str]:
    if destination is None:
        return None
    # Suit does not matter when placing, only when moving a group.
    if destination.value != card.value + 1:
        return WRONG_RANK
    return None


def can_move_to_tableau(card: Card, destination: Optional[Card]) -> bool:
    return tableau_rejection(card, destination) is None


def foundation_rejection(card: Card, pile) -> Optional[str]:
    return INVALID_DESTINATION


def can_move_to_foundation(card: Card, pile) -> bool:
    return False


def is_run(cards) -> bool:
    """Same suit throughout, each card one rank below the card under it."""
    for lower, upper in zip(cards, cards[1:]):
        if lower.suit != upper.suit:
            return False
        if lower.value != upper.value + 1:
            return False
    return True


def check_for_completed_set(pile) -> tuple[list[Card], Optional[list[Card]]]:
    """Split a same-suit K..A run off the top of `pile` if there is one."""
    if len(pile) < NUM_PER_SUIT:
        return list(pile), None
    top = pile[len(pile) - NUM_PER_SUIT:]
    if top[0].rank != "K" or not is_run(top):
        return list(pile), None
    return list(pile[:len(pile) - NUM_PER_SUIT]), [card.flipped() for card in top]


def collect_completed_sets(state: SpiderState) -> int:
    """Move completed sets to the foundation in place; returns how many were found."""
    found = 0
    scanning = True
    while scanning:
        scanning = False
        for i, pile in enumerate(state.tableau):
            remaining, completed = check_for_completed_set(pile)
            if completed is None:
                continue
            if remaining:
                remaining[-1] = remaining[-1].flipped()
            state.tableau[i] = remaining
            state.foundation.append(completed)
            state.completed_sets += 1
            state.score += COMPLETED_SET_BONUS
            found += 1
            log.debug("completed %s set on pile %d", completed[0].suit, i)
            # Restart from the first pile after every removal.
            scanning = True
            break
    return found


def check_for_completed_sets(state: SpiderState) -> SpiderState:
    """Return a state with every completed set moved to the foundation, or `state` itself."""
    new_state = state.clone()
    if collect_completed_sets(new_state) == 0:
        return state
    return new_state


def deal_from_stock(state: SpiderState) -> tuple[Optional[SpiderState], MoveCheck]:
    """Deal one face-up card onto every tableau pile."""
    if len(state.stock) < TABLEAU_COUNT:
        return None, MoveCheck(STOCK_EMPTY)
    if any(len(pile) == 0 for pile in state.tableau):
        return None, MoveCheck(EMPTY_PILE)
    new_state = state.clone()
    for pile in new_state.tableau:
        pile.append(new_state.stock.pop().flipped())
    new_state.moves += 1
    collect_completed_sets(new_state)
    log.debug("dealt a row, %d cards left in stock", len(new_state.stock))
    return new_state, OK


def is_game_won(state: SpiderState) -> bool:
    return state.completed_sets == SETS_TO_WIN
