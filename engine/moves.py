"""
Move validation and execution.

Executing a move never touches the caller's state: it works on `state.clone()`
and returns the copy, so states kept in the undo history stay intact.
"""
from __future__ import annotations

import logging
from typing import Optional

from engine import freecell, solitaire, spider
from engine.cards import Card, last
from engine.model import (
    DESTINATION_OCCUPIED,
    FACE_DOWN,
    INVALID_DESTINATION,
    MULTIPLE_CARDS,
    NO_CARDS,
    NOT_A_RUN,
    OK,
    STACK_TOO_LARGE,
    Location,
    Move,
    MoveCheck,
)
from engine.rules import variant_for
from engine.state import (
    FOUNDATION,
    FREECELL,
    FREECELL_SLOT,
    SOLITAIRE,
    SPIDER,
    TABLEAU,
    WASTE,
    GameState,
)

log = logging.getLogger(__name__)

FOUNDATION_SCORE = 10
SPIDER_MOVE_PENALTY = 1


def _in_range(seq, index: int) -> bool:
    return 0 <= index < len(seq)


def get_cards_to_move(state: GameState, source: Location) -> list[Card]:
    """The ordered cards that leave `source`; empty when there is nothing to take."""
    kind = source.kind
    if kind == TABLEAU:
        if not _in_range(state.tableau, source.pile_index):
            return []
        pile = state.tableau[source.pile_index]
        if not _in_range(pile, source.card_index):
            return []
        return pile[source.card_index:]
    if kind == WASTE and state.game_type == SOLITAIRE:
        top = last(state.waste)
        return [top] if top is not None else []
    if kind == FOUNDATION and state.game_type == SOLITAIRE:
        if not _in_range(state.foundation, source.pile_index):
            return []
        top = last(state.foundation[source.pile_index])
        return [top] if top is not None else []
    if kind == FREECELL_SLOT and state.game_type == FREECELL:
        if not _in_range(state.freecells, source.pile_index):
            return []
        card = state.freecells[source.pile_index]
        return [card] if card is not None else []
    return []


def _is_empty_tableau(state: GameState, index: int) -> bool:
    return _in_range(state.tableau, index) and len(state.tableau[index]) == 0


def validate_move(state: GameState, move: Move) -> MoveCheck:
    source, dest = move.source, move.destination
    cards = get_cards_to_move(state, source)
    if not cards:
        return MoveCheck(NO_CARDS)
    if not cards[0].face_up:
        return MoveCheck(FACE_DOWN)
    variant = variant_for(state)
    if source.kind == TABLEAU and not variant.is_run(cards):
        return MoveCheck(NOT_A_RUN)
    if dest.kind == source.kind and (dest.kind == FOUNDATION or dest.pile_index == source.pile_index):
        return MoveCheck(INVALID_DESTINATION)

    if state.game_type == FREECELL:
        destination_is_empty = dest.kind == TABLEAU and _is_empty_tableau(state, dest.pile_index)
        allowed = freecell.get_movable_card_count(state, destination_is_empty)
        if len(cards) > allowed:
            return MoveCheck(STACK_TOO_LARGE, attempted=len(cards), allowed=allowed)

    if dest.kind == TABLEAU:
        if not _in_range(state.tableau, dest.pile_index):
            return MoveCheck(INVALID_DESTINATION)
        reason = variant.tableau_rejection(cards[0], last(state.tableau[dest.pile_index]))
        return MoveCheck(reason) if reason else OK

    if dest.kind == FOUNDATION:
        if state.game_type == SPIDER or not _in_range(state.foundation, dest.pile_index):
            return MoveCheck(INVALID_DESTINATION)
        if len(cards) != 1:
            return MoveCheck(MULTIPLE_CARDS)
        reason = variant.foundation_rejection(cards[0], state.foundation[dest.pile_index])
        return MoveCheck(reason) if reason else OK

    if dest.kind == FREECELL_SLOT and state.game_type == FREECELL:
        if not _in_range(state.freecells, dest.pile_index):
            return MoveCheck(INVALID_DESTINATION)
        if len(cards) != 1:
            return MoveCheck(MULTIPLE_CARDS)
        if state.freecells[dest.pile_index] is not None:
            return MoveCheck(DESTINATION_OCCUPIED)
        return OK

    return MoveCheck(INVALID_DESTINATION)


def is_valid_move(state: GameState, move: Move) -> bool:
    return validate_move(state, move).ok


def execute_move(state: GameState, move: Move) -> GameState:
    """Carry out an already validated move on a copy of `state`."""
    cards = get_cards_to_move(state, move.source)
    if not cards:
        return state
    variant = variant_for(state)
    new_state = state.clone()
    source, dest = move.source, move.destination

    if source.kind == TABLEAU:
        pile = new_state.tableau[source.pile_index]
        del pile[source.card_index:]
        if variant.AUTO_FLIP and pile and not pile[-1].face_up:
            pile[-1] = pile[-1].flipped()
    elif source.kind == WASTE:
        new_state.waste.pop()
    elif source.kind == FOUNDATION:
        new_state.foundation[source.pile_index].pop()
    elif source.kind == FREECELL_SLOT:
        new_state.freecells[source.pile_index] = None

    if dest.kind == TABLEAU:
        new_state.tableau[dest.pile_index].extend(cards)
    elif dest.kind == FOUNDATION:
        new_state.foundation[dest.pile_index].extend(cards)
    elif dest.kind == FREECELL_SLOT:
        new_state.freecells[dest.pile_index] = cards[0]

    new_state.moves += 1
    if dest.kind == FOUNDATION:
        new_state.score += FOUNDATION_SCORE
    if source.kind == FOUNDATION:
        new_state.score -= FOUNDATION_SCORE
    if new_state.game_type == SPIDER:
        new_state.score -= SPIDER_MOVE_PENALTY
        spider.collect_completed_sets(new_state)

    log.debug("moved %d card(s) %s[%d] -> %s[%d]", len(cards), source.kind, source.pile_index,
              dest.kind, dest.pile_index)
    return new_state


def apply_move(state: GameState, move: Move) -> tuple[Optional[GameState], MoveCheck]:
    check = validate_move(state, move)
    if not check.ok:
        log.debug("rejected move %s: %s", move, check.reason)
        return None, check
    return execute_move(state, move), check


def draw_from_stock(state: GameState) -> tuple[Optional[GameState], MoveCheck]:
    """Turn cards from the stock (Solitaire) or deal a row (Spider)."""
    if state.game_type == SOLITAIRE:
        return solitaire.draw_from_stock(state)
    if state.game_type == SPIDER:
        return spider.deal_from_stock(state)
    return None, MoveCheck(INVALID_DESTINATION)
