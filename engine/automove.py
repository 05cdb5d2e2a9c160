"""
First-match search for a destination for a clicked card or run.

Tiers are tried in order: foundation (single cards only), then the other
tableau piles, then (Freecell, single cards) the first empty free cell.
Within a tier the lowest pile index wins; the resolver does not look for a
"best" destination such as the longest pile.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from engine.model import Location, Move
from engine.moves import get_cards_to_move, is_valid_move
from engine.state import FOUNDATION, FREECELL, FREECELL_SLOT, SOLITAIRE, SPIDER, TABLEAU, GameState

log = logging.getLogger(__name__)


def _foundation_targets(state: GameState) -> Iterator[Location]:
    for i in range(len(state.foundation)):
        yield Location(FOUNDATION, i)


def _tableau_targets(state: GameState, source: Location) -> Iterator[Location]:
    for i in range(len(state.tableau)):
        if source.kind == TABLEAU and source.pile_index == i:
            continue
        yield Location(TABLEAU, i)


def _freecell_targets(state: GameState) -> Iterator[Location]:
    for i, cell in enumerate(state.freecells):
        if cell is None:
            yield Location(FREECELL_SLOT, i)
            return


def _candidates(state: GameState, source: Location, count: int) -> Iterator[Location]:
    if state.game_type == SPIDER:
        yield from _tableau_targets(state, source)
        return
    # Cards already on a foundation stay there unless moved by hand.
    if state.game_type == SOLITAIRE and source.kind == FOUNDATION:
        return
    if count == 1:
        yield from _foundation_targets(state)
    yield from _tableau_targets(state, source)
    if state.game_type == FREECELL and count == 1:
        yield from _freecell_targets(state)


def find_auto_move(state: GameState, source: Location) -> Optional[Move]:
    cards = get_cards_to_move(state, source)
    if not cards:
        return None
    for destination in _candidates(state, source, len(cards)):
        move = Move(source, destination)
        if is_valid_move(state, move):
            log.debug("auto-move %s -> %s[%d]", source, destination.kind, destination.pile_index)
            return move
    log.debug("no auto-move for %s", source)
    return None
