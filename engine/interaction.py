"""
Click handling for the table.

The controller has two states: nothing selected, or a source selected.
`process_click` takes the current selection and one click and returns a
`ClickResult`; the caller owns the game state, the selection and the undo
history and applies the result itself.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from engine.automove import find_auto_move
from engine.cards import Card, last
from engine.model import Location, Move, MoveCheck
from engine.moves import apply_move, draw_from_stock, execute_move, get_cards_to_move
from engine.rules import variant_for
from engine.state import FOUNDATION, FREECELL, FREECELL_SLOT, SOLITAIRE, STOCK, TABLEAU, WASTE, GameState

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClickResult:
    new_state: Optional[GameState] = None
    new_selection: Optional[Location] = None
    highlighted: Optional[Location] = None
    should_push_history: bool = False
    # Why a move was refused, for the caller to show to the player.
    check: Optional[MoveCheck] = None


NOTHING = ClickResult()


def get_clicked_card(state: GameState, click: Location) -> Optional[Card]:
    if click.card_index == -1:
        return None
    if click.kind == TABLEAU:
        if not 0 <= click.pile_index < len(state.tableau):
            return None
        pile = state.tableau[click.pile_index]
        return pile[click.card_index] if 0 <= click.card_index < len(pile) else None
    if click.kind == WASTE and state.game_type == SOLITAIRE:
        return last(state.waste)
    if click.kind == FOUNDATION:
        if not 0 <= click.pile_index < len(state.foundation):
            return None
        return last(state.foundation[click.pile_index])
    if click.kind == FREECELL_SLOT and state.game_type == FREECELL:
        if not 0 <= click.pile_index < len(state.freecells):
            return None
        return state.freecells[click.pile_index]
    return None


def is_movable(state: GameState, location: Location) -> bool:
    """A face-up card whose pile suffix is a run the variant allows to move together."""
    card = get_clicked_card(state, location)
    if card is None or not card.face_up:
        return False
    cards = get_cards_to_move(state, location)
    if not cards:
        return False
    if location.kind == TABLEAU:
        return variant_for(state).is_run(cards)
    return True


def _reveal(state: GameState, click: Location) -> ClickResult:
    new_state = state.clone()
    pile = new_state.tableau[click.pile_index]
    pile[-1] = pile[-1].flipped()
    new_state.moves += 1
    log.debug("revealed top card of pile %d", click.pile_index)
    return ClickResult(new_state=new_state, should_push_history=True)


def _handle_stock(state: GameState) -> ClickResult:
    new_state, check = draw_from_stock(state)
    if new_state is None:
        return ClickResult(check=check)
    return ClickResult(new_state=new_state, should_push_history=True, check=check)


def _handle_first_click(state: GameState, click: Location, auto_move: bool) -> ClickResult:
    card = get_clicked_card(state, click)
    if card is None:
        return NOTHING
    if not card.face_up:
        if (state.game_type == SOLITAIRE and click.kind == TABLEAU
                and click.card_index == len(state.tableau[click.pile_index]) - 1):
            return _reveal(state, click)
        return NOTHING
    if not is_movable(state, click):
        return NOTHING
    if not auto_move:
        return ClickResult(new_selection=click)

    move = find_auto_move(state, click)
    if move is None:
        return NOTHING
    return ClickResult(
        new_state=execute_move(state, move),
        highlighted=move.destination,
        should_push_history=True,
    )


def _handle_destination_click(state: GameState, selection: Location, click: Location) -> ClickResult:
    move = Move(selection, Location(click.kind, click.pile_index))
    new_state, check = apply_move(state, move)
    if new_state is not None:
        return ClickResult(
            new_state=new_state,
            highlighted=move.destination,
            should_push_history=True,
            check=check,
        )
    if is_movable(state, click):
        return ClickResult(new_selection=click, check=check)
    return ClickResult(check=check)


def process_click(state: GameState, selection: Optional[Location], click: Location,
                  auto_move: bool) -> ClickResult:
    if click.kind == STOCK:
        return _handle_stock(state)
    if selection is not None:
        if selection == click:
            return NOTHING
        return _handle_destination_click(state, selection, click)
    return _handle_first_click(state, click, auto_move)
