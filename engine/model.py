from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

NO_CARDS = "no-cards"
FACE_DOWN = "face-down"
NOT_A_RUN = "not-a-run"
WRONG_RANK = "wrong-rank"
WRONG_COLOR = "wrong-color"
WRONG_SUIT = "wrong-suit"
STACK_TOO_LARGE = "stack-too-large"
MULTIPLE_CARDS = "multiple-cards"
DESTINATION_OCCUPIED = "destination-occupied"
INVALID_DESTINATION = "invalid-destination"
EMPTY_PILE = "empty-pile"
STOCK_EMPTY = "stock-empty"

_MESSAGES = {
    NO_CARDS: "There is nothing to move there.",
    FACE_DOWN: "Face-down cards cannot be moved or built on.",
    NOT_A_RUN: "Only an ordered run can be moved together.",
    WRONG_RANK: "That card does not follow in rank.",
    WRONG_COLOR: "Cards must alternate in color.",
    WRONG_SUIT: "That card is of the wrong suit.",
    MULTIPLE_CARDS: "Only one card can be moved there.",
    DESTINATION_OCCUPIED: "That cell is already occupied.",
    INVALID_DESTINATION: "Cards cannot be moved there.",
    EMPTY_PILE: "You cannot deal new cards while there is an empty tableau pile.",
    STOCK_EMPTY: "No cards left to deal.",
}


@dataclass(frozen=True, slots=True)
class Location:
    """A place on the table. `card_index` is -1 for a click on an empty pile."""

    kind: str
    pile_index: int
    card_index: int = -1


@dataclass(frozen=True, slots=True)
class Move:
    source: Location
    destination: Location


@dataclass(frozen=True, slots=True)
class MoveCheck:
    """Outcome of validating a move: `reason` is None when the move is legal."""

    reason: Optional[str] = None
    attempted: int = 0
    allowed: int = 0

    @property
    def ok(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        if self.reason is None:
            return ""
        if self.reason == STACK_TOO_LARGE:
            return f"Cannot move {self.attempted} cards. Only {self.allowed} are movable."
        return _MESSAGES.get(self.reason, self.reason)


OK = MoveCheck()
