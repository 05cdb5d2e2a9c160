from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from engine.cards import Card

SOLITAIRE = "Solitaire"
FREECELL = "Freecell"
SPIDER = "Spider"
GAME_TYPES = (SOLITAIRE, FREECELL, SPIDER)

TABLEAU = "tableau"
WASTE = "waste"
FOUNDATION = "foundation"
FREECELL_SLOT = "freecell"
STOCK = "stock"
LOCATION_KINDS = (TABLEAU, WASTE, FOUNDATION, FREECELL_SLOT, STOCK)

Pile = list[Card]


def _copy_piles(piles):
    return [list(pile) for pile in piles]


@dataclass(slots=True)
class SolitaireState:
    tableau: list[Pile]
    foundation: list[Pile]
    stock: Pile
    waste: Pile
    draw_count: int = 1
    score: int = 0
    moves: int = 0

    game_type: ClassVar[str] = SOLITAIRE

    def clone(self) -> SolitaireState:
        return SolitaireState(
            tableau=_copy_piles(self.tableau),
            foundation=_copy_piles(self.foundation),
            stock=list(self.stock),
            waste=list(self.waste),
            draw_count=self.draw_count,
            score=self.score,
            moves=self.moves,
        )

    def card_count(self) -> int:
        return (sum(len(p) for p in self.tableau) + sum(len(p) for p in self.foundation)
                + len(self.stock) + len(self.waste))


@dataclass(slots=True)
class FreecellState:
    tableau: list[Pile]
    foundation: list[Pile]
    freecells: list[Optional[Card]]
    score: int = 0
    moves: int = 0

    game_type: ClassVar[str] = FREECELL

    def clone(self) -> FreecellState:
        return FreecellState(
            tableau=_copy_piles(self.tableau),
            foundation=_copy_piles(self.foundation),
            freecells=list(self.freecells),
            score=self.score,
            moves=self.moves,
        )

    def card_count(self) -> int:
        return (sum(len(p) for p in self.tableau) + sum(len(p) for p in self.foundation)
                + sum(1 for c in self.freecells if c is not None))


@dataclass(slots=True)
class SpiderState:
    tableau: list[Pile]
    foundation: list[Pile]
    stock: Pile
    suit_count: int = 2
    completed_sets: int = 0
    score: int = 500
    moves: int = 0

    game_type: ClassVar[str] = SPIDER

    def clone(self) -> SpiderState:
        return SpiderState(
            tableau=_copy_piles(self.tableau),
            foundation=_copy_piles(self.foundation),
            stock=list(self.stock),
            suit_count=self.suit_count,
            completed_sets=self.completed_sets,
            score=self.score,
            moves=self.moves,
        )

    def card_count(self) -> int:
        return (sum(len(p) for p in self.tableau) + sum(len(p) for p in self.foundation)
                + len(self.stock))


GameState = Union[SolitaireState, FreecellState, SpiderState]


@dataclass
class GameConfig:
    game_type: str = SOLITAIRE
    solitaire_draw_count: int = 1
    spider_suits: int = 2
    auto_move: bool = True
    # Fixed seed for a repeatable deal; None deals from the global random source.
    seed: Optional[int] = None
