from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterable, Optional

NUM_PER_SUIT = 13
SUITS = ("SPADES", "HEARTS", "DIAMONDS", "CLUBS")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
RANK_VALUES = {rank: i + 1 for i, rank in enumerate(RANKS)}
SUIT_SYMBOLS = {"SPADES": "♠", "HEARTS": "♥", "DIAMONDS": "♦", "CLUBS": "♣"}
RED_SUITS = ("HEARTS", "DIAMONDS")


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card. Identity is (suit, rank); flipping yields a new card."""

    suit: str
    rank: str
    face_up: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return self.suit, self.rank

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    @property
    def color(self) -> str:
        if self.suit in RED_SUITS:
            return "red"
        return "black"

    def flipped(self, face_up: bool = True) -> Card:
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    def label(self) -> str:
        if not self.face_up:
            return "---"
        return SUIT_SYMBOLS[self.suit] + self.rank

    def __str__(self):
        return self.label()


def last(pile) -> Optional[Card]:
    if len(pile) == 0:
        return None
    return pile[len(pile) - 1]


def create_deck(suits: Iterable[str] = SUITS, copies: int = 1, face_up: bool = False) -> list[Card]:
    """Build `copies` suit-major runs of A..K for each suit in `suits`."""
    deck = []
    for _ in range(copies):
        for suit in suits:
            for rank in RANKS:
                deck.append(Card(suit, rank, face_up))
    return deck


def shuffle_deck(cards: list, rng: random.Random | None = None) -> list:
    """Fisher-Yates shuffle in place; pass a seeded `random.Random` for repeatable deals."""
    shuffle_rng = rng if rng is not None else random
    shuffle_rng.shuffle(cards)
    return cards
