"""
JSON-safe encoding of game states.

Decoded states are used as they are: nothing is re-dealt or recomputed, so a
state built by a test or a save file is authoritative.
"""
from __future__ import annotations

from typing import Any, Optional

from engine.cards import RANKS, SUITS, Card
from engine.state import FREECELL, SOLITAIRE, SPIDER, FreecellState, GameState, SolitaireState, SpiderState


def encode_card(card: Card) -> dict:
    return {"suit": card.suit, "rank": card.rank, "faceUp": card.face_up}


def decode_card(data: Any) -> Card:
    if not isinstance(data, dict):
        raise ValueError(f"card must be an object, got {data!r}")
    suit = data.get("suit")
    rank = str(data.get("rank"))
    if suit not in SUITS or rank not in RANKS:
        raise ValueError(f"unknown card {suit!r} {rank!r}")
    return Card(suit, rank, bool(data.get("faceUp", False)))


def encode_pile(pile) -> list:
    return [encode_card(card) for card in pile]


def decode_pile(data: Any) -> list[Card]:
    if not isinstance(data, list):
        raise ValueError(f"pile must be a list, got {type(data).__name__}")
    return [decode_card(c) for c in data]


def _decode_piles(data: Any, name: str) -> list[list[Card]]:
    if not isinstance(data, list):
        raise ValueError(f"{name} must be a list of piles")
    return [decode_pile(p) for p in data]


def _as_int(data: dict, key: str, default: int) -> int:
    try:
        return int(data.get(key, default))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be an integer") from exc


def encode_state(state: GameState) -> dict:
    out = {
        "gameType": state.game_type,
        "tableau": [encode_pile(p) for p in state.tableau],
        "foundation": [encode_pile(p) for p in state.foundation],
        "score": state.score,
        "moves": state.moves,
    }
    if state.game_type == SOLITAIRE:
        out["stock"] = encode_pile(state.stock)
        out["waste"] = encode_pile(state.waste)
        out["drawCount"] = state.draw_count
    elif state.game_type == FREECELL:
        out["freecells"] = [None if c is None else encode_card(c) for c in state.freecells]
    else:
        out["stock"] = encode_pile(state.stock)
        out["suitCount"] = state.suit_count
        out["completedSets"] = state.completed_sets
    return out


def decode_state(data: Any) -> GameState:
    if not isinstance(data, dict):
        raise ValueError("state must be an object")
    game_type = data.get("gameType")
    tableau = _decode_piles(data.get("tableau"), "tableau")
    foundation = _decode_piles(data.get("foundation", []), "foundation")
    score = _as_int(data, "score", 0)
    moves = max(0, _as_int(data, "moves", 0))

    if game_type == SOLITAIRE:
        return SolitaireState(
            tableau=tableau,
            foundation=foundation,
            stock=decode_pile(data.get("stock", [])),
            waste=decode_pile(data.get("waste", [])),
            draw_count=_as_int(data, "drawCount", 1),
            score=score,
            moves=moves,
        )
    if game_type == FREECELL:
        raw_cells = data.get("freecells", [None] * 4)
        if not isinstance(raw_cells, list):
            raise ValueError("freecells must be a list")
        freecells: list[Optional[Card]] = [None if c is None else decode_card(c) for c in raw_cells]
        return FreecellState(tableau=tableau, foundation=foundation, freecells=freecells,
                             score=score, moves=moves)
    if game_type == SPIDER:
        return SpiderState(
            tableau=tableau,
            foundation=foundation,
            stock=decode_pile(data.get("stock", [])),
            suit_count=_as_int(data, "suitCount", 2),
            completed_sets=_as_int(data, "completedSets", len(foundation)),
            score=score,
            moves=moves,
        )
    raise ValueError(f"unknown game type {game_type!r}")
