"""Routes game-type specific questions to the matching variant module."""
from __future__ import annotations

import logging
import random

from engine import freecell, solitaire, spider
from engine.state import FREECELL, SOLITAIRE, SPIDER, GameConfig, GameState

log = logging.getLogger(__name__)

VARIANTS = {
    SOLITAIRE: solitaire,
    FREECELL: freecell,
    SPIDER: spider,
}

BASE_SCORE = 10000


def variant_for(state: GameState):
    return VARIANTS[state.game_type]


def create_initial_state(config: GameConfig, rng: random.Random | None = None) -> GameState:
    if rng is None and config.seed is not None:
        rng = random.Random(config.seed)
    if config.game_type == FREECELL:
        state = freecell.create_initial_state(rng=rng)
    elif config.game_type == SPIDER:
        state = spider.create_initial_state(config.spider_suits, rng=rng)
    else:
        state = solitaire.create_initial_state(config.solitaire_draw_count, rng=rng)
    log.debug("created %s game (seed=%s)", state.game_type, config.seed)
    return state


def is_game_won(state: GameState) -> bool:
    return variant_for(state).is_game_won(state)


def calculate_score(moves: int, elapsed_seconds: float) -> int:
    """Time and move based score used when a Solitaire or Freecell game is won."""
    if elapsed_seconds <= 0:
        return 0
    time_penalty = int(elapsed_seconds // 10) * 2
    move_penalty = moves * 5
    return max(0, BASE_SCORE - time_penalty - move_penalty)


def final_score(state: GameState, elapsed_seconds: float) -> int:
    if state.game_type == SPIDER:
        return state.score
    score = calculate_score(state.moves, elapsed_seconds)
    if score > 0:
        return score
    return state.score
