from __future__ import annotations

import logging
import random
import time
from typing import Callable, Optional

from engine.history import UNDO_LIMIT, HistoryRecorder
from engine.interaction import NOTHING, ClickResult, process_click
from engine.model import Location
from engine.rules import create_initial_state, final_score, is_game_won
from engine.state import STOCK, GameConfig, GameState
from play.listener import SessionListener
from play.settings_store import DEFAULT_SETTINGS, config_from_settings

log = logging.getLogger(__name__)


class GameSession:
    """
    Owns the one live game: its state, the current selection, the undo history
    and the clock. Every change goes through the engine; the session only
    applies the results and watches for the win.
    """

    def __init__(self, settings=None, listener: SessionListener | None = None,
                 rng: random.Random | None = None, clock: Callable[[], float] = time.monotonic,
                 undo_limit: int = UNDO_LIMIT):
        self.config: GameConfig = config_from_settings(settings if settings is not None else DEFAULT_SETTINGS)
        self.listener = listener if listener is not None else SessionListener()
        self.listener.session = self
        self.rng = rng
        self.clock = clock

        self.state: Optional[GameState] = None
        self.selection: Optional[Location] = None
        self.highlighted: Optional[Location] = None
        self.history = HistoryRecorder(undo_limit)
        self.won = False
        self.final_score: Optional[int] = None
        self._started_at = 0.0
        self._elapsed_before = 0.0
        self._frozen_elapsed: Optional[float] = None

    @property
    def auto_move(self) -> bool:
        return self.config.auto_move

    def set_auto_move(self, enabled: bool):
        self.config.auto_move = bool(enabled)

    def new_game(self, config: GameConfig | None = None):
        if config is not None:
            self.config = config
        if self.state is not None and not self.won:
            self.listener.on_abandon(self.state)
        self.load_state(create_initial_state(self.config, self.rng))
        log.info("new %s game", self.state.game_type)
        self.listener.on_start()

    def load_state(self, state: GameState, elapsed_sec: float = 0.0):
        """Take `state` as the live game, e.g. a saved game or a prepared test position."""
        self.state = state
        self.selection = None
        self.highlighted = None
        self.history.clear()
        self.won = False
        self.final_score = None
        self._frozen_elapsed = None
        self._elapsed_before = max(0.0, elapsed_sec)
        self._started_at = self.clock()

    def elapsed(self) -> float:
        if self._frozen_elapsed is not None:
            return self._frozen_elapsed
        return self._elapsed_before + max(0.0, self.clock() - self._started_at)

    def click(self, kind: str, pile_index: int, card_index: int = -1) -> ClickResult:
        if self.state is None or self.won:
            return NOTHING
        result = process_click(self.state, self.selection, Location(kind, pile_index, card_index),
                               self.config.auto_move)
        self.selection = result.new_selection
        self.highlighted = result.highlighted
        if result.new_state is not None:
            self._update_state(result.new_state, result.should_push_history)
        elif result.check is not None and not result.check.ok:
            self.listener.on_rejected(result.check)
        return result

    def draw(self) -> ClickResult:
        return self.click(STOCK, 0)

    def undo(self) -> bool:
        if self.state is None or self.won:
            return False
        previous = self.history.undo()
        if previous is None:
            return False
        self.state = previous
        self.selection = None
        self.highlighted = None
        self.listener.on_state_change(previous)
        return True

    def _update_state(self, new_state: GameState, push_history: bool):
        if push_history:
            self.history.push(self.state)
        self.state = new_state
        if is_game_won(new_state):
            self._finish()
        self.listener.on_state_change(self.state)
        if self.won:
            self.listener.on_win(self.final_score, self._frozen_elapsed)

    def _finish(self):
        elapsed = self.elapsed()
        self._frozen_elapsed = elapsed
        self.won = True
        finished = self.state.clone()
        finished.score = final_score(finished, elapsed)
        self.state = finished
        self.final_score = finished.score
        self.selection = None
        log.info("%s game won in %d moves, score %d", finished.game_type, finished.moves, finished.score)
