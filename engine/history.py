from __future__ import annotations

import logging
from collections import deque
from typing import Optional

from engine.state import GameState

log = logging.getLogger(__name__)

UNDO_LIMIT = 15


class HistoryRecorder:
    """
    Bounded stack of earlier game states.
    push() before every state change, undo() to get the previous state back.
    When full, the oldest state is dropped.
    """

    def __init__(self, limit: int = UNDO_LIMIT):
        self.limit = limit
        self.lst: deque = deque(maxlen=limit)

    def __len__(self):
        return len(self.lst)

    @property
    def can_undo(self) -> bool:
        return len(self.lst) > 0

    def push(self, state: GameState):
        self.lst.append(state)

    def undo(self) -> Optional[GameState]:
        if not self.lst:
            return None
        state = self.lst.pop()
        log.debug("undo, %d state(s) left", len(self.lst))
        return state

    def clear(self):
        self.lst.clear()
