from engine.model import MoveCheck
from engine.state import GameState


class SessionListener:

    def __init__(self):
        self.session = None

    def on_start(self):
        pass

    def on_state_change(self, state: GameState):
        """
        Invoked after the session has a new game state (move, draw, reveal or undo).
        :param state:
        :return:
        """
        self.notify_redraw()

    def on_abandon(self, state: GameState):
        """
        Invoked when a new game replaces one that was not won.
        :param state:
        :return:
        """
        pass

    def on_rejected(self, check: MoveCheck):
        """
        Invoked when a move or draw was refused; `check.message` is readable text.
        :param check:
        :return:
        """
        pass

    def notify_redraw(self):
        pass

    def on_win(self, score: int, elapsed_sec: float):
        pass
