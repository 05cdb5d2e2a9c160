import unittest

from engine.cards import RANKS, Card
from engine.model import STOCK_EMPTY, WRONG_COLOR, Location
from engine.state import (
    FOUNDATION,
    FREECELL,
    SOLITAIRE,
    TABLEAU,
    GameConfig,
    SolitaireState,
    SpiderState,
)
from play.listener import SessionListener
from play.session import GameSession


def up(suit, rank):
    return Card(suit, rank, True)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class RecordingListener(SessionListener):
    def __init__(self):
        super().__init__()
        self.events = []

    def on_start(self):
        self.events.append("start")

    def on_abandon(self, state):
        self.events.append("abandon")

    def notify_redraw(self):
        self.events.append("redraw")

    def on_rejected(self, check):
        self.events.append(("rejected", check.reason))

    def on_win(self, score, elapsed_sec):
        self.events.append(("win", score, elapsed_sec))


def almost_won_solitaire():
    foundation = [[up(s, r) for r in RANKS] for s in ("SPADES", "HEARTS", "DIAMONDS")]
    foundation.append([up("CLUBS", r) for r in RANKS[:-1]])
    tableau = [[up("CLUBS", "K")]] + [[] for _ in range(6)]
    return SolitaireState(tableau=tableau, foundation=foundation, stock=[], waste=[])


class NewGameTestCase(unittest.TestCase):
    def test_settings_pick_the_variant(self):
        listener = RecordingListener()
        session = GameSession(settings={"gameType": "Freecell", "autoMove": False}, listener=listener)
        self.assertIs(session, listener.session)
        self.assertFalse(session.auto_move)
        session.new_game()
        self.assertEqual(FREECELL, session.state.game_type)
        self.assertEqual(52, session.state.card_count())
        self.assertEqual(["start"], listener.events)
        self.assertFalse(session.history.can_undo)

    def test_seeded_games_repeat(self):
        self.assertIsNone(GameConfig().seed)
        a, b = GameSession(), GameSession()
        a.new_game(GameConfig(game_type=SOLITAIRE, seed=42))
        b.new_game(GameConfig(game_type=SOLITAIRE, seed=42))
        self.assertEqual(a.state, b.state)

    def test_replacing_an_unfinished_game_is_reported(self):
        listener = RecordingListener()
        session = GameSession(listener=listener)
        session.new_game()
        session.new_game()
        self.assertEqual(["start", "abandon", "start"], listener.events)


class PlayTestCase(unittest.TestCase):
    def setUp(self):
        self.listener = RecordingListener()
        self.session = GameSession(listener=self.listener)
        self.session.new_game(GameConfig(game_type=SOLITAIRE, seed=7))
        self.listener.events.clear()

    def test_draw_and_undo(self):
        start = self.session.state
        result = self.session.draw()
        self.assertIsNotNone(result.new_state)
        self.assertEqual(1, len(self.session.state.waste))
        self.assertEqual(["redraw"], self.listener.events)
        self.assertTrue(self.session.undo())
        self.assertIs(start, self.session.state)
        self.assertFalse(self.session.undo())

    def test_toggle_auto_move(self):
        self.session.set_auto_move(False)
        self.assertFalse(self.session.auto_move)
        self.assertFalse(self.session.config.auto_move)

    def test_rejected_moves_reach_the_listener(self):
        self.session.set_auto_move(False)
        self.session.load_state(SolitaireState(
            tableau=[[up("HEARTS", "9")], [up("DIAMONDS", "10")]] + [[] for _ in range(5)],
            foundation=[[], [], [], []], stock=[], waste=[]))
        self.session.click(TABLEAU, 0, 0)
        self.assertEqual(Location(TABLEAU, 0, 0), self.session.selection)
        self.session.click(TABLEAU, 1, 0)
        self.assertEqual(Location(TABLEAU, 1, 0), self.session.selection)
        self.session.draw()
        self.assertEqual([("rejected", WRONG_COLOR), ("rejected", STOCK_EMPTY)], self.listener.events)


class WinTestCase(unittest.TestCase):
    def test_solitaire_win_freezes_clock_and_scores(self):
        clock = FakeClock()
        listener = RecordingListener()
        session = GameSession(listener=listener, clock=clock)
        session.load_state(almost_won_solitaire())
        clock.now = 100.0
        result = session.click(TABLEAU, 0, 0)
        self.assertEqual(Location(FOUNDATION, 3), result.highlighted)
        self.assertTrue(session.won)
        self.assertEqual(9975, session.final_score)
        self.assertEqual(9975, session.state.score)
        self.assertEqual(("win", 9975, 100.0), listener.events[-1])
        clock.now = 500.0
        self.assertEqual(100.0, session.elapsed())

    def test_nothing_happens_after_a_win(self):
        session = GameSession(clock=FakeClock())
        session.load_state(almost_won_solitaire())
        session.click(TABLEAU, 0, 0)
        won_state = session.state
        self.assertFalse(session.click(FOUNDATION, 3, 0).should_push_history)
        self.assertFalse(session.undo())
        self.assertIs(won_state, session.state)

    def test_instant_win_keeps_running_score(self):
        session = GameSession(clock=FakeClock())
        session.load_state(almost_won_solitaire())
        session.click(TABLEAU, 0, 0)
        self.assertEqual(10, session.final_score)

    def test_spider_win_keeps_its_own_score(self):
        full = [up("SPADES", r) for r in reversed(RANKS)]
        tableau = [full[:-1], [up("SPADES", "A")]] + [[up("CLUBS", "5")] for _ in range(8)]
        state = SpiderState(tableau=tableau, foundation=[list(full) for _ in range(7)], stock=[],
                            suit_count=1, completed_sets=7, score=600)
        session = GameSession(clock=FakeClock())
        session.load_state(state)
        session.click(TABLEAU, 1, 0)
        self.assertTrue(session.won)
        self.assertEqual(699, session.final_score)


class LoadStateTestCase(unittest.TestCase):
    def test_loaded_game_resumes_its_clock(self):
        clock = FakeClock()
        session = GameSession(clock=clock)
        session.new_game()
        session.draw()
        saved = session.state
        clock.now = 10.0
        session.load_state(saved, elapsed_sec=30.0)
        clock.now = 15.0
        self.assertEqual(35.0, session.elapsed())
        self.assertFalse(session.history.can_undo)
        self.assertIsNone(session.selection)


if __name__ == "__main__":
    unittest.main()
