import unittest

from engine.automove import find_auto_move
from engine.cards import Card
from engine.model import Location, Move
from engine.state import FOUNDATION, FREECELL_SLOT, TABLEAU, WASTE, FreecellState, SolitaireState, SpiderState


def up(suit, rank):
    return Card(suit, rank, True)


def solitaire_state(tableau=None, foundation=None, waste=()):
    piles = [[] for _ in range(7)]
    for i, pile in (tableau or {}).items():
        piles[i] = list(pile)
    return SolitaireState(tableau=piles, foundation=foundation or [[], [], [], []], stock=[], waste=list(waste))


FILLERS = [up("DIAMONDS", "K"), up("CLUBS", "K"), up("HEARTS", "K"), up("SPADES", "K"),
           up("DIAMONDS", "Q"), up("CLUBS", "Q"), up("HEARTS", "Q"), up("SPADES", "Q")]


def freecell_state(tableau=None, freecells=None, foundation=None):
    piles = [[card] for card in FILLERS]
    for i, pile in (tableau or {}).items():
        piles[i] = list(pile)
    return FreecellState(tableau=piles, foundation=foundation or [[], [], [], []],
                         freecells=freecells or [None] * 4)


def spider_state(tableau=None):
    piles = [[up("CLUBS", "5")] for _ in range(10)]
    for i, pile in (tableau or {}).items():
        piles[i] = list(pile)
    return SpiderState(tableau=piles, foundation=[], stock=[])


class SolitaireAutoMoveTestCase(unittest.TestCase):
    def test_foundation_comes_before_tableau(self):
        state = solitaire_state(tableau={0: [up("HEARTS", "2")], 1: [up("SPADES", "3")]},
                                foundation=[[up("SPADES", "A")], [up("HEARTS", "A")], [], []])
        source = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(source, Location(FOUNDATION, 1)), find_auto_move(state, source))

    def test_ace_goes_to_first_empty_foundation(self):
        state = solitaire_state(waste=[up("DIAMONDS", "A")])
        source = Location(WASTE, 0, 0)
        self.assertEqual(Move(source, Location(FOUNDATION, 0)), find_auto_move(state, source))

    def test_lowest_tableau_index_wins(self):
        state = solitaire_state(tableau={0: [up("HEARTS", "9")], 2: [up("SPADES", "10")], 4: [up("CLUBS", "10")]})
        source = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(source, Location(TABLEAU, 2)), find_auto_move(state, source))

    def test_run_skips_foundation(self):
        state = solitaire_state(tableau={0: [up("CLUBS", "3"), up("HEARTS", "2")], 1: [up("DIAMONDS", "4")]},
                                foundation=[[up("HEARTS", "A")], [], [], []])
        run = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(run, Location(TABLEAU, 1)), find_auto_move(state, run))
        top = Location(TABLEAU, 0, 1)
        self.assertEqual(Move(top, Location(FOUNDATION, 0)), find_auto_move(state, top))

    def test_foundation_cards_stay_put(self):
        state = solitaire_state(tableau={0: [up("SPADES", "3")]},
                                foundation=[[up("HEARTS", "A"), up("HEARTS", "2")], [], [], []])
        self.assertIsNone(find_auto_move(state, Location(FOUNDATION, 0, 1)))

    def test_nothing_fits(self):
        state = solitaire_state(tableau={0: [up("HEARTS", "9")], 1: [up("DIAMONDS", "10")]})
        self.assertIsNone(find_auto_move(state, Location(TABLEAU, 0, 0)))
        self.assertIsNone(find_auto_move(state, Location(TABLEAU, 3, 0)))


class FreecellAutoMoveTestCase(unittest.TestCase):
    def test_free_cell_is_the_last_resort(self):
        state = freecell_state(tableau={0: [up("SPADES", "5")]}, freecells=[up("DIAMONDS", "J"), None, None, None])
        source = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(source, Location(FREECELL_SLOT, 1)), find_auto_move(state, source))

    def test_free_cell_card_goes_home(self):
        state = freecell_state(freecells=[None, up("CLUBS", "A"), None, None])
        source = Location(FREECELL_SLOT, 1, 0)
        self.assertEqual(Move(source, Location(FOUNDATION, 0)), find_auto_move(state, source))

    def test_empty_pile_before_free_cell(self):
        state = freecell_state(tableau={0: [up("SPADES", "5")], 6: []})
        source = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(source, Location(TABLEAU, 6)), find_auto_move(state, source))

    def test_run_larger_than_capacity_has_no_move(self):
        cells = [up("SPADES", "A"), up("HEARTS", "A"), up("DIAMONDS", "A"), up("CLUBS", "A")]
        state = freecell_state(tableau={0: [up("CLUBS", "9"), up("HEARTS", "8")], 1: [up("HEARTS", "10")]},
                               freecells=cells)
        self.assertIsNone(find_auto_move(state, Location(TABLEAU, 0, 0)))


class SpiderAutoMoveTestCase(unittest.TestCase):
    def test_any_suit_one_rank_higher(self):
        state = spider_state(tableau={0: [up("SPADES", "7")], 1: [up("HEARTS", "8")], 2: [up("SPADES", "8")]})
        source = Location(TABLEAU, 0, 0)
        self.assertEqual(Move(source, Location(TABLEAU, 1)), find_auto_move(state, source))

    def test_source_pile_is_skipped(self):
        state = spider_state(tableau={3: [up("SPADES", "6"), up("SPADES", "5")], 7: []})
        source = Location(TABLEAU, 3, 1)
        self.assertEqual(Move(source, Location(TABLEAU, 7)), find_auto_move(state, source))

    def test_no_destination(self):
        state = spider_state(tableau={0: [up("SPADES", "K")]})
        self.assertIsNone(find_auto_move(state, Location(TABLEAU, 0, 0)))


if __name__ == "__main__":
    unittest.main()
