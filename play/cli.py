import argparse
import logging

from engine.state import FOUNDATION, FREECELL_SLOT, GAME_TYPES, SOLITAIRE, SPIDER, STOCK, TABLEAU, WASTE
from play import game_store, stats_store
from play.listener import SessionListener
from play.session import GameSession
from play.settings_store import config_from_settings, load_settings

KIND_ALIASES = {
    "t": TABLEAU,
    "w": WASTE,
    "f": FOUNDATION,
    "x": FREECELL_SLOT,
    "s": STOCK,
}

HELP = (
    "commands: c <t|w|f|x|s> <pile> [card]   click a location (t=tableau w=waste f=foundation x=freecell s=stock)\n"
    "          draw | undo | new | auto on|off | save [slot] | load [slot] | help | quit"
)


def _label(card):
    if card is None:
        return "[  ]"
    return f"{card.label():>4}"


class CommandLineListener(SessionListener):

    def __init__(self, record_stats=True):
        super().__init__()
        self.record_stats = record_stats

    def printAll(self):
        session = self.session
        state = session.state
        print(f"{state.game_type}   Moves: {state.moves}   Score: {state.score}   Time: {int(session.elapsed())}s")
        top = []
        if hasattr(state, "stock"):
            top.append(f"Stock: {len(state.stock)}")
        if state.game_type == SOLITAIRE:
            top.append("Waste: " + _label(state.waste[-1] if state.waste else None))
        if state.game_type == SPIDER:
            top.append(f"Sets: {state.completed_sets}/8")
        else:
            top.append("Found: " + " ".join(_label(p[-1] if p else None) for p in state.foundation))
        if hasattr(state, "freecells"):
            top.append("Cells: " + " ".join(_label(c) for c in state.freecells))
        print("   ".join(top))
        print("".join(f"{i:>5}" for i in range(len(state.tableau))))
        i = 0
        while True:
            has = False
            line = ""
            for pile in state.tableau:
                if len(pile) <= i:
                    line += "     "
                    continue
                has = True
                line += " " + _label(pile[i])
            if not has:
                break
            print(f"{line}   {i}")
            i += 1
        if session.selection is not None:
            sel = session.selection
            print(f"Selected: {sel.kind} {sel.pile_index} {sel.card_index}")
        print()

    def on_start(self):
        print("Game started!")
        if self.record_stats:
            stats_store.save_stats(stats_store.record_game_started(stats_store.load_stats(),
                                                                   self.session.state.game_type))
        self.printAll()

    def notify_redraw(self):
        self.printAll()

    def on_abandon(self, state):
        if self.record_stats:
            stats_store.save_stats(stats_store.record_game_lost(stats_store.load_stats(), state.game_type))

    def on_rejected(self, check):
        print(check.message)

    def on_win(self, score, elapsed_sec):
        print(f"You win! Score: {score}")
        if self.record_stats:
            state = self.session.state
            stats = stats_store.record_game_won(stats_store.load_stats(), state.game_type, score,
                                                elapsed_sec, state.moves)
            stats_store.save_stats(stats)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Solitaire, Freecell or Spider in the terminal.")
    parser.add_argument("--game", choices=GAME_TYPES, help="game variant (default from settings)")
    parser.add_argument("--draw", type=int, choices=(1, 3), help="Solitaire draw count")
    parser.add_argument("--suits", type=int, choices=(1, 2, 4), help="Spider suit count")
    parser.add_argument("--manual", action="store_true", help="select source and destination by hand")
    parser.add_argument("--seed", type=int, default=None, help="seed for a repeatable deal")
    parser.add_argument("--no-stats", action="store_true", help="do not record statistics")
    parser.add_argument("--verbose", action="store_true", help="log engine decisions")
    return parser.parse_args(argv)


def build_config(args):
    settings = load_settings()
    if args.game is not None:
        settings["game_type"] = args.game
    if args.draw is not None:
        settings["solitaire_draw_count"] = str(args.draw)
    if args.suits is not None:
        settings["spider_suits"] = str(args.suits)
    if args.manual:
        settings["auto_move"] = "false"
    return config_from_settings(settings, seed=args.seed)


def run_command(session: GameSession, command: str) -> bool:
    """Execute one command line; returns False when the player quits."""
    parts = command.split()
    if not parts:
        return True
    name = parts[0]
    if name in ("q", "quit", "exit"):
        return False
    if name in ("c", "click"):
        try:
            kind = KIND_ALIASES.get(parts[1], parts[1])
            pile = int(parts[2]) if len(parts) > 2 else 0
            card = int(parts[3]) if len(parts) > 3 else _default_card_index(session, kind, pile)
        except (IndexError, ValueError):
            print("Invalid index!")
            return True
        result = session.click(kind, pile, card)
        if result.new_state is None and result.new_selection is None and result.check is None:
            print("Nothing to do there.")
        elif result.new_state is None and result.new_selection is not None:
            session.listener.notify_redraw()
    elif name == "draw":
        session.draw()
    elif name == "undo":
        if not session.undo():
            print("Cannot undo!")
    elif name == "new":
        session.new_game()
    elif name == "auto" and len(parts) > 1:
        session.set_auto_move(parts[1] == "on")
        print(f"Auto-move {'on' if session.auto_move else 'off'}")
    elif name in ("save", "load"):
        try:
            slot = int(parts[1]) if len(parts) > 1 else 1
        except ValueError:
            print("Invalid slot!")
            return True
        if name == "save":
            print("Saved." if game_store.save_game(session.state, slot, session.elapsed()) else "Cannot save!")
        else:
            loaded = game_store.load_game(slot)
            if loaded is None:
                print("No saved game!")
            else:
                session.load_state(*loaded)
                session.listener.notify_redraw()
    elif name == "help":
        print(HELP)
    else:
        print("Invalid command!")
    return True


def _default_card_index(session, kind, pile):
    # Without an explicit card index, a tableau click means the top card.
    if kind == TABLEAU and 0 <= pile < len(session.state.tableau):
        return len(session.state.tableau[pile]) - 1
    if kind in (WASTE, FOUNDATION, FREECELL_SLOT):
        return 0
    return -1


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    listener = CommandLineListener(record_stats=not args.no_stats)
    session = GameSession(listener=listener)
    session.new_game(build_config(args))
    print(HELP)
    while True:
        try:
            command = input("> ")
        except EOFError:
            break
        if not run_command(session, command):
            break
        if session.won:
            try:
                again = input("Play again? [y/N] ")
            except EOFError:
                break
            if again.strip().lower() != "y":
                break
            session.new_game()


if __name__ == '__main__':
    main()
