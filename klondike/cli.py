"""
Klondike CLI - Command-line interface for the engine.

Usage:
    klondike deal [--seed N]                       Print a dealt layout
    klondike play [--seed N] [--max-recycles N]    Play in the terminal
    klondike serve [--host H] [--port P]           Run the HTTP API

In-game commands:
    d               draw (recycles an empty stock)
    m SRC DST [N]   move N cards, e.g. "m waste tableau:3", "m t2 t5 3", "m t6 f2"
    u               undo
    l               list legal moves
    n [SEED]        new game
    q               quit
"""

import argparse
import sys

from .config import RulesConfig, Settings, configure_logging
from .engine_core import Card, GameController, GameOutcome, Snapshot, ZoneId

_SHORT_ZONES = {"s": "stock", "w": "waste", "t": "tableau", "f": "foundation"}


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Klondike - Solitaire Rule Engine",
        prog="klondike",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from KLONDIKE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Print a dealt layout")
    deal_parser.add_argument("--seed", type=int, default=None, help="Seed for the deal")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Seed for the deal")
    play_parser.add_argument("--max-recycles", type=int, default=None, help="Stock recycle limit")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "deal":
        cmd_deal(args)
    elif args.command == "play":
        cmd_play(args, settings)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_deal(args):
    """Print the layout for a seed."""
    game = GameController(seed=args.seed)
    print(render(game.snapshot()))


def cmd_play(args, settings=None, input_fn=input):
    """Interactive terminal game."""
    rules = settings.rules if settings else RulesConfig()
    if args.max_recycles is not None:
        rules = RulesConfig(max_recycles=args.max_recycles)
    game = GameController(rules=rules, seed=args.seed)
    print(render(game.snapshot()))

    while True:
        try:
            line = input_fn("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        parts = line.split()
        command, params = parts[0].lower(), parts[1:]

        if command == "q":
            break
        if command == "l":
            for move in game.legal_moves():
                print(f"  {move}")
            continue

        try:
            result = run_command(game, command, params)
        except ValueError as e:
            print(f"Error: {e}")
            continue
        if result is None:
            print(__doc__)
            continue

        if not result.ok:
            reason = getattr(result.error, "reason", None)
            prefix = f"[{reason.value}] " if reason else ""
            print(f"{prefix}{result.error.message}")
            continue

        print(render(result.snapshot))
        if result.snapshot.outcome == GameOutcome.WON:
            print("\nYou win!")
        elif result.snapshot.outcome == GameOutcome.STUCK:
            print("\nNo moves left. Undo (u) or start a new game (n).")


def run_command(game: GameController, command: str, params: list[str]):
    """Run one in-game command. Returns None for an unknown command."""
    if command == "d":
        return game.draw()
    if command == "u":
        return game.undo()
    if command == "n":
        return game.new_game(int(params[0]) if params else None)
    if command == "m":
        if len(params) < 2:
            raise ValueError("usage: m SRC DST [N]")
        count = int(params[2]) if len(params) > 2 else 1
        return game.attempt_move(parse_zone(params[0]), parse_zone(params[1]), count)
    return None


def parse_zone(text: str) -> ZoneId:
    """Parse a zone, also accepting short forms: "w", "s", "t3", "f2"."""
    text = text.strip().lower()
    if ":" in text or text in ("stock", "waste"):
        return ZoneId.parse(text)
    kind = _SHORT_ZONES.get(text[:1])
    if kind is None:
        raise ValueError(f"Unknown zone: {text!r}")
    suffix = text[1:]
    return ZoneId.parse(f"{kind}:{suffix}" if suffix else kind)


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "klondike.api.app:build_default_app",
        factory=True,
        host=args.host,
        port=args.port,
    )


# =============================================================================
# Text rendering
# =============================================================================

def _card_text(card: Card) -> str:
    return str(card).rjust(3) if card.face_up else " ##"


def render(snapshot: Snapshot) -> str:
    """Plain-text picture of a snapshot."""
    lines = []
    waste_top = _card_text(snapshot.waste[-1]) if snapshot.waste else "  -"
    foundations = " ".join(
        _card_text(pile[-1]) if pile else "  -" for pile in snapshot.foundations
    )
    lines.append(
        f"stock: {len(snapshot.stock):2d}  waste: {waste_top}    foundations: {foundations}"
    )
    lines.append("")
    lines.append("  " + "".join(f"  t{i}" for i in range(len(snapshot.tableau))))

    depth = max((len(pile) for pile in snapshot.tableau), default=0)
    for row in range(depth):
        cells = [
            _card_text(pile[row]) if row < len(pile) else "   "
            for pile in snapshot.tableau
        ]
        lines.append("  " + "".join(f" {cell}" for cell in cells).rstrip())

    lines.append("")
    lines.append(
        f"moves: {snapshot.move_count}  recycles: {snapshot.recycle_count}  "
        f"outcome: {snapshot.outcome.value}  seed: {snapshot.seed}"
    )
    return "\n".join(lines)


if __name__ == "__main__":
    main()
