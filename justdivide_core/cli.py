from __future__ import annotations

import argparse
import logging
from typing import Callable, Optional

from .clock import format_elapsed
from .config import GameConfig, env_flag
from .db import BestScoreStore
from .errors import JustDivideError
from .session import GameSession, Outcome
from .tiles import Difficulty

HELP = """Commands:
  r c / p r c   place the active tile at row r, column c
  k             keep (swap with the KEEP slot)
  t             trash the active tile
  u / z         undo
  g             toggle hints
  n             new game
  1 / 2 / 3     easy / medium / hard
  ? / h         this help
  q             quit"""


def render(session: GameSession) -> str:
    """Plain-text renderer used by the interactive loop."""
    view = session.view()
    st = session.state
    marks = set(view.hints)
    lines = [
        st.board.pretty(marks),
        "",
        f"Active: {view.active}   Next: {' '.join(str(v) for v in view.preview) or '-'}   "
        f"Keep: {view.keep if view.keep is not None else '-'}",
        f"Score: {view.score}   Best: {view.best_score}   Level: {view.level}   "
        f"Trash: {view.trash}   Time: {format_elapsed(view.elapsed_seconds)}   "
        f"[{view.difficulty.upper()}]",
    ]
    if view.game_over:
        lines.append("GAME OVER - 'u' to undo, 'n' for a new game")
    return "\n".join(lines)


def run_command(session: GameSession, text: str) -> Optional[Outcome]:
    """Dispatch one line of input. Returns None for help/empty input; raises JustDivideError on rejection."""
    parts = text.replace(",", " ").split()
    if not parts:
        return None
    cmd = parts[0].lower()
    if cmd == "p":
        parts = parts[1:]
        cmd = parts[0].lower() if parts else ""
    if len(parts) == 2 and all(p.lstrip("-").isdigit() for p in parts):
        return session.place_active(int(parts[0]), int(parts[1]))
    if cmd == "k":
        return session.keep_active()
    if cmd == "t":
        return session.trash_active()
    if cmd in ("u", "z"):
        return session.undo()
    if cmd == "g":
        return session.toggle_hints()
    if cmd in ("n", "r"):
        return session.new_game()
    if cmd in ("1", "2", "3", "easy", "medium", "hard"):
        return session.set_difficulty(Difficulty.parse(cmd))
    raise ValueError(f"Unrecognized command: {text!r}")


def play(session: GameSession, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    write(render(session))
    while True:
        try:
            text = read("> ").strip()
        except EOFError:
            break
        if text.lower() in ("q", "quit", "exit"):
            break
        if text in ("?", "h", "help"):
            write(HELP)
            continue
        try:
            outcome = run_command(session, text)
        except JustDivideError as e:
            write(e.message)
            continue
        except ValueError as e:
            write(f"{e} (type ? for help)")
            continue
        if outcome is None:
            continue
        for ev in outcome.events:
            if ev.kind in ("level_up", "milestone", "best_score"):
                write(ev.message)
        write(outcome.message)
        write(render(session))


def main() -> None:
    parser = argparse.ArgumentParser(description='Just Divide: place, divide and clear the 4x4 grid')
    parser.add_argument('--difficulty', choices=[d.value for d in Difficulty], default=None,
                        help='Tile difficulty (default: medium or JUSTDIVIDE_DIFFICULTY)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for tile draws')
    parser.add_argument('--db', default='data/justdivide.db', help='SQLite file holding the best score')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if env_flag('JUSTDIVIDE_DEBUG') else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    config = GameConfig.from_env()
    session = GameSession(config=config, store=BestScoreStore(args.db), seed=args.seed,
                          difficulty=args.difficulty)
    print(HELP)
    play(session)
    print(f"Final score: {session.state.score}   Best: {session.best_score}")
