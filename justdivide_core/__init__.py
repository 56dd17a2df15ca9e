"""
Just Divide core Python package.

Pure-logic puzzle engine, kept free of any rendering or request handling so the
Flask app, the CLI and the tests all drive the same code.
Modules:
- board.py: Board, Coord, Tile
- merge.py: cascading merge from a placement point
- rules.py: merge predicate, terminal detector, hint cells
- tiles.py: Difficulty and TileSource
- scoring.py: level rule
- undo.py: UndoLog
- clock.py: GameClock
- state.py: SessionState
- session.py: GameSession (turn orchestration)
- db.py: best-score store
"""
