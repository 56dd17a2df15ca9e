from __future__ import annotations

import logging
import os
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    BestScoreStore,
    Difficulty,
    GameConfig,
    GameSession,
    JustDivideError,
    Outcome,
    SessionBusy,
    SessionView,
    load_best_score,
)
from justdivide_core.config import env_flag

logging.basicConfig(
    level=logging.DEBUG if env_flag("JUSTDIVIDE_DEBUG") else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

DEFAULT_DB = os.getenv("JUSTDIVIDE_DB", "data/justdivide.db")
MAX_SESSIONS = int(os.getenv("JUSTDIVIDE_MAX_SESSIONS", "1000"))

app = Flask(__name__)


# ---------- Session registry ----------

@dataclass
class _Entry:
    session: GameSession
    lock: threading.Lock = field(default_factory=threading.Lock)


_sessions: "OrderedDict[str, _Entry]" = OrderedDict()
_registry_lock = threading.Lock()


def _register(session: GameSession) -> str:
    sid = secrets.token_hex(8)
    with _registry_lock:
        _sessions[sid] = _Entry(session)
        while len(_sessions) > MAX_SESSIONS:
            old_sid, _ = _sessions.popitem(last=False)
            logger.info("evicted idle session %s", old_sid)
    return sid


def _lookup(sid: Optional[str]) -> Optional[_Entry]:
    if not sid:
        return None
    with _registry_lock:
        entry = _sessions.get(sid)
        if entry is not None:
            _sessions.move_to_end(sid)
        return entry


def reset_sessions() -> None:
    with _registry_lock:
        _sessions.clear()


# ---------- JSON helpers ----------

def view_to_json(view: SessionView) -> Dict[str, Any]:
    return {
        "grid": [list(row) for row in view.grid],
        "keep": view.keep,
        "active": view.active,
        "preview": list(view.preview),
        "queueLength": view.queue_length,
        "score": view.score,
        "bestScore": view.best_score,
        "level": view.level,
        "trash": view.trash,
        "gameOver": view.game_over,
        "elapsed": view.elapsed_seconds,
        "difficulty": view.difficulty,
        "hintsOn": view.hints_on,
        "hints": [[int(r), int(c)] for (r, c) in view.hints],
        "undoDepth": view.undo_depth,
    }


def outcome_to_json(sid: str, outcome: Outcome, session: GameSession) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "ok": True,
        "sessionId": sid,
        "action": outcome.action,
        "message": outcome.message,
        "events": [{"kind": ev.kind, "message": ev.message, **ev.data} for ev in outcome.events],
        "state": view_to_json(session.view()),
    }
    if outcome.merge is not None:
        payload["points"] = outcome.points
        payload["focus"] = list(outcome.merge.focus)
    return payload


def _error(message: str, status: int, code: str = "BAD_REQUEST") -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message, "code": code}), status


@app.errorhandler(JustDivideError)
def _handle_game_error(e: JustDivideError) -> Tuple[Any, int]:
    status = 409 if isinstance(e, SessionBusy) else 400
    logger.debug("rejected: %s", e)
    return jsonify({"ok": False, "error": e.message, "code": e.code, "context": e.context}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _run(action: str, **kwargs: Any) -> Any:
    body = _body()
    sid = body.get("sessionId")
    entry = _lookup(sid if isinstance(sid, str) else None)
    if entry is None:
        return _error("unknown session", 404, "UNKNOWN_SESSION")
    with entry.lock:
        outcome = getattr(entry.session, action)(**kwargs)
        return jsonify(outcome_to_json(sid, outcome, entry.session))


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    seed = body.get("seed", None)
    if seed is not None and not isinstance(seed, int):
        return _error("seed must be an integer", 400)
    difficulty = body.get("difficulty")
    try:
        config = GameConfig.from_env()
    except ValueError as e:
        logger.error("bad game configuration: %s", e)
        return _error(str(e), 500, "CONFIG_ERROR")
    session = GameSession(
        config=config,
        store=BestScoreStore(DEFAULT_DB),
        seed=seed,
        difficulty=Difficulty.parse(difficulty) if difficulty else None,
    )
    sid = _register(session)
    logger.info("new session %s (%s)", sid, session.difficulty.value)
    return jsonify({"ok": True, "sessionId": sid, "state": view_to_json(session.view())})


@app.get("/api/state/<sid>")
def api_state(sid: str) -> Any:
    entry = _lookup(sid)
    if entry is None:
        return _error("unknown session", 404, "UNKNOWN_SESSION")
    with entry.lock:
        return jsonify({"ok": True, "sessionId": sid, "state": view_to_json(entry.session.view())})


@app.post("/api/place")
def api_place() -> Any:
    body = _body()
    try:
        row = int(body["row"])
        col = int(body["col"])
    except (KeyError, TypeError, ValueError):
        return _error("row and col required", 400)
    return _run("place_active", r=row, c=col)


@app.post("/api/keep")
def api_keep() -> Any:
    return _run("keep_active")


@app.post("/api/trash")
def api_trash() -> Any:
    return _run("trash_active")


@app.post("/api/undo")
def api_undo() -> Any:
    return _run("undo")


@app.post("/api/hints")
def api_hints() -> Any:
    return _run("toggle_hints")


@app.post("/api/restart")
def api_restart() -> Any:
    return _run("new_game")


@app.post("/api/difficulty")
def api_difficulty() -> Any:
    difficulty = _body().get("difficulty")
    if not difficulty:
        return _error("difficulty required", 400)
    return _run("set_difficulty", difficulty=Difficulty.parse(difficulty))


@app.post("/api/tick")
def api_tick() -> Any:
    body = _body()
    sid = body.get("sessionId")
    entry = _lookup(sid if isinstance(sid, str) else None)
    if entry is None:
        return _error("unknown session", 404, "UNKNOWN_SESSION")
    with entry.lock:
        elapsed = entry.session.tick()
        return jsonify({"ok": True, "elapsed": elapsed, "running": entry.session.clock.running})


@app.get("/api/best")
def api_best() -> Any:
    return jsonify({"ok": True, "bestScore": load_best_score(DEFAULT_DB)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
