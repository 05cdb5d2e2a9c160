import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from engine.codec import decode_state, encode_state
from engine.state import GameState

log = logging.getLogger(__name__)

SLOT_COUNT = 3
SAVE_PREFIX = "savegame_slot"
SAVE_SUFFIX = ".json"


def _slot_path(slot: int) -> Path:
    return Path(__file__).with_name(f"{SAVE_PREFIX}{slot}{SAVE_SUFFIX}")


def _valid_slot(slot: int) -> int:
    try:
        slot_int = int(slot)
    except Exception:
        slot_int = 1
    if slot_int < 1:
        slot_int = 1
    if slot_int > SLOT_COUNT:
        slot_int = SLOT_COUNT
    return slot_int


def has_saved_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    return path.exists() and path.is_file()


def save_game(state: GameState, slot: int = 1, elapsed_sec: float = 0.0) -> bool:
    path = _slot_path(_valid_slot(slot))
    payload = {
        "saved_at": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "elapsed_sec": max(0.0, float(elapsed_sec)),
        "state": encode_state(state),
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return True
    except OSError as exc:
        log.warning("could not save slot %s: %s", slot, exc)
        return False


def load_game(slot: int = 1) -> tuple[GameState, float] | None:
    """Return (state, elapsed seconds) from a slot, or None if it is missing or unreadable."""
    path = _slot_path(_valid_slot(slot))
    if not path.exists() or not path.is_file():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        state = decode_state(payload["state"])
        elapsed = max(0.0, float(payload.get("elapsed_sec", 0.0)))
    except (OSError, ValueError, KeyError, TypeError) as exc:
        log.warning("could not load slot %s: %s", slot, exc)
        return None
    return state, elapsed


def clear_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    try:
        path.unlink(missing_ok=True)
        return True
    except OSError as exc:
        log.warning("could not clear slot %s: %s", slot, exc)
        return False


def list_slot_status() -> list[dict]:
    rows = []
    for slot in range(1, SLOT_COUNT + 1):
        path = _slot_path(slot)
        exists = path.exists() and path.is_file()
        rows.append({"slot": slot, "exists": exists, "path": str(path.name)})
    return rows
