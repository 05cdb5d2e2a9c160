import json
import logging
from pathlib import Path

from engine.state import GAME_TYPES

log = logging.getLogger(__name__)

STATS_PATH = Path(__file__).with_name("stats.json")


def _empty_bucket():
    return {
        "games_started": 0,
        "games_won": 0,
        "best_score": None,
        "best_time_sec": None,
        "total_moves": 0,
        "current_streak": 0,
        "best_streak": 0,
    }


def _default_stats():
    return {game_type: _empty_bucket() for game_type in GAME_TYPES}


def _as_int(value, default=0):
    try:
        return int(value)
    except Exception:
        return default


def _as_optional_number(value, cast):
    if value is None:
        return None
    try:
        return cast(value)
    except Exception:
        return None


def _merge_bucket(dst: dict, src: dict):
    if not isinstance(src, dict):
        return
    dst["games_started"] = max(0, _as_int(src.get("games_started"), dst["games_started"]))
    dst["games_won"] = max(0, _as_int(src.get("games_won"), dst["games_won"]))
    dst["best_score"] = _as_optional_number(src.get("best_score"), int)
    best_time = _as_optional_number(src.get("best_time_sec"), float)
    dst["best_time_sec"] = best_time if best_time is None or best_time >= 0 else None
    dst["total_moves"] = max(0, _as_int(src.get("total_moves"), dst["total_moves"]))
    dst["current_streak"] = max(0, _as_int(src.get("current_streak"), dst["current_streak"]))
    dst["best_streak"] = max(0, _as_int(src.get("best_streak"), dst["best_streak"]))


def _sanitize(data):
    out = _default_stats()
    if not isinstance(data, dict):
        return out
    for game_type in GAME_TYPES:
        _merge_bucket(out[game_type], data.get(game_type))
    return out


def load_stats():
    if not STATS_PATH.exists():
        return _default_stats()
    try:
        return _sanitize(json.loads(STATS_PATH.read_text(encoding="utf-8")))
    except (OSError, ValueError) as exc:
        log.warning("could not read %s: %s", STATS_PATH, exc)
        return _default_stats()


def save_stats(stats):
    STATS_PATH.parent.mkdir(parents=True, exist_ok=True)
    STATS_PATH.write_text(json.dumps(_sanitize(stats), ensure_ascii=False, indent=2), encoding="utf-8")


def record_game_started(stats, game_type):
    stats = _sanitize(stats)
    if game_type in stats:
        stats[game_type]["games_started"] += 1
    return stats


def record_game_won(stats, game_type, score, duration_sec, moves):
    stats = _sanitize(stats)
    if game_type not in stats:
        return stats
    bucket = stats[game_type]
    bucket["games_won"] += 1
    bucket["total_moves"] += max(0, int(moves))
    bucket["current_streak"] += 1
    bucket["best_streak"] = max(bucket["best_streak"], bucket["current_streak"])
    if bucket["best_score"] is None or score > bucket["best_score"]:
        bucket["best_score"] = int(score)
    duration = max(0.0, float(duration_sec))
    if bucket["best_time_sec"] is None or duration < bucket["best_time_sec"]:
        bucket["best_time_sec"] = duration
    return stats


def record_game_lost(stats, game_type):
    stats = _sanitize(stats)
    if game_type in stats:
        stats[game_type]["current_streak"] = 0
    return stats


def reset_stats(stats, game_type):
    stats = _sanitize(stats)
    if game_type in stats:
        stats[game_type] = _empty_bucket()
    return stats
