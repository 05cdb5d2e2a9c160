import configparser
import json
import logging
from pathlib import Path

from engine.state import GAME_TYPES, GameConfig

log = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DRAW_COUNT_ORDER = (1, 3)
SPIDER_SUIT_ORDER = (1, 2, 4)
CARD_STYLE_ORDER = ("modern", "domino")
COLOR_MODE_ORDER = ("color", "greyscale")

DEFAULT_SETTINGS = {
    "game_type": "Solitaire",
    "solitaire_draw_count": "1",
    "spider_suits": "2",
    "auto_move": "true",
    "left_hand_mode": "true",
    "card_style": "modern",
    "color_mode": "color",
}

# Key names used by the JSON settings shape.
JSON_KEYS = {
    "gameType": "game_type",
    "solitaireDrawCount": "solitaire_draw_count",
    "spiderSuits": "spider_suits",
    "autoMove": "auto_move",
    "leftHandMode": "left_hand_mode",
    "cardStyle": "card_style",
    "colorMode": "color_mode",
}


def _as_bool_str(value, default: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return "true"
    if text in ("0", "false", "no", "off"):
        return "false"
    return default


def _as_choice(value, order, default: str) -> str:
    try:
        number = int(value)
    except Exception:
        return default
    if number not in order:
        return default
    return str(number)


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    for key, value in settings.items():
        data[JSON_KEYS.get(key, key)] = value

    if data["game_type"] not in GAME_TYPES:
        data["game_type"] = DEFAULT_SETTINGS["game_type"]
    data["solitaire_draw_count"] = _as_choice(
        data["solitaire_draw_count"], DRAW_COUNT_ORDER, DEFAULT_SETTINGS["solitaire_draw_count"]
    )
    data["spider_suits"] = _as_choice(data["spider_suits"], SPIDER_SUIT_ORDER, DEFAULT_SETTINGS["spider_suits"])
    data["auto_move"] = _as_bool_str(data["auto_move"], DEFAULT_SETTINGS["auto_move"])
    data["left_hand_mode"] = _as_bool_str(data["left_hand_mode"], DEFAULT_SETTINGS["left_hand_mode"])
    if data["card_style"] not in CARD_STYLE_ORDER:
        data["card_style"] = DEFAULT_SETTINGS["card_style"]
    if data["color_mode"] not in COLOR_MODE_ORDER:
        data["color_mode"] = DEFAULT_SETTINGS["color_mode"]
    return data


def settings_from_json(text: str):
    """Read the JSON settings object; unknown keys are kept, missing ones defaulted."""
    try:
        raw = json.loads(text)
    except ValueError:
        log.warning("settings JSON is not readable, using defaults")
        return dict(DEFAULT_SETTINGS)
    if not isinstance(raw, dict):
        return dict(DEFAULT_SETTINGS)
    return _sanitize(raw)


def config_from_settings(settings, seed=None) -> GameConfig:
    data = _sanitize(settings)
    return GameConfig(
        game_type=data["game_type"],
        solitaire_draw_count=int(data["solitaire_draw_count"]),
        spider_suits=int(data["spider_suits"]),
        auto_move=data["auto_move"] == "true",
        seed=seed,
    )


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except (configparser.Error, OSError) as exc:
        log.warning("could not read %s: %s", SETTINGS_PATH, exc)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    return _sanitize(dict(parser[SECTION]))


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = {key: data[key] for key in DEFAULT_SETTINGS}
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
