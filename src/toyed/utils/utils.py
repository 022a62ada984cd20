# toyed/utils/utils.py
"""
toyed.utils.utils
=================

Configuration helpers for the toyed editor.

- Automatic user configuration: creates `~/.config/toyed/config.toml` and an
  `.env` template on first run.
- Layered loading: the embedded `DEFAULT_CONFIG` always applies and the user's
  `config.toml` is deep-merged over it, so a missing or broken user file
  never stops the editor from starting.
- Small helpers for dictionary merging and hex → xterm-256 colour conversion.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import toml

logger = logging.getLogger("toyed")

# --- Constants ---
WHITE_FG_IDX = 255
CONFIG_DIR_NAME = "toyed"

ENV_TEMPLATE = """# Environment for the toyed editor.
# Set to 1 to trace every raw key code into keytrace.log.
TOYED_KEYTRACE=
"""

# Embedded defaults; the ultimate fallback when no user config exists.
DEFAULT_CONFIG: Dict[str, Any] = {
    "colors": {
        "header": "#FFFFFF", "header_bg": "#1F4E9C",
        "footer": "#FFFFFF", "footer_bg": "#1F4E9C",
        "body": "#7EE787", "comment": "#6E9EFF", "keyword": "#F2CC60",
        "string": "#FFFFFF", "number": "#D2A8FF", "operator": "#FF7B72",
        "variable": "#FFFFFF",
        "error": "#FFFFFF", "error_bg": "#C62828",
    },
    "keybindings": {
        "quit": "ctrl+q",
        "save_file": "ctrl+s",
    },
    "editor": {
        "escape_delay": 25,
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


def get_config_dir() -> Path:
    return Path.home() / ".config" / CONFIG_DIR_NAME


def ensure_user_config_exists() -> None:
    """Creates `config.toml` and `.env` under `~/.config/toyed` when missing."""
    try:
        config_dir = get_config_dir()
        user_config_path = config_dir / "config.toml"
        user_env_path = config_dir / ".env"

        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            with user_config_path.open("w", encoding="utf-8") as f:
                toml.dump(DEFAULT_CONFIG, f)
            logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except Exception as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = get_config_dir() / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def _copy_table(value: Any) -> Any:
    return deep_merge(value, {}) if isinstance(value, dict) else value


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Layer *override* over *base* and return the result as a new dict.

    Tables present on both sides merge key by key; any other value in
    *override* replaces the one in *base*. Nested tables in the result are
    fresh copies, so editing it never reaches back into either argument.
    """
    merged = {key: _copy_table(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_table(value)
    return merged


# xterm-256 layout: 16 system colours, a 6x6x6 cube, then a 24-step gray ramp.
CUBE_START = 16
CUBE_LEVELS = 6
GRAY_RAMP_START = 232
GRAY_RAMP_STEPS = 24
CUBE_BLACK = CUBE_START
CUBE_WHITE = CUBE_START + CUBE_LEVELS**3 - 1


def _parse_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        return None
    try:
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    except ValueError:
        return None


def _cube_level(component: int) -> int:
    return round(component / 255 * (CUBE_LEVELS - 1))


def hex_to_xterm(hex_color: str) -> int:
    """Map ``#rrggbb`` (the ``#`` is optional) to the nearest xterm-256 index.

    Pure grays use the gray ramp, with near-black and near-white snapping to
    the cube corners. Anything unparseable maps to `WHITE_FG_IDX`.
    """
    rgb = _parse_rgb(hex_color)
    if rgb is None:
        return WHITE_FG_IDX

    red, green, blue = rgb
    if red == green == blue:
        if red < 8:
            return CUBE_BLACK
        if red > 248:
            return CUBE_WHITE
        return GRAY_RAMP_START + round((red - 8) / 247 * GRAY_RAMP_STEPS)

    levels = CUBE_LEVELS
    return CUBE_START + _cube_level(red) * levels * levels + _cube_level(green) * levels + _cube_level(blue)
