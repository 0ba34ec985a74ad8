import json
from tt.common.logger import log
from tt.common.setup import PATHS


#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.settings

# Default values for every setting, along with the type each one must have.
_SETTINGS_DEFAULTS = {
    "tick_interval_ms": 1000,
    "console_log": False,
    "log_level": "INFO",
}

# Helper to return a truly fresh, default settings dict.
def build_default_settings():
    return dict(_SETTINGS_DEFAULTS)

# bool is an int subclass, so a plain isinstance check would let `true` through as a tick interval.
def _has_expected_type(value, default):
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings.json, filling in (and reporting) anything that's missing or the wrong type. A missing or unreadable
# file just means defaults.
def load_settings():
    if not SETTINGS_PATH.exists():
        log.info(f"No settings file at '{SETTINGS_PATH}', using defaults.")
        return build_default_settings()
    try:
        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        log.warning(f"Ran into an error while trying to load '{SETTINGS_PATH}', falling back to default settings.",exc_info=True)
        return build_default_settings()

    if not isinstance(loaded, dict):
        log.warning(f"Settings file '{SETTINGS_PATH}' does not hold an object, falling back to default settings.")
        return build_default_settings()

    settings = build_default_settings()
    defaulted_values = set()
    for key, default in _SETTINGS_DEFAULTS.items():
        if key in loaded and _has_expected_type(loaded[key], default):
            settings[key] = loaded[key]
        else:
            defaulted_values.add(key)

    if settings["tick_interval_ms"] <= 0:
        defaulted_values.add("tick_interval_ms")
        settings["tick_interval_ms"] = _SETTINGS_DEFAULTS["tick_interval_ms"]

    if defaulted_values:
        log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
    else:
        log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
    return settings

# Write the given settings to disk under PATHS.settings
def save_settings(settings):
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
