"""
Configuration loading for forgerelease.

Settings come from built-in defaults, optionally overlaid by a YAML file.
The CLI applies its own flags on top of the result.

Configuration Layers
--------------------
1. **Built-in defaults** (DEFAULT_CONFIG)
   - 15 second HTTP timeout, no extra headers
   - Empty source and message settings, all policy flags off

2. **YAML file** (optional, e.g. forgerelease.yaml)
   - Any subset of the default keys
   - Overrides the defaults

File Layout
-----------
    http:
      timeout: 30
      headers:
        Authorization: "token ${GITEA_TOKEN}"
    source:
      base_url: https://codeberg.org
      user: forgejo
      repo: forgejo
      provider: gitea          # optional; detected from base_url when empty
    version:
      messages:
        older: ""
        equal: ""
        newer: ""
        upgrade_url: https://example.com/download
      options:
        die_if_older: false
        die_if_newer: false
        show_message_on_current: true

Merge Behavior
--------------
Deep merge with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from overlay override base)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Environment Variables
---------------------
String values of the form "${NAME}" are replaced by the environment
variable NAME, and "${NAME}" inside a longer string is substituted in place.
A variable that is not set expands to "" and a warning is logged.

Functions
---------
load_config : function
    Load defaults plus an optional YAML file (main public API).
messages_from_config, options_from_config, transport_from_config : functions
    Build the library objects a loaded configuration describes.

Error Handling
--------------
- ConfigError: Missing file, YAML parse errors, empty files, a non-mapping
  top level, or values of the wrong type
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
import re
from typing import Any

import yaml

from forgerelease.exceptions import ConfigError
from forgerelease.io import HttpTransport
from forgerelease.io.transport import DEFAULT_TIMEOUT
from forgerelease.versioning.messages import VersionMessages, VersionOptions

DEFAULT_CONFIG: dict[str, Any] = {
    "http": {
        "timeout": DEFAULT_TIMEOUT,
        "headers": {},
    },
    "source": {
        "base_url": "",
        "user": "",
        "repo": "",
        "provider": "",
    },
    "version": {
        "messages": {
            "older": "",
            "equal": "",
            "newer": "",
            "upgrade_url": "",
        },
        "options": {
            "die_if_older": False,
            "die_if_newer": False,
            "show_message_on_current": False,
        },
    },
}

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, or is
            empty.

    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except OSError as err:
        raise ConfigError(f"Cannot read config file: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """
    Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _expand_env_vars(value: Any) -> Any:
    """Expand ${NAME} references in every string of a config tree."""
    if isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(v) for v in value]
    if not isinstance(value, str) or "${" not in value:
        return value

    from forgerelease.logging import get_global_logger

    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        env_value = os.environ.get(name)
        if env_value is None:
            get_global_logger().warning(
                "CONFIG", f"Environment variable {name} not set"
            )
            return ""
        return env_value

    return _ENV_REF.sub(_lookup, value)


# -------------------------------
# Validation
# -------------------------------


def _require_mapping(cfg: dict[str, Any], key: str, where: str) -> dict[str, Any]:
    value = cfg.get(key)
    if not isinstance(value, dict):
        raise ConfigError(f"{where}{key} must be a mapping")
    return value


def _validate_config(cfg: dict[str, Any]) -> None:
    """Check value types of a merged configuration.

    Unknown keys are allowed and ignored.

    Raises:
        ConfigError: On the first value of the wrong type.

    """
    http = _require_mapping(cfg, "http", "")
    timeout = http.get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ConfigError("http.timeout must be a number of seconds")
    headers = _require_mapping(http, "headers", "http.")
    for name, value in headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ConfigError(f"http.headers.{name} must be a string")

    source = _require_mapping(cfg, "source", "")
    for key in DEFAULT_CONFIG["source"]:
        value = source.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"source.{key} must be a string")

    version = _require_mapping(cfg, "version", "")
    messages = _require_mapping(version, "messages", "version.")
    for key in DEFAULT_CONFIG["version"]["messages"]:
        value = messages.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"version.messages.{key} must be a string")
    options = _require_mapping(version, "options", "version.")
    for key in DEFAULT_CONFIG["version"]["options"]:
        if not isinstance(options.get(key), bool):
            raise ConfigError(f"version.options.{key} must be true or false")


# -------------------------------
# Public API
# -------------------------------


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load the effective configuration.

    Steps
      1) Start from DEFAULT_CONFIG.
      2) If path is given, read the YAML file (top level must be a mapping).
      3) Deep-merge the file over the defaults.
      4) Expand ${NAME} environment references.
      5) Validate value types.

    Args:
        path: Optional YAML file. None returns the defaults.

    Returns:
        A new configuration dict; callers may mutate it.

    Raises:
        ConfigError: On a missing or unreadable file, YAML parse errors,
            empty files, a non-mapping top level, or invalid values.

    """
    from forgerelease.logging import get_global_logger

    logger = get_global_logger()

    merged = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        logger.verbose("CONFIG", "No config file, using defaults")
        return merged

    config_path = Path(path)
    logger.verbose("CONFIG", f"Loading config: {config_path}")

    file_obj = _load_yaml_file(config_path)
    if not isinstance(file_obj, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {config_path}")

    merged = _deep_merge_dicts(merged, file_obj)
    merged = _expand_env_vars(merged)
    _validate_config(merged)

    shown = yaml.safe_dump(
        _redact_headers(merged), default_flow_style=False, sort_keys=False
    )
    for line in shown.splitlines():
        logger.debug("CONFIG", line)
    return merged


def _redact_headers(cfg: dict[str, Any]) -> dict[str, Any]:
    shown = copy.deepcopy(cfg)
    headers = shown.get("http", {}).get("headers", {})
    for name in headers:
        headers[name] = "***"
    return shown


def messages_from_config(cfg: dict[str, Any]) -> VersionMessages:
    """Build VersionMessages from the version.messages section."""
    section = cfg.get("version", {}).get("messages", {})
    return VersionMessages(
        older=section.get("older") or "",
        equal=section.get("equal") or "",
        newer=section.get("newer") or "",
        upgrade_url=section.get("upgrade_url") or "",
    )


def options_from_config(cfg: dict[str, Any]) -> VersionOptions:
    """Build VersionOptions from the version.options section."""
    section = cfg.get("version", {}).get("options", {})
    return VersionOptions(
        die_if_older=bool(section.get("die_if_older", False)),
        die_if_newer=bool(section.get("die_if_newer", False)),
        show_message_on_current=bool(section.get("show_message_on_current", False)),
    )


def transport_from_config(cfg: dict[str, Any]) -> HttpTransport:
    """Build an HttpTransport from the http section."""
    section = cfg.get("http", {})
    return HttpTransport(
        timeout=section.get("timeout"),
        headers=section.get("headers") or {},
    )
