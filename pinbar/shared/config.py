"""Configuration loading and validation for pinbar."""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from pinbar.terminal.geometry import DEFAULT_DEVICE

CONFIG_PATH = Path.home() / ".pinbar" / "config.yaml"

DEFAULT_FILL_CHAR = "#"
DEFAULT_EMPTY_CHAR = "."

logger = logging.getLogger(__name__)

# Keys under 'bar' and the default each one falls back to
BAR_KEYS = {
    'fill': DEFAULT_FILL_CHAR,
    'empty': DEFAULT_EMPTY_CHAR,
}


def load_config(
    required: bool = False,
    fallback: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """Load ~/.pinbar/config.yaml.

    Args:
        required: If True, exit with error when config is missing.
        fallback: Default dict to return when config is missing and not required.

    Returns:
        Parsed config dict, fallback dict, or None if missing/invalid.
    """
    if not CONFIG_PATH.exists():
        if required:
            logger.error("Config file not found at %s", CONFIG_PATH)
            sys.exit(1)
        return fallback

    try:
        with open(CONFIG_PATH) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.error("Error reading config: %s", e)
        if required:
            sys.exit(1)
        return fallback

    if not isinstance(data, dict):
        logger.error("Config at %s must be a mapping, got %s", CONFIG_PATH, type(data).__name__)
        if required:
            sys.exit(1)
        return fallback
    return data


def _is_bar_char(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1 and value.isprintable()


def validate_bar_config(config: Optional[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Check the 'bar' and 'device' settings of a config dict.

    Returns:
        List of issue dicts with 'key', 'level' ('error'|'warning'), and
        'message' keys. Empty list means the settings are usable as-is.
    """
    issues: List[Dict[str, str]] = []
    if not config:
        return issues

    bar = config.get('bar')
    if bar is not None and not isinstance(bar, dict):
        issues.append({
            'key': 'bar',
            'level': 'error',
            'message': f"Expected a mapping, got {type(bar).__name__}",
        })
        bar = None

    for key in BAR_KEYS:
        if not bar or key not in bar:
            continue
        if not _is_bar_char(bar[key]):
            issues.append({
                'key': f'bar.{key}',
                'level': 'warning',
                'message': f"Expected a single printable character, got {bar[key]!r}",
            })

    if bar:
        for key in sorted(set(bar) - set(BAR_KEYS)):
            issues.append({
                'key': f'bar.{key}',
                'level': 'warning',
                'message': 'Unknown setting',
            })

    device = config.get('device')
    if device is not None and (not isinstance(device, str) or not device):
        issues.append({
            'key': 'device',
            'level': 'error',
            'message': f"Expected a device path, got {device!r}",
        })

    return issues


def resolve_bar_settings(config: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """Return fill/empty characters and device path with defaults applied.

    Invalid values are reported through the logger and replaced by their
    default.
    """
    config = config or {}
    bad_keys = set()
    for issue in validate_bar_config(config):
        logger.warning("Config %s: %s", issue['key'], issue['message'])
        bad_keys.add(issue['key'])

    bar = config.get('bar') if 'bar' not in bad_keys else None
    bar = bar or {}
    settings = {}
    for key, default in BAR_KEYS.items():
        if key in bar and f'bar.{key}' not in bad_keys:
            settings[key] = bar[key]
        else:
            settings[key] = default

    device = config.get('device')
    settings['device'] = device if device and 'device' not in bad_keys else DEFAULT_DEVICE
    return settings
