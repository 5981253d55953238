"""
Configuration Loader

Loads YAML configuration for feed relays, image proxying, rendering
defaults, font search paths and batch pacing. Values missing from the
file fall back to the built-in defaults in constants.py.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from . import constants

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = 'settings.yaml'
OUTPUT_DIR_ENV = 'BANNERGEN_OUTPUT_DIR'

DEFAULT_SETTINGS: Dict[str, Any] = {
    'feed': {
        'cluster_url_template': constants.CLUSTER_URL_TEMPLATE,
        'timeout': constants.REQUEST_TIMEOUT,
        'user_agent': constants.USER_AGENT,
        'strategies': constants.DEFAULT_TRANSPORT_STRATEGIES,
    },
    'images': {
        'proxy_template': constants.IMAGE_PROXY_TEMPLATE,
        'timeout': constants.REQUEST_TIMEOUT,
    },
    'render': {
        'frame_color': constants.COLORS['pardo_blue'],
        'show_price': True,
        'show_badges': True,
        'default_bank_text': constants.DEFAULT_BANK_TEXT,
        'jpeg_quality': constants.JPEG_QUALITY,
    },
    'fonts': {
        'bold': [],
        'regular': [],
    },
    'batch': {
        'settle_delay': constants.SETTLE_DELAY,
        'pacing_delay': constants.PACING_DELAY,
        'output_dir': 'output/banners',
    },
}


def _get_config_dir() -> Optional[Path]:
    """Get the config directory path, or None if there is none."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    return None


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML content as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the top level is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def merge_settings(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into a copy of base.

    Nested dicts are merged key by key; any other value replaces the base value.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load application settings.

    Args:
        path: Explicit settings file. If None, config/settings.yaml is used
              when it exists, otherwise the built-in defaults.

    Returns:
        Settings dictionary with every section present
    """
    if path is None:
        config_dir = _get_config_dir()
        candidate = config_dir / SETTINGS_FILENAME if config_dir else None
        if candidate is not None and candidate.exists():
            path = candidate

    if path is None:
        logger.debug("No %s found, using built-in defaults", SETTINGS_FILENAME)
        settings = copy.deepcopy(DEFAULT_SETTINGS)
    else:
        logger.debug("Loading settings from %s", path)
        settings = merge_settings(DEFAULT_SETTINGS, load_config(Path(path)))

    output_dir = os.environ.get(OUTPUT_DIR_ENV)
    if output_dir:
        settings['batch']['output_dir'] = output_dir

    return settings
