"""Runtime configuration for depfetch.

Settings come from a YAML file, the environment and the CLI, and are applied
onto ``Constants``. Precedence: CLI > environment > file > defaults. The CLI
log level is passed straight to ``configure_logging``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_KNOWN_KEYS = ("npm_command", "output_dialect", "search_paths", "log_level")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    Without an explicit path, ``depfetch.yml`` in the working directory is
    used when present. A missing explicit file is reported and ignored.
    """
    path = config_path or Constants.CONFIG_FILE
    if not os.path.isfile(path):
        if config_path:
            logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        return {}
    unknown = sorted(set(data) - set(_KNOWN_KEYS))
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return {k: v for k, v in data.items() if k in _KNOWN_KEYS}


def apply_config(config: Dict[str, Any]) -> None:
    """Apply file configuration onto Constants."""
    if config.get("npm_command"):
        Constants.NPM_COMMAND = str(config["npm_command"])
    if config.get("output_dialect"):
        Constants.OUTPUT_DIALECT = str(config["output_dialect"]).lower()
    paths = config.get("search_paths")
    if isinstance(paths, str):
        paths = [p for p in paths.split(os.pathsep) if p]
    if isinstance(paths, list):
        Constants.EXTRA_SEARCH_PATHS = [str(p) for p in paths if p]
    if config.get("log_level"):
        Constants.LOG_LEVEL = str(config["log_level"]).upper()


def apply_env_overrides() -> None:
    """Apply environment overrides onto Constants."""
    command = os.environ.get(Constants.NPM_COMMAND_ENV)
    if command and command.strip():
        Constants.NPM_COMMAND = command.strip()


def apply_cli_overrides(args) -> None:
    """Apply CLI overrides (highest precedence) onto Constants."""
    if getattr(args, "NPM_COMMAND", None):
        Constants.NPM_COMMAND = args.NPM_COMMAND
