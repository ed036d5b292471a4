import os
import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from deskrun.core.models import LauncherConfig
from deskrun.core.settings import Settings
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.config")


def resolve_config_path(path: Optional[str] = None) -> str:
    return os.path.expanduser(path or Settings().CONFIG_PATH)


def validate_config_file(path: str) -> Optional[str]:
    """Validate a JSON config file; returns an error string or None."""
    if not os.path.exists(path): return "File does not exist"
    try:
        with open(path, "r", encoding="utf-8") as f:
            LauncherConfig.model_validate(json.load(f))
        return None
    except (OSError, ValueError) as e: return str(e)


def save_config(path: str, config: LauncherConfig) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.model_dump(mode="json"), f, indent=4)
        f.write("\n")


def load_config(path: Optional[str] = None) -> LauncherConfig:
    """Load the user configuration.

    A missing file is created with the defaults. An unreadable or invalid
    file is left alone and the defaults are used for this run.
    """
    cfg_path = resolve_config_path(path)
    defaults = LauncherConfig()

    if not os.path.exists(cfg_path):
        try:
            save_config(cfg_path, defaults)
            logger.info("config_created", path=cfg_path)
        except OSError as e:
            logger.warning("config_write_failed", path=cfg_path, error=str(e))
        return defaults

    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value must be an object")
        return LauncherConfig.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning("config_load_failed", path=cfg_path, error=str(e))
        return defaults
