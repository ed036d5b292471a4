from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from deskrun.version import __version__
from deskrun.core.constants import DESKTOP_EXTENSION


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DESKRUN_",
        case_sensitive=True,
        extra="ignore"
    )

    # --- CORE RELEVANT SETTINGS ---
    VERSION: str = __version__
    CONFIG_PATH: str = str(Path.home() / ".config" / "deskrun" / "config.json")
    CACHE_PATH: str = str(Path.home() / ".cache" / "deskrun.json")
    DESKTOP_EXTENSION: str = DESKTOP_EXTENSION
    # Descend into symlinked directories (cycles are cut by real path).
    FOLLOW_SYMLINKS: bool = False

    # --- LOGGING ---
    LOG_LEVEL: str = "WARNING"
    LOG_JSON: bool = False

    # --- WORKER LIMITS ---
    # One walk task per root and one parse task per file are queued on a pool
    # of this size.
    MAX_WORKERS: int = 16


settings = Settings()
