from pydantic import BaseModel, Field, ConfigDict, ValidationError
from typing import Dict, List, Optional, Any
import logging

from deskrun.core.constants import DEFAULT_MENU_COMMAND, DEFAULT_TERMINAL_COMMAND

logger = logging.getLogger("deskrun.models")


class AppEntry(BaseModel):
    """One launchable desktop entry found under a priority directory."""
    model_config = ConfigDict(frozen=True)
    name: str
    file: str
    command_template: str
    working_dir: Optional[str] = None
    id: str
    source_dir: str
    collision_index: int = 0
    terminal: bool = False

    @property
    def rendered_name(self) -> str:
        if self.collision_index == 0:
            return self.name
        return f"{self.name} ({self.collision_index})"

    def with_collision_index(self, index: int) -> "AppEntry":
        if index == self.collision_index:
            return self
        return self.model_copy(update={"collision_index": index})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["AppEntry"]:
        """Build an entry from a cache record; malformed records yield None."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.debug("AppEntry record rejected: %s", e)
            return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Alias(BaseModel):
    model_config = ConfigDict(frozen=True)
    command: str
    is_desktop: bool = False


class LauncherConfig(BaseModel):
    """User configuration stored as JSON (see deskrun.core.config)."""
    model_config = ConfigDict(extra="ignore")
    menu_command: str = DEFAULT_MENU_COMMAND
    terminal_command: str = DEFAULT_TERMINAL_COMMAND
    cache_enabled: bool = True
    aliases: Dict[str, Alias] = Field(default_factory=dict)
    excludes: List[str] = Field(default_factory=list)
