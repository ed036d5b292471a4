from dataclasses import dataclass
from typing import Optional

from deskrun.core.errors import DeskrunError, FileReadError, InvalidDesktopEntry
from deskrun.core.models import AppEntry
from deskrun.core.parsers.desktop_entry import DesktopEntryParser
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.worker")


@dataclass
class ParseOutcome:
    path: str
    entry: Optional[AppEntry] = None
    error: Optional[DeskrunError] = None

    @property
    def skipped(self) -> bool:
        return self.entry is None and self.error is None


class ParseWorker:
    """Runs one desktop-file parse per task; never raises for per-file problems."""

    def __init__(self, parser: DesktopEntryParser):
        self.parser = parser

    def process_file_task(self, path: str) -> ParseOutcome:
        try:
            entry = self.parser.parse(path)
        except (FileReadError, InvalidDesktopEntry) as e:
            logger.debug("entry_rejected", path=path, code=e.code, error=e.message)
            return ParseOutcome(path=path, error=e)
        return ParseOutcome(path=path, entry=entry)
