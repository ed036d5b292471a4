import os
import re
from typing import Iterable, List, Optional, Tuple

from deskrun.core.constants import DESKTOP_EXTENSION
from deskrun.core.errors import FileReadError, InvalidDesktopEntry
from deskrun.core.models import AppEntry

# The group runs from its header to the next header line or EOF.
SECTION_RE = re.compile(r"^\[Desktop Entry\][^\n]*$(.*?)(?=^\[|\Z)", re.MULTILINE | re.DOTALL)
HIDDEN_RE = re.compile(r"^(?:NoDisplay|Hidden)[ \t]*=[ \t]*true[ \t\r]*$", re.MULTILINE)
TYPE_RE = re.compile(r"^Type[ \t]*=[ \t]*Application[ \t\r]*$", re.MULTILINE)
TERMINAL_RE = re.compile(r"^Terminal[ \t]*=[ \t]*true[ \t\r]*$", re.MULTILINE)
EXEC_RE = re.compile(r"^Exec[ \t]*=[ \t]*([^\r\n]*)", re.MULTILINE)
PATH_RE = re.compile(r"^Path[ \t]*=[ \t]*([^\r\n]*)", re.MULTILINE)
NAME_RE = re.compile(r"^Name[ \t]*=[ \t]*([^\r\n]*)", re.MULTILINE)


def read_desktop_section(path: str) -> str:
    """Return the ``[Desktop Entry]`` group of ``path`` or "" when it has none."""
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
    match = SECTION_RE.search(raw.decode("utf-8", errors="replace"))
    return match.group(0) if match else ""


def _first(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1).rstrip()


def extract_exec(path: str) -> Tuple[str, Optional[str], bool]:
    """Re-read a desktop file for launching: (Exec value, Path value, Terminal flag)."""
    section = read_desktop_section(path)
    if not section:
        raise InvalidDesktopEntry(path, "has no [Desktop Entry] group")
    command = _first(EXEC_RE, section)
    if command is None:
        raise InvalidDesktopEntry(path)
    working_dir = _first(PATH_RE, section) or None
    return command, working_dir, bool(TERMINAL_RE.search(section))


class DesktopEntryParser:
    """Turns desktop files into AppEntry records.

    One instance is shared by every parse task of a catalog build; all state
    is computed in the constructor and never mutated afterwards.
    """

    def __init__(self, roots: Iterable[str], locale: str = "", extension: str = DESKTOP_EXTENSION):
        self.locale = locale
        self.extension = extension.lower()
        # Longest root first so nested roots claim their own files.
        self.roots: List[str] = sorted(
            {os.path.normpath(r) for r in roots if r},
            key=len,
            reverse=True,
        )
        self.localized_name_re: Optional[re.Pattern] = None
        if locale:
            self.localized_name_re = re.compile(
                r"^Name\[" + re.escape(locale) + r"\][ \t]*=[ \t]*([^\r\n]*)",
                re.MULTILINE,
            )

    def root_for(self, path: str) -> str:
        norm = os.path.normpath(path)
        for root in self.roots:
            if norm.startswith(root.rstrip(os.sep) + os.sep):
                return root
        return os.path.dirname(norm)

    def entry_id(self, path: str, root: str) -> str:
        rel = os.path.relpath(os.path.normpath(path), root)
        if rel.lower().endswith(self.extension):
            rel = rel[: -len(self.extension)]
        return rel.replace(os.sep, "-")

    def resolve_name(self, section: str) -> Optional[str]:
        if self.localized_name_re is not None:
            localized = _first(self.localized_name_re, section)
            if localized:
                return localized
        return _first(NAME_RE, section) or None

    def parse(self, path: str) -> Optional[AppEntry]:
        """Parse one desktop file.

        Returns None for files that are not visible applications. Raises
        FileReadError when the file cannot be read and InvalidDesktopEntry
        when a visible application has no Exec key.
        """
        section = read_desktop_section(path)
        if not section:
            return None
        if HIDDEN_RE.search(section) or not TYPE_RE.search(section):
            return None

        name = self.resolve_name(section)
        if not name:
            return None

        command = _first(EXEC_RE, section)
        if command is None:
            raise InvalidDesktopEntry(path)

        root = self.root_for(path)
        return AppEntry(
            name=name,
            file=path,
            command_template=command,
            working_dir=_first(PATH_RE, section) or None,
            id=self.entry_id(path, root),
            source_dir=root,
            terminal=bool(TERMINAL_RE.search(section)),
        )
