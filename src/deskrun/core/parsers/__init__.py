from .exec_command import (
    expand_field_codes,
    escape_argument,
    parse_command,
    resolve_executable,
    tokenize,
)
from .desktop_entry import DesktopEntryParser, extract_exec, read_desktop_section

__all__ = [
    "DesktopEntryParser",
    "escape_argument",
    "expand_field_codes",
    "extract_exec",
    "parse_command",
    "read_desktop_section",
    "resolve_executable",
    "tokenize",
]
