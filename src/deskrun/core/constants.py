"""
Centralized constants for deskrun.

Desktop-entry format details, XDG defaults and built-in configuration
values live here so the parsers and collaborators agree on them.
"""

# ============================================================================
# Desktop Entry Format
# ============================================================================

DESKTOP_EXTENSION = ".desktop"
"""File extension of desktop entries (matched case-insensitively)."""

DESKTOP_ENTRY_GROUP = "Desktop Entry"
"""Name of the only group deskrun reads from a desktop entry."""

APPLICATION_TYPE = "Application"
"""Value of the Type key for launchable entries."""

RESERVED_CHARS = " '\\><~|&;$*?#()`\"\t\n"
"""Characters that must be quoted or escaped inside an Exec value."""

STRIPPED_FIELD_CODES = "fFuUi"
"""Field codes removed from Exec values before launching (no arguments are passed)."""


# ============================================================================
# XDG Defaults
# ============================================================================

DEFAULT_XDG_DATA_HOME = "~/.local/share"
"""Fallback for $XDG_DATA_HOME."""

DEFAULT_XDG_DATA_DIRS = "/usr/local/share:/usr/share"
"""Fallback for $XDG_DATA_DIRS."""

APPLICATIONS_SUBDIR = "applications"
"""Subdirectory of every data dir that holds desktop entries."""

FLATPAK_EXPORT_DIRS = (
    "~/.local/share/flatpak/exports/share",
    "/var/lib/flatpak/exports/share",
)
"""Flatpak export data dirs, appended when $XDG_DATA_DIRS does not list them."""

LOCALE_ENV_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")
"""Environment variables consulted (in order) for the Name[locale] lookup."""


# ============================================================================
# User Configuration Defaults
# ============================================================================

DEFAULT_MENU_COMMAND = "dmenu -i -p Run:"
"""Menu program fed with the list of names on stdin."""

DEFAULT_TERMINAL_COMMAND = "kitty"
"""Terminal wrapper for entries with Terminal=true."""


# ============================================================================
# Exit Codes
# ============================================================================

EXIT_CANCELLED = 1
"""The menu was dismissed without a selection."""

EXIT_LAUNCH_FAILED = 2
"""Resolving or launching the selection failed."""
