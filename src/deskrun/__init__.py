"""deskrun: desktop-entry launcher backend for dmenu-style menus."""
from __future__ import annotations

from deskrun.version import __version__

__all__ = ["__version__"]
