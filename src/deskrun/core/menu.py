import subprocess
from typing import Optional, Sequence

from deskrun.core.errors import MenuError
from deskrun.core.parsers.exec_command import parse_command
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.menu")


def build_menu_command(menu_command: str, extra_args: Sequence[str] = ()) -> list:
    return parse_command(menu_command) + list(extra_args)


def select(names: Sequence[str], menu_command: str, extra_args: Sequence[str] = ()) -> Optional[str]:
    """Show ``names`` in the menu program and return the chosen line.

    Returns None when the menu exits non-zero or prints nothing (dismissed).
    The returned text may be any line the user typed, not only a listed name.
    """
    argv = build_menu_command(menu_command, extra_args)
    stdin = "".join(f"{name}\n" for name in names)
    try:
        proc = subprocess.run(
            argv,
            input=stdin,
            stdout=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        raise MenuError(f"Failed to start menu {argv[0]}: {e}") from e

    selected = (proc.stdout or "").strip()
    if proc.returncode != 0 or not selected:
        logger.debug("menu_cancelled", returncode=proc.returncode)
        return None
    return selected
