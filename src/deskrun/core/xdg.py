import os
from typing import List, Mapping, Optional

from deskrun.core.constants import (
    APPLICATIONS_SUBDIR,
    DEFAULT_XDG_DATA_DIRS,
    DEFAULT_XDG_DATA_HOME,
    FLATPAK_EXPORT_DIRS,
    LOCALE_ENV_VARS,
)


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def application_dirs(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Priority-ordered application directories (highest priority first).

    $XDG_DATA_HOME comes first, then every $XDG_DATA_DIRS entry in order,
    then flatpak export dirs that the data dirs did not already list.
    """
    env = _env(environ)
    data_home = env.get("XDG_DATA_HOME") or DEFAULT_XDG_DATA_HOME
    data_dirs = [d for d in (env.get("XDG_DATA_DIRS") or DEFAULT_XDG_DATA_DIRS).split(":") if d]

    dirs = []
    for base in [data_home, *data_dirs, *FLATPAK_EXPORT_DIRS]:
        path = os.path.normpath(os.path.join(os.path.expanduser(base), APPLICATIONS_SUBDIR))
        if path not in dirs:
            dirs.append(path)
    return dirs


def current_locale(environ: Optional[Mapping[str, str]] = None) -> str:
    """Language part of the active locale: ``en_US.UTF-8`` -> ``en``."""
    env = _env(environ)
    for var in LOCALE_ENV_VARS:
        value = env.get(var)
        if value:
            return value.split("_", 1)[0]
    return ""
