import os
from typing import Callable, List, Mapping, NoReturn, Optional, Tuple

from deskrun.core.errors import InvalidAlias, LaunchFailed
from deskrun.core.indexer.main import Catalog
from deskrun.core.models import LauncherConfig
from deskrun.core.parsers.desktop_entry import extract_exec
from deskrun.core.parsers.exec_command import expand_field_codes, parse_command
from deskrun.core.settings import settings
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.runner")

Invocation = Tuple[List[str], Optional[str]]


class Runner:
    """Resolves a menu selection and replaces the current process with it.

    Resolution order: configured alias, catalog entry, then the selection
    itself as a command line. ``run`` never returns: it either hands the
    process over to the launched program or raises a DeskrunError.
    """

    def __init__(
            self,
            config: LauncherConfig,
            catalog: Catalog,
            exec_fn: Optional[Callable[[str, List[str], Mapping[str, str]], None]] = None,
            chdir_fn: Optional[Callable[[str], None]] = None,
            environ: Optional[Mapping[str, str]] = None,
            settings_obj=None):
        self.config = config
        self.catalog = catalog
        self.exec_fn = exec_fn or os.execve
        self.chdir_fn = chdir_fn or os.chdir
        self.environ = dict(os.environ if environ is None else environ)
        self.settings = settings_obj or settings

    def _parse(self, command: str) -> List[str]:
        return parse_command(command, search_path=self.environ.get("PATH"))

    def desktop_command(self, path: str) -> Invocation:
        exec_value, working_dir, terminal = extract_exec(path)
        command = expand_field_codes(exec_value, path)
        if terminal:
            command = f"{self.config.terminal_command} {command}"
        return self._parse(command), working_dir

    def resolve(self, selected_name: str) -> Invocation:
        alias = self.config.aliases.get(selected_name)
        if alias is not None:
            if not alias.is_desktop:
                return self._parse(alias.command), None
            entry = self.catalog.get_by_id(alias.command)
            if entry is not None:
                return self.desktop_command(entry.file)
            path = os.path.expanduser(alias.command)
            if path.lower().endswith(self.settings.DESKTOP_EXTENSION.lower()) and os.path.isfile(path):
                return self.desktop_command(path)
            raise InvalidAlias(selected_name, alias.command)

        entry = self.catalog.get(selected_name)
        if entry is not None:
            return self.desktop_command(entry.file)

        return self._parse(selected_name), None

    def launch(self, argv: List[str], working_dir: Optional[str] = None) -> NoReturn:
        if working_dir:
            target = os.path.expanduser(working_dir)
            try:
                self.chdir_fn(target)
            except OSError as e:
                raise LaunchFailed(target, e.strerror or str(e)) from e

        logger.info("launch", argv=argv, cwd=working_dir)
        try:
            self.exec_fn(argv[0], argv, self.environ)
        except OSError as e:
            raise LaunchFailed(argv[0], e.strerror or str(e)) from e
        # Only reachable when exec_fn is not a real exec.
        raise LaunchFailed(argv[0], "exec returned")

    def run(self, selected_name: str) -> NoReturn:
        argv, working_dir = self.resolve(selected_name)
        self.launch(argv, working_dir)
