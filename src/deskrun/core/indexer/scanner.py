import os
from typing import Iterable, List

from deskrun.core.constants import DESKTOP_EXTENSION
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.scanner")


class Scanner:
    """Recursive listing of desktop files below one priority directory."""

    def __init__(self, extension: str = DESKTOP_EXTENSION, follow_symlinks: bool = False):
        self.extension = extension.lower()
        self.follow_symlinks = follow_symlinks

    def walk(self, root: str, newer_than: float = 0.0) -> List[str]:
        """List matching files under ``root``.

        A missing root yields an empty list. With ``newer_than`` set, only
        files modified or changed after that timestamp are returned.
        """
        if not os.path.isdir(root):
            logger.debug("root_missing", root=root)
            return []
        return list(self.iter_files(root, newer_than=newer_than))

    def iter_files(self, root: str, newer_than: float = 0.0) -> Iterable[str]:
        yield from self._scan_recursive(root, newer_than, visited=set())

    def _matches(self, name: str) -> bool:
        return name.lower().endswith(self.extension) and len(name) > len(self.extension)

    def _scan_recursive(self, current_dir: str, newer_than: float, visited: set) -> Iterable[str]:
        # Cycle detection only matters when directory symlinks are followed.
        if self.follow_symlinks:
            try:
                real_path = os.path.realpath(current_dir)
            except OSError:
                return
            if real_path in visited:
                return
            visited.add(real_path)

        try:
            entries = list(os.scandir(current_dir))
        except OSError as e:
            logger.debug("scandir_failed", path=current_dir, error=str(e))
            return

        for entry in entries:
            try:
                is_symlink = entry.is_symlink()
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    yield from self._scan_recursive(entry.path, newer_than, visited)
                    continue
                if not (is_symlink or entry.is_file(follow_symlinks=False)):
                    continue
                if not self._matches(entry.name):
                    continue
                if newer_than > 0:
                    st = entry.stat(follow_symlinks=False)
                    if st.st_mtime <= newer_than and st.st_ctime <= newer_than:
                        continue
            except OSError as e:
                logger.debug("entry_skipped", path=entry.path, error=str(e))
                continue
            yield entry.path

