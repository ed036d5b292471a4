import concurrent.futures
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from deskrun.core.errors import DeskrunError
from deskrun.core.models import AppEntry
from deskrun.core.parsers.desktop_entry import DesktopEntryParser
from deskrun.core.settings import settings
from deskrun.core.utils.logging import get_logger
from .dedup import Deduplicator, order_for_merge
from .scanner import Scanner
from .worker import ParseOutcome, ParseWorker

logger = get_logger("deskrun.indexer")


@dataclass
class Catalog:
    """Result of one catalog build."""
    by_name: Dict[str, AppEntry] = field(default_factory=dict)
    by_id: Dict[str, AppEntry] = field(default_factory=dict)
    # Every fresh and cached entry that took part in the merge, one per file.
    entries: List[AppEntry] = field(default_factory=list)
    errors: List[DeskrunError] = field(default_factory=list)

    def get(self, name: str) -> Optional[AppEntry]:
        return self.by_name.get(name)

    def get_by_id(self, entry_id: str) -> Optional[AppEntry]:
        return self.by_id.get(entry_id)

    def names(self, aliases: Iterable[str] = (), excludes: Iterable[str] = ()) -> List[str]:
        """Menu lines: catalog names plus alias names, minus exclusions, sorted."""
        excluded = set(excludes)
        names = set(self.by_name) | set(aliases)
        return sorted(n for n in names if n not in excluded)


class CatalogBuilder:
    """Builds a Catalog from the configured priority directories.

    The build runs in two fan-out phases on one thread pool: a walk task per
    root, then a parse task per discovered file. Each phase is joined before
    its results are read, and the merge runs on the calling thread.
    """

    def __init__(
            self,
            roots: Sequence[str],
            locale: str = "",
            settings_obj=None,
            max_workers: Optional[int] = None,
            scanner: Optional[Scanner] = None):
        self.settings = settings_obj or settings
        self.roots = [os.path.normpath(r) for r in roots if r]
        self.locale = locale
        extension = self.settings.DESKTOP_EXTENSION
        self.max_workers = max(1, int(max_workers or self.settings.MAX_WORKERS))
        self.scanner = scanner or Scanner(extension=extension, follow_symlinks=self.settings.FOLLOW_SYMLINKS)
        self.parser = DesktopEntryParser(self.roots, locale=locale, extension=extension)
        self.worker = ParseWorker(self.parser)

    def discover(self, executor: concurrent.futures.Executor, newer_than: float = 0.0) -> List[str]:
        futures = [executor.submit(self.scanner.walk, root, newer_than) for root in self.roots]
        concurrent.futures.wait(futures)
        files: List[str] = []
        for future in futures:
            files.extend(future.result())
        # Nested roots can report the same file twice.
        return list(dict.fromkeys(files))

    def parse_all(self, executor: concurrent.futures.Executor, files: Sequence[str]) -> List[ParseOutcome]:
        futures = [executor.submit(self.worker.process_file_task, path) for path in files]
        concurrent.futures.wait(futures)
        return [future.result() for future in futures]

    def build(
            self,
            cached_entries: Iterable[AppEntry] = (),
            newer_than: float = 0.0,
            excludes: Iterable[str] = ()) -> Catalog:
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            files = self.discover(executor, newer_than=newer_than)
            outcomes = self.parse_all(executor, files)

        fresh = [o.entry for o in outcomes if o.entry is not None]
        errors = [o.error for o in outcomes if o.error is not None]
        skipped = sum(1 for o in outcomes if o.skipped)
        cached = list(cached_entries)

        dedup = Deduplicator(self.roots)
        ordered = order_for_merge(fresh, dedup, cached)
        dedup.extend(ordered)
        by_name = dedup.mapping(excludes)

        # Cache snapshot: one record per file, in merge order.
        snapshot: Dict[str, AppEntry] = {}
        for entry in ordered:
            snapshot.setdefault(entry.file, entry.with_collision_index(0))

        logger.info(
            "catalog_built",
            roots=len(self.roots),
            files=len(files),
            fresh=len(fresh),
            skipped=skipped,
            cached=len(cached),
            names=len(by_name),
            errors=len(errors),
        )
        return Catalog(
            by_name=by_name,
            by_id=dedup.entries_by_id(),
            entries=list(snapshot.values()),
            errors=errors,
        )
