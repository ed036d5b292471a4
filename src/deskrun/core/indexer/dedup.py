"""
Priority shadowing and display-name numbering for catalog entries.

Entries are keyed by id. When two entries share an id, the one whose
source directory comes first in the priority list survives. Entries with
different ids but the same display name are told apart by a collision index
rendered as ``"Name (N)"``. Indices freed by a shadowed entry are reused
smallest-first, and ``mapping()`` compacts every name back to ``0..k-1``.
The one exception is a literal name that looks numbered: an entry called
"Foo (1)" holds that rendered name, so a second "Foo" becomes "Foo (2)".
Uniqueness of rendered names always wins over contiguity.
"""
import os
from typing import Dict, Iterable, List, Optional, Set

from deskrun.core.models import AppEntry
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.dedup")


def render_name(name: str, index: int) -> str:
    return name if index == 0 else f"{name} ({index})"


class Deduplicator:
    def __init__(self, directory_priority: Iterable[str]):
        self._priority: Dict[str, int] = {}
        for idx, directory in enumerate(directory_priority):
            self._priority.setdefault(os.path.normpath(directory), idx)
        self._by_id: Dict[str, AppEntry] = {}
        self._by_name: Dict[str, str] = {}
        self._used: Dict[str, Set[int]] = {}

    def rank(self, source_dir: str) -> int:
        """Priority index of a directory; unknown directories rank last."""
        return self._priority.get(os.path.normpath(source_dir), len(self._priority))

    def _next_index(self, name: str) -> int:
        used = self._used.get(name, set())
        index = 0
        while index in used or render_name(name, index) in self._by_name:
            index += 1
        return index

    def _assign(self, entry: AppEntry) -> AppEntry:
        kept = entry.with_collision_index(self._next_index(entry.name))
        self._used.setdefault(kept.name, set()).add(kept.collision_index)
        self._by_name[kept.rendered_name] = kept.id
        self._by_id[kept.id] = kept
        return kept

    def add(self, entry: AppEntry) -> Optional[AppEntry]:
        """Offer an entry; returns the retained (numbered) entry or None if shadowed."""
        found = self._by_id.get(entry.id)
        if found is not None:
            if self.rank(entry.source_dir) >= self.rank(found.source_dir):
                return None
            logger.debug("entry_shadowed", id=entry.id, kept=entry.file, dropped=found.file)
            self.remove(found.id)
        return self._assign(entry)

    def extend(self, entries: Iterable[AppEntry]) -> None:
        for entry in entries:
            self.add(entry)

    def remove(self, entry_id: str) -> Optional[AppEntry]:
        """Drop an entry and release its rendered name and collision index."""
        found = self._by_id.pop(entry_id, None)
        if found is None:
            return None
        self._by_name.pop(found.rendered_name, None)
        used = self._used.get(found.name)
        if used is not None:
            used.discard(found.collision_index)
            if not used:
                del self._used[found.name]
        return found

    def compact(self) -> None:
        """Renumber every display name contiguously from 0, keeping relative order."""
        retained = sorted(self._by_id.values(), key=lambda e: e.collision_index)
        self._by_name.clear()
        self._used.clear()
        for entry in retained:
            self._assign(entry)

    def entries_by_id(self) -> Dict[str, AppEntry]:
        return dict(self._by_id)

    def mapping(self, excludes: Iterable[str] = ()) -> Dict[str, AppEntry]:
        self.compact()
        excluded = set(excludes)
        return {
            name: self._by_id[entry_id]
            for name, entry_id in self._by_name.items()
            if name not in excluded
        }


def order_for_merge(
        entries: Iterable[AppEntry],
        dedup: Deduplicator,
        cached_entries: Iterable[AppEntry] = ()) -> List[AppEntry]:
    """Offer order for one merge: directory rank, then file path.

    Fresh entries arrive in completion order and cached ones in snapshot
    order, so both are pinned to the same key. A fresh entry goes before a
    cached record of the same file.
    """
    keyed = [(dedup.rank(e.source_dir), e.file, 0, e) for e in entries]
    keyed += [(dedup.rank(e.source_dir), e.file, 1, e) for e in cached_entries]
    keyed.sort(key=lambda item: item[:3])
    return [item[3] for item in keyed]


def merge(
        all_entries: Iterable[AppEntry],
        directory_priority: Iterable[str],
        cached_entries: Iterable[AppEntry] = (),
        excludes: Iterable[str] = ()) -> Dict[str, AppEntry]:
    dedup = Deduplicator(directory_priority)
    dedup.extend(order_for_merge(all_entries, dedup, cached_entries))
    return dedup.mapping(excludes)
