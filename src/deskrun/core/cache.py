"""Snapshot of previously discovered entries, owned by the CLI layer."""
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Tuple

from deskrun.core.models import AppEntry
from deskrun.core.utils.logging import get_logger

logger = get_logger("deskrun.cache")


def read_cache(path: str) -> Tuple[List[AppEntry], float]:
    """Return the cached entries and the cache file's mtime.

    A missing or unreadable cache is an empty cache with time 0, which makes
    the next scan a full one.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        cache_time = os.stat(path).st_mtime
    except FileNotFoundError:
        return [], 0.0
    except (OSError, ValueError) as e:
        logger.warning("cache_read_failed", path=path, error=str(e))
        return [], 0.0
    if not isinstance(data, list):
        logger.warning("cache_read_failed", path=path, error="not a JSON list")
        return [], 0.0

    entries = []
    for record in data:
        entry = AppEntry.from_dict(record) if isinstance(record, dict) else None
        if entry is not None:
            entries.append(entry)
    return entries, cache_time


def clean_cache(entries: Iterable[AppEntry], cache_time: float) -> List[AppEntry]:
    """Keep entries whose file still exists and has not changed since the cache was written."""
    clean = []
    for entry in entries:
        try:
            st = os.lstat(entry.file)
        except OSError:
            continue
        if st.st_mtime <= cache_time:
            clean.append(entry)
    return clean


def write_cache(path: str, entries: Iterable[AppEntry]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([e.to_dict() for e in entries], indent=4)
    fd, tmp = tempfile.mkstemp(prefix=".deskrun-", suffix=".json", dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp, target)
    except OSError:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise
