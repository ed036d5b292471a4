import argparse
import sys
from typing import List, Optional

from deskrun.core.utils.logging import configure_logging, get_logger
from deskrun.core.cache import clean_cache, read_cache, write_cache
from deskrun.core.config import load_config
from deskrun.core.constants import EXIT_CANCELLED, EXIT_LAUNCH_FAILED
from deskrun.core.errors import DeskrunError
from deskrun.core.indexer import CatalogBuilder
from deskrun.core.menu import select
from deskrun.core.runner import Runner
from deskrun.core.settings import Settings
from deskrun.core.xdg import application_dirs, current_locale
from deskrun.version import __version__

logger = get_logger("deskrun.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deskrun",
        description="Pick a desktop application (or type a command) in a menu and run it. "
                    "Unrecognised arguments are passed to the menu program.",
    )
    parser.add_argument("--clean", action="store_true", help="ignore the entry cache for this run")
    parser.add_argument("--version", action="version", version=f"deskrun {__version__}")
    return parser


def _report(err: DeskrunError) -> None:
    print(f"[deskrun] {err.message}", file=sys.stderr)
    if err.hint:
        print(f"[deskrun] hint: {err.hint}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    ns, menu_args = build_parser().parse_known_args(argv if argv is not None else sys.argv[1:])

    settings_obj = Settings()
    configure_logging(settings_obj=settings_obj)
    config = load_config(settings_obj.CONFIG_PATH)

    cached, cache_time = [], 0.0
    if config.cache_enabled and not ns.clean:
        cached, cache_time = read_cache(settings_obj.CACHE_PATH)
        cached = clean_cache(cached, cache_time)

    builder = CatalogBuilder(application_dirs(), locale=current_locale(), settings_obj=settings_obj)
    catalog = builder.build(cached_entries=cached, newer_than=cache_time, excludes=config.excludes)
    for err in catalog.errors:
        logger.debug("scan_diagnostic", code=err.code, error=err.message)

    if config.cache_enabled:
        try:
            write_cache(settings_obj.CACHE_PATH, catalog.entries)
        except OSError as e:
            logger.warning("cache_write_failed", path=settings_obj.CACHE_PATH, error=str(e))

    names = catalog.names(aliases=config.aliases, excludes=config.excludes)
    try:
        selected = select(names, config.menu_command, menu_args)
    except DeskrunError as e:
        logger.debug("menu_failed", code=e.code)
        _report(e)
        return EXIT_LAUNCH_FAILED
    if selected is None:
        return EXIT_CANCELLED

    try:
        Runner(config, catalog, settings_obj=settings_obj).run(selected)
    except DeskrunError as e:
        logger.debug("launch_failed", selection=selected, code=e.code)
        _report(e)
        return EXIT_LAUNCH_FAILED
