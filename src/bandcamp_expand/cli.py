"""Command line entry point for expanding storefront album downloads."""

import logging
import argparse
from pathlib import Path
import sys
from typing import List, Optional

from .config import ExpandConfig
from .expander import BandcampExpander, ExpandSummary
from .common import ConfigLoader, ExpandError, setup_logging

# Application name derived from package name
_package = __package__ or "bandcamp_expand"
APP_NAME = _package.replace('_', '-').replace('.', '-')


def apply_overrides(config: ExpandConfig, args: argparse.Namespace) -> ExpandConfig:
    """Return a copy of ``config`` with command line values applied."""
    paths = {}
    if args.source_dir:
        paths["source_dir"] = str(args.source_dir)
    if args.music_root:
        paths["music_root"] = str(args.music_root)
    if args.staging_root:
        paths["staging_root"] = str(args.staging_root)

    processing = {}
    if args.fail_fast:
        processing["fail_fast"] = True
    if args.keep_archives:
        processing["delete_archive"] = False

    logging_section = {}
    if args.log_level:
        logging_section["level"] = args.log_level

    data = config.model_dump()
    data["paths"].update(paths)
    data["processing"].update(processing)
    data["logging"].update(logging_section)
    return ExpandConfig.model_validate(data)


def report(logger: logging.Logger, summary: ExpandSummary) -> None:
    """Log a per-archive summary of the run."""
    for result in summary.results:
        if result.succeeded:
            plan = result.plan
            verb = "Would expand" if summary.dry_run else "Expanded"
            logger.info(
                f"{verb} {result.archive.name}: {plan.identity.artist} / "
                f"{plan.identity.album} [{plan.codec.value}] -> {plan.album_dir}"
            )
        else:
            logger.error(f"Failed: {result.archive.name}: {result.error}")

    logger.info(
        f"Processed {len(summary.results)} archive(s): "
        f"{len(summary.succeeded)} successful, {len(summary.failed)} failed"
    )


def expand_command(config: ExpandConfig, dry_run: bool = False) -> int:
    """Expand every archive in the configured source directory.

    Returns:
        Exit code (0 for success)
    """
    # Use __package__ to avoid __main__ when run as module
    logger = logging.getLogger(__package__ or __name__)

    logger.info(f"Source directory: {config.source_dir}")
    logger.info(f"Music library: {config.music_root}")
    logger.info(f"Staging directory: {config.staging_root}")

    if not config.source_dir.is_dir():
        logger.error(f"Source directory does not exist: {config.source_dir}")
        return 1

    expander = BandcampExpander(config)
    try:
        summary = expander.run(dry_run=dry_run)
    except ExpandError as e:
        # Only reached with fail_fast
        logger.error(f"Stopping after failure: {e}")
        return 1

    if not summary.results:
        logger.warning("No archives found to expand")
        return 0

    report(logger, summary)
    return 1 if summary.failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Extract downloaded album archives into a codec-organised music library"
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        help="Directory containing downloaded archives (overrides config)"
    )
    parser.add_argument(
        "--music-root",
        type=Path,
        help="Music library root (overrides config)"
    )
    parser.add_argument(
        "--staging-root",
        type=Path,
        help="Temporary extraction directory (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML config file"
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop at the first archive that fails"
    )
    parser.add_argument(
        "--keep-archives",
        action="store_true",
        help="Do not delete archives after they are moved into the library"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show where each archive would go without changing anything"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(
        app_name=APP_NAME,
        config_class=ExpandConfig
    )

    try:
        config = apply_overrides(loader.load(defaults_path=args.config), args)
    except ExpandError as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(str(e))
        return 1
    except ValueError as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(f"Invalid configuration: {e}")
        return 1

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
    )

    return expand_command(config, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
