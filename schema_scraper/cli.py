"""
Command line entry point for the NetSuite schema browser type generator.

Usage:
    python -m schema_scraper --create-files-for-single-version --netsuite-version 2019_1
    python -m schema_scraper --create-single-file --link <schema browser page url>
    python -m schema_scraper --create-index-files-for-single-version --netsuite-version 2019_1
    python -m schema_scraper --fix-imports-for-version --netsuite-version 2019_1

Several flags can be combined; they always run in the order listed by --help.
"""

import argparse
import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import Optional

from .browser import browser_session
from .config import FILE_PATHS_DIR, HEADLESS, LOG_DIR, OUTPUT_DIR, PAGE_LOAD_TIMEOUT, VERSIONS
from .file_paths import FilePathTables
from .filesystem import create_index_files, fix_imports
from .generator import (
    create_file_path_table,
    generate_namespace,
    generate_single_file,
    generate_version,
)

logger = logging.getLogger("schema_scraper")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema_scraper",
        description="Generate TypeScript types from the NetSuite schema browser",
    )
    parser.add_argument(
        "--create-files-for-all-versions", action="store_true",
        help="Create the file-path table and every file for all known versions",
    )
    parser.add_argument(
        "--create-files-for-single-version", action="store_true",
        help="Create the file-path table and every file for --netsuite-version",
    )
    parser.add_argument(
        "--create-files-for-namespace", action="store_true",
        help="Create every file for the namespace at --namespace-link",
    )
    parser.add_argument(
        "--create-single-file", action="store_true",
        help="Create the file for the single page at --link",
    )
    parser.add_argument(
        "--create-file-path-object-file", action="store_true",
        help="Only create the file-path table for --netsuite-version",
    )
    parser.add_argument(
        "--create-index-files-for-all-versions", action="store_true",
        help="Create index.ts files for all known versions",
    )
    parser.add_argument(
        "--create-index-files-for-single-version", action="store_true",
        help="Create index.ts files for --netsuite-version",
    )
    parser.add_argument(
        "--fix-imports-for-all-versions", action="store_true",
        help="Rewrite src/ imports as relative imports for all known versions",
    )
    parser.add_argument(
        "--fix-imports-for-version", action="store_true",
        help="Rewrite src/ imports as relative imports for --netsuite-version",
    )
    parser.add_argument("--netsuite-version", help="NetSuite version, e.g. 2019_1")
    parser.add_argument("--link", help="URL of a single schema browser page")
    parser.add_argument("--namespace-link", help="URL of a schema browser namespace page")
    parser.add_argument(
        "--output-dir", default=OUTPUT_DIR,
        help=f"Root of the generated types project (default: {OUTPUT_DIR})",
    )
    parser.add_argument(
        "--table-dir", default=FILE_PATHS_DIR,
        help=f"Where file-path tables are stored (default: {FILE_PATHS_DIR})",
    )
    parser.add_argument(
        "--log-dir", default=LOG_DIR,
        help=f"Where error.log and combined.log are written (default: {LOG_DIR})",
    )
    parser.add_argument(
        "--headed", action="store_true", default=not HEADLESS,
        help="Show the browser window",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _requires(args: argparse.Namespace, flag: str, value: str) -> bool:
    if getattr(args, value):
        return True
    logger.warning(f"--{flag.replace('_', '-')} needs --{value.replace('_', '-')}, skipping.")
    return False


async def run(args: argparse.Namespace):
    """Run every driver selected on the command line, in a fixed order."""
    tables = FilePathTables(args.table_dir)
    session_factory = partial(browser_session, headless=not args.headed, timeout=PAGE_LOAD_TIMEOUT)
    version = args.netsuite_version

    async def files_for_version(version: str):
        logger.info(f"Creating files for version {version}...")
        await generate_version(version, tables, args.output_dir, session_factory, logger)
        logger.info(f"Finished creating files for version {version}.")

    if args.create_files_for_all_versions:
        for each_version in VERSIONS:
            await files_for_version(each_version)

    if args.create_files_for_single_version and _requires(args, "create_files_for_single_version", "netsuite_version"):
        await files_for_version(version)

    if args.create_files_for_namespace and _requires(args, "create_files_for_namespace", "namespace_link"):
        logger.info(f"Creating namespace files from link {args.namespace_link}...")
        await generate_namespace(args.namespace_link, tables, args.output_dir, session_factory, logger)
        logger.info(f"Finished creating namespace files from link {args.namespace_link}.")

    if args.create_single_file and _requires(args, "create_single_file", "link"):
        logger.info(f"Creating file for page {args.link}...")
        await generate_single_file(args.link, tables, args.output_dir, session_factory, logger)
        logger.info(f"Finished creating file for page {args.link}.")

    if args.create_file_path_object_file and _requires(args, "create_file_path_object_file", "netsuite_version"):
        logger.info(f"Creating file paths for version {version}...")
        await create_file_path_table(version, tables, session_factory, logger)
        logger.info(f"Finished creating file paths for version {version}.")

    index_versions = []
    if args.create_index_files_for_all_versions:
        index_versions.extend(VERSIONS)
    if args.create_index_files_for_single_version and _requires(args, "create_index_files_for_single_version", "netsuite_version"):
        index_versions.append(version)
    for each_version in index_versions:
        logger.info(f"Creating index files for version {each_version}...")
        create_index_files(args.output_dir, each_version, logger)
        logger.info(f"Finished creating index files for version {each_version}.")

    import_versions = []
    if args.fix_imports_for_all_versions:
        import_versions.extend(VERSIONS)
    if args.fix_imports_for_version and _requires(args, "fix_imports_for_version", "netsuite_version"):
        import_versions.append(version)
    for each_version in import_versions:
        logger.info(f"Fixing imports for version {each_version}...")
        fix_imports(args.output_dir, each_version, logger)
        logger.info(f"Finished fixing imports for version {each_version}.")


def add_log_files(log_dir: str | Path) -> list[logging.Handler]:
    """
    Keep a copy of the run's log on disk.

    ``error.log`` gets errors only, ``combined.log`` gets everything the
    package logs. Broken links from a long run are found there afterwards.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT)

    error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    combined_handler = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")

    handlers = [error_handler, combined_handler]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return handlers


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
    handlers = add_log_files(args.log_dir)

    try:
        asyncio.run(run(args))
    except Exception:
        logger.exception("Generation failed")
        return 1
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
    return 0

