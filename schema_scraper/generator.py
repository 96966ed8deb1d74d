"""
Drivers that tie link discovery, page extraction, rendering and writing together.

Each public driver opens one browser session for its whole run and closes it
on the way out, whether or not the run succeeded. A page that can't be read
or rendered is logged and skipped; anything else stops the run.
"""

import json
import logging
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import AsyncIterator, Callable

from .browser import SchemaBrowser, browser_session
from .config import FILE_PATH_ENUM_NAME, OUTPUT_DIR, TABS
from .file_paths import FilePathTables
from .filesystem import get_version_folder, write_file
from .models import PageContent
from .paths import (
    get_root_schema_url,
    get_root_types_folder,
    parse_schema_link,
    relative_folder_for_tab,
)
from .render import create_enum, create_file_path_enum, create_interface

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[SchemaBrowser]]


# ---------------------------------------------------------------------------
# Link walking
# ---------------------------------------------------------------------------

async def walk_namespace(browser: SchemaBrowser, root_url: str, namespace_link: str) -> AsyncIterator[tuple[str, str]]:
    """Yield ``(tab, link)`` for every page listed on a namespace page."""
    await browser.goto(namespace_link)

    # Collect every tab before leaving the namespace page
    tab_links = []
    for tab in TABS:
        for link in await browser.leaf_links(root_url, tab):
            tab_links.append((tab, link))

    for tab_link in tab_links:
        yield tab_link


async def walk_version(browser: SchemaBrowser, version: str, logger: logging.Logger = logger) -> AsyncIterator[tuple[str, str]]:
    """Yield ``(tab, link)`` for every page of every namespace in a version."""
    root_url = get_root_schema_url(version)
    await browser.open_reference_page(root_url)
    namespace_links = await browser.namespace_links(root_url)
    logger.info(f"Found {len(namespace_links)} namespaces for version {version}")

    for namespace_link in namespace_links:
        async for tab_link in walk_namespace(browser, root_url, namespace_link):
            yield tab_link


# ---------------------------------------------------------------------------
# Page handling
# ---------------------------------------------------------------------------

def project_file_path(content: PageContent, tab: str) -> str:
    """Project path of the generated file, without extension."""
    return f"{relative_folder_for_tab(content.folder_path, tab)}/{content.type_name}"


def render_page(content: PageContent, tab: str, link: str, file_paths: dict[str, str]) -> str:
    # Enum pages are laid out completely differently from the others
    if tab == "enum":
        return create_enum(link, content.type_name, content.rows)
    return create_interface(file_paths, link, content.type_name, content.rows)


async def write_page(
    browser: SchemaBrowser,
    link: str,
    tab: str,
    version: str,
    file_paths: dict[str, str],
    output_dir: str | Path,
) -> Path:
    """Load one page, render it and write it under *output_dir*."""
    await browser.goto(link)
    content = await browser.page_content(get_root_types_folder(version))
    output_file = Path(output_dir) / f"{project_file_path(content, tab)}.ts"
    write_file(output_file, render_page(content, tab, link, file_paths))
    return output_file


def _log_broken_link(logger: logging.Logger, link: str):
    logger.exception("Error while processing page")
    logger.warning(f"Failed to grab data from page, broken link at:\n{link}")


# ---------------------------------------------------------------------------
# File-path table
# ---------------------------------------------------------------------------

async def collect_file_paths(browser: SchemaBrowser, version: str, logger: logging.Logger = logger) -> dict[str, str]:
    """First pass over a version: only names and folders, nothing is rendered."""
    types_folder = get_root_types_folder(version)
    file_paths: dict[str, str] = {}

    async for tab, link in walk_version(browser, version, logger):
        try:
            await browser.goto(link)
            content = await browser.page_content(types_folder)
        except Exception:
            _log_broken_link(logger, link)
            continue
        file_paths[content.type_name] = project_file_path(content, tab)

    logger.info(f"Collected {len(file_paths)} file paths for version {version}")
    return file_paths


async def create_file_path_table(
    version: str,
    tables: FilePathTables,
    session_factory: SessionFactory = browser_session,
    logger: logging.Logger = logger,
) -> dict[str, str]:
    """Build the file-path table for *version* and persist it."""
    async with session_factory() as browser:
        file_paths = await collect_file_paths(browser, version, logger)

    tables.set(version, file_paths)
    table_file = tables.save(version)
    logger.info(f"Saved file paths for version {version} to {table_file}")
    return file_paths


def write_file_path_enum(
    output_dir: str | Path,
    version: str,
    file_paths: dict[str, str],
    logger: logging.Logger = logger,
) -> Path | None:
    """Write the FilePath enum for a version unless it already exists."""
    output_file = get_version_folder(output_dir, version) / "enums" / f"{FILE_PATH_ENUM_NAME}.ts"
    if output_file.exists():
        logger.info(f"FilePath enum already exists at {output_file}, skipping.")
        return None

    write_file(output_file, create_file_path_enum(FILE_PATH_ENUM_NAME, file_paths))
    return output_file


# ---------------------------------------------------------------------------
# Generation drivers
# ---------------------------------------------------------------------------

async def generate_version(
    version: str,
    tables: FilePathTables,
    output_dir: str | Path = OUTPUT_DIR,
    session_factory: SessionFactory = browser_session,
    logger: logging.Logger = logger,
) -> int:
    """
    Create every enum and interface for a version.

    Builds and persists the file-path table first so that every interface
    can import the types it references, then renders every page and finally
    writes the FilePath enum.
    """
    async with session_factory() as browser:
        logger.info(f"Creating file paths for version {version}...")
        tables.set(version, await collect_file_paths(browser, version, logger))
        tables.save(version)
        file_paths = tables.get(version)

        logger.info(f"Creating files for version {version}...")
        file_count = 0
        async for tab, link in walk_version(browser, version, logger):
            try:
                output_file = await write_page(browser, link, tab, version, file_paths, output_dir)
            except Exception:
                _log_broken_link(logger, link)
                continue
            logger.debug(f"Wrote {output_file}")
            file_count += 1

    logger.info(f"Total files created: {file_count}")
    write_file_path_enum(output_dir, version, file_paths, logger)
    return file_count


async def generate_namespace(
    namespace_link: str,
    tables: FilePathTables,
    output_dir: str | Path = OUTPUT_DIR,
    session_factory: SessionFactory = browser_session,
    logger: logging.Logger = logger,
) -> int:
    """Create every enum and interface for one namespace of one version."""
    version, _ = parse_schema_link(namespace_link)
    file_paths = tables.get(version)
    root_url = get_root_schema_url(version)

    file_count = 0
    new_entries: dict[str, str] = {}
    async with session_factory() as browser:
        async for tab, link in walk_namespace(browser, root_url, namespace_link):
            try:
                output_file = await write_page(browser, link, tab, version, file_paths, output_dir)
            except Exception:
                _log_broken_link(logger, link)
                continue
            logger.info(str(output_file))
            # Same project path the file-path table would hold for this page
            new_entries[output_file.stem] = output_file.relative_to(output_dir).with_suffix("").as_posix()
            file_count += 1

    logger.info(f"Total files created: {file_count}")
    logger.info(f"New entries for filePath object:\n{json.dumps(new_entries, indent=4)}")
    return file_count


async def generate_single_file(
    link: str,
    tables: FilePathTables,
    output_dir: str | Path = OUTPUT_DIR,
    session_factory: SessionFactory = browser_session,
    logger: logging.Logger = logger,
) -> Path | None:
    """Create the enum or interface for a single schema browser page."""
    version, tab = parse_schema_link(link)
    file_paths = tables.get(version)

    async with session_factory() as browser:
        try:
            output_file = await write_page(browser, link, tab, version, file_paths, output_dir)
        except Exception:
            _log_broken_link(logger, link)
            return None

    logger.info(f"New file created:\n{output_file}")
    return output_file
