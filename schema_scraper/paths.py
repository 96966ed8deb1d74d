"""URL and folder path helpers for the schema browser."""

import re

from .config import ROOT_SCHEMA_URL
from .errors import PageExtractionError, SchemaScraperError

URN_MARKER = "urn:"
URN_SUFFIX = "com"

# 'com', 'netsuite' and 'webservices' don't mean anything for the folder layout
URN_PREFIX_SEGMENTS = 3


def capitalize_word(word: str) -> str:
    """Upper-case the first character of *word*, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def get_root_schema_url(version: str) -> str:
    """Root schema browser URL for a NetSuite version."""
    return ROOT_SCHEMA_URL.format(version=version)


def get_root_types_folder(version: str) -> str:
    """Project path every generated file of *version* lives under."""
    return f"src/{version}/"


def folder_path_from_urn(urn: str) -> str:
    """
    Turn the namespace line of a detail page into a folder path.

    ``urn:relationships_2019_1.lists.webservices.netsuite.com`` becomes
    ``lists/relationships_2019_1``.
    """
    urn_index = urn.find(URN_MARKER)
    suffix_index = urn.rfind(URN_SUFFIX)
    if urn_index == -1 or suffix_index == -1 or suffix_index < urn_index:
        raise PageExtractionError(f"Not a namespace identifier: {urn!r}")

    urn_string = urn[urn_index + len(URN_MARKER):suffix_index + len(URN_SUFFIX)]
    segments = urn_string.split(".")
    segments.reverse()
    return "/".join(segments[URN_PREFIX_SEGMENTS:])


def relative_folder_for_tab(folder_path: str, tab: str) -> str:
    """All tabs except 'enum' get an extra folder level named after the tab."""
    if tab == "enum":
        return folder_path
    return f"{folder_path}/{capitalize_word(tab)}"


def parse_schema_link(link: str) -> tuple[str, str]:
    """
    Pull the version and tab out of a schema browser URL.

    e.g. ``.../srbrowser/Browser2019_1/schema/record/account.html?mode=package``
    gives ``("2019_1", "record")``.
    """
    parts = re.split(r"/+", link)
    version = None
    tab = None
    for index, part in enumerate(parts):
        if version is None and part.startswith("Browser"):
            version = part[len("Browser"):]
        elif part == "schema" and index + 1 < len(parts):
            tab = parts[index + 1]
            break

    if not version or not tab:
        raise SchemaScraperError(f"Not a schema browser link: {link}")
    return version, tab
