"""
Configuration for the NetSuite schema browser type generator.
"""

import os

# Root URL of the SuiteTalk schema browser, one per NetSuite version
ROOT_SCHEMA_URL = "https://system.na0.netsuite.com/help/helpcenter/en_US/srbrowser/Browser{version}/"

# Any page works as a starting point, this one lists every namespace at the top
REFERENCE_PAGE = "schema/other/recordref.html?mode=package"

# Every schema snapshot published in the browser
VERSIONS = [
    "2014_1",
    "2014_2",
    "2015_1",
    "2015_2",
    "2016_1",
    "2016_2",
    "2017_1",
    "2017_2",
    "2018_1",
    "2018_2",
    "2019_1",
    "2019_2",
    "2020_1",
    "2020_2",
    "2021_1",
    "2021_2",
    "2022_1",
]

# Left-hand navigation tabs on every namespace page
TABS = [
    "enum",
    "other",
    "record",
    "search",
]

# Section headers on record/search/other pages.
# Only the first two are rendered, the others just mark where a section ends.
SECTION_MARKERS = [
    "Attributes",
    "Fields",
    "Related Record(s)",
    "Related Searches",
]
RENDERED_SECTIONS = ("Attributes", "Fields")

# Column layout the schema browser uses for field tables
STANDARD_COLUMNS = ["name", "type", "cardinality", "label", "required", "help"]

# Schema primitives that have a different TypeScript name
TYPE_MAPPING = {
    "dateTime": "Date",
    "double": "number",
    "int": "number",
    "long": "number",
}

# CSS Selectors for content extraction
SELECTORS = {
    "namespace_option": "#packagesselect > optgroup > option",
    "tab_button": '[name="{tab}switch"]',
    "content": "#contentPanel",
}

# Output configuration
OUTPUT_DIR = os.environ.get("NETSUITE_TYPES_DIR", "netsuite-schema-browser-types")
FILE_PATHS_DIR = os.environ.get("NETSUITE_FILE_PATHS_DIR", "data/file_paths")
FILE_PATH_ENUM_NAME = "FilePath"
LOG_DIR = os.environ.get("NETSUITE_LOG_DIR", ".")
INDEX_FILE = "index.ts"

# Scraping settings
PAGE_LOAD_TIMEOUT = 30000  # milliseconds
HEADLESS = os.environ.get("NETSUITE_HEADLESS", "1") != "0"
