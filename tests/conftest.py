"""Shared fixtures: a canned schema browser served through a fake Playwright page."""

from contextlib import asynccontextmanager

import pytest

from schema_scraper.browser import SchemaBrowser
from schema_scraper.config import REFERENCE_PAGE
from schema_scraper.paths import get_root_schema_url

VERSION = "2019_1"
ROOT = get_root_schema_url(VERSION)

NAMESPACE_LINK = f"{ROOT}schema/namespace/relationships.html"

REFERENCE_HTML = """\
<html><body>
<select id="packagesselect">
  <optgroup label="lists">
    <option value="schema/namespace/relationships.html">relationships</option>
  </optgroup>
</select>
</body></html>
"""

NAMESPACE_HTML = """\
<html><body>
<button name="enumswitch" onclick="window.location='schema/enum/customerstage.html'">CustomerStage</button>
<button name="otherswitch" onclick="window.location='schema/other/customeraddressbooklist.html'">CustomerAddressbookList</button>
<button name="recordswitch" onclick="window.location='schema/record/customer.html'">Customer</button>
<button name="recordswitch" onclick="window.location='schema/record/broken.html'">Broken</button>
</body></html>
"""

CUSTOMER_STAGE_TEXT = "\n".join([
    "CustomerStage",
    "Namespace: urn:types.relationships_2019_1.lists.webservices.netsuite.com",
    "",
    "Value",
    "_customer",
    "_lead",
    "_prospect",
])

CUSTOMER_TEXT = "\n".join([
    "Customer",
    "Namespace: urn:relationships_2019_1.lists.webservices.netsuite.com",
    "Attributes",
    "Name\tType\tCardinality\tLabel\tRequired\tHelp",
    "internalId\tstring\t0..1\t\tF\t",
    "Fields",
    "Name\tType\tCardinality\tLabel\tRequired\tHelp",
    "entityId\tstring\t0..1\tCustomer ID\tT\tThe customer's unique ID.",
    "stage\tCustomerStage\t0..1\tStage\tF\t",
    "addressbookList\tCustomerAddressbookList\t0..1\t\tF\t",
    "Related Searches",
    "CustomerSearch",
])

ADDRESSBOOK_TEXT = "\n".join([
    "CustomerAddressbookList",
    "Namespace: urn:relationships_2019_1.lists.webservices.netsuite.com",
    "Fields",
    "name\ttype\tcardinality\tlabel\trequired\thelp",
    "replaceAll\tboolean\t1..1\t\tF\t",
])


def build_site() -> dict:
    """URL -> (markup, content panel text). ``None`` text means the panel is missing."""
    return {
        f"{ROOT}{REFERENCE_PAGE}": (REFERENCE_HTML, None),
        NAMESPACE_LINK: (NAMESPACE_HTML, None),
        f"{ROOT}schema/enum/customerstage.html": (NAMESPACE_HTML, CUSTOMER_STAGE_TEXT),
        f"{ROOT}schema/other/customeraddressbooklist.html": (NAMESPACE_HTML, ADDRESSBOOK_TEXT),
        f"{ROOT}schema/record/customer.html": (NAMESPACE_HTML, CUSTOMER_TEXT),
        f"{ROOT}schema/record/broken.html": (NAMESPACE_HTML, None),
    }


class FakePage:
    """Just enough of ``playwright.async_api.Page`` for ``SchemaBrowser``."""

    def __init__(self, site: dict):
        self.site = site
        self.url = None
        self.visited: list[str] = []

    async def goto(self, url: str):
        if url not in self.site:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self.url = url
        self.visited.append(url)

    async def content(self) -> str:
        return self.site[self.url][0]

    async def inner_text(self, selector: str) -> str:
        text = self.site[self.url][1]
        if text is None:
            raise TimeoutError(f"Timeout waiting for {selector}")
        return text


class FakeSession:
    """Session factory handing out a ``SchemaBrowser`` over a ``FakePage``."""

    def __init__(self, site: dict):
        self.page = FakePage(site)
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def __call__(self):
        self.opened += 1
        try:
            yield SchemaBrowser(self.page)
        finally:
            self.closed += 1


@pytest.fixture
def site() -> dict:
    return build_site()


@pytest.fixture
def session(site) -> FakeSession:
    return FakeSession(site)
