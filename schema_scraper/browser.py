"""
Headless browser access to the NetSuite schema browser.

Playwright drives a single page through the browser; everything else works on
the markup or text it hands back, so it can be exercised without a browser.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from bs4 import BeautifulSoup
from playwright.async_api import Page, async_playwright

from .config import HEADLESS, PAGE_LOAD_TIMEOUT, REFERENCE_PAGE, SELECTORS
from .errors import PageExtractionError
from .models import PageContent
from .paths import folder_path_from_urn

logger = logging.getLogger(__name__)

LINK_MARKER = "schema"


def _slice_link(markup: str, closing_quote: str, root_url: str) -> str | None:
    """Cut ``schema/...`` out of *markup* up to the last *closing_quote*."""
    start = markup.find(LINK_MARKER)
    end = markup.rfind(closing_quote)
    if start == -1 or end <= start:
        return None
    return f"{root_url}{markup[start:end]}"


def get_namespace_links(html: str, root_url: str) -> list[str]:
    """
    Get links to every namespace from the package dropdown at the top of a page.

    Each ``<option>`` carries its target in a double-quoted attribute.
    """
    soup = BeautifulSoup(html, "lxml")
    links = []
    for option in soup.select(SELECTORS["namespace_option"]):
        link = _slice_link(str(option), '"', root_url)
        if link is None:
            logger.debug(f"Namespace option without a schema link: {option}")
            continue
        links.append(link)
    return links


def get_leaf_links(html: str, root_url: str, tab: str) -> list[str]:
    """
    Get every link listed under one left-hand navigation tab of a namespace page.

    The buttons navigate from an ``onclick`` handler such as
    ``window.location='schema/record/account.html?mode=package'``.
    """
    soup = BeautifulSoup(html, "lxml")
    links = []
    for button in soup.select(SELECTORS["tab_button"].format(tab=tab)):
        link = _slice_link(button.get("onclick") or "", "'", root_url)
        if link is None:
            logger.debug(f"{tab} button without a schema link: {button}")
            continue
        links.append(link)
    return links


def parse_page_text(text: str, types_folder: str) -> PageContent:
    """
    Split the inner text of a detail page into name, folder and rows.

    The first line is the type name, the second the namespace URN, everything
    after that is table data.
    """
    lines = [line for line in text.split("\n") if line.strip() != ""]
    if len(lines) < 2:
        raise PageExtractionError("Page has no type name and namespace")

    type_name, urn, *rows = lines
    folder_path = f"{types_folder}{folder_path_from_urn(urn)}"
    return PageContent(type_name=type_name.strip(), folder_path=folder_path, rows=rows)


class SchemaBrowser:
    """Thin wrapper around a Playwright page pointed at the schema browser."""

    def __init__(self, page: Page):
        self.page = page

    async def goto(self, url: str):
        await self.page.goto(url)

    async def open_reference_page(self, root_url: str):
        await self.goto(f"{root_url}{REFERENCE_PAGE}")

    async def namespace_links(self, root_url: str) -> list[str]:
        html = await self.page.content()
        return get_namespace_links(html, root_url)

    async def leaf_links(self, root_url: str, tab: str) -> list[str]:
        html = await self.page.content()
        return get_leaf_links(html, root_url, tab)

    async def page_content(self, types_folder: str) -> PageContent:
        text = await self.page.inner_text(SELECTORS["content"])
        return parse_page_text(text, types_folder)


@asynccontextmanager
async def browser_session(
    headless: bool = HEADLESS,
    timeout: int = PAGE_LOAD_TIMEOUT,
) -> AsyncIterator[SchemaBrowser]:
    """Launch Chromium for one driver run and always close it afterwards."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            page = await browser.new_page()
            page.set_default_timeout(timeout)
            yield SchemaBrowser(page)
        finally:
            await browser.close()
