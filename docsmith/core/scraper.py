"""Fetch, parse and normalize the pages of one documentation version."""

import sys
from dataclasses import dataclass, field

from docsmith.core.dom import parse_document
from docsmith.core.errors import FetchError
from docsmith.core.filters import Page
from docsmith.core.models import Version
from docsmith.core.parser import NavLink


@dataclass
class ScrapeResult:
    pages: list[Page] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)  # URLs that could not be fetched


class Scraper:
    """Runs fetch -> parse -> filter chain for each page of a version.

    The chain is built once and shared by every page; each page gets a
    freshly parsed tree.
    """

    def __init__(self, version: Version):
        self.version = version
        self.source = version.source
        self.chain = self.source.filter_chain(version)

    def scrape_page(self, link: NavLink) -> Page:
        """
        Fetch and normalize a single page.

        Raises:
            FetchError: the page could not be retrieved
            FilterDefect: a filter found markup it was not written for
        """
        html = self.source.fetcher.fetch(link.url)
        page = Page(
            url=link.url,
            path=self.source.page_path(link.url, self.version),
            doc=parse_document(html),
            title=link.title,
        )
        return self.chain.run(page)

    def scrape(self, links: list[NavLink]) -> ScrapeResult:
        """Scrape every link once; pages that fail to download are skipped and reported."""
        result = ScrapeResult()
        seen_paths: set[str] = set()

        for i, link in enumerate(links, 1):
            path = self.source.page_path(link.url, self.version)
            if path in seen_paths:
                continue
            seen_paths.add(path)

            print(f"  [{i}/{len(links)}] {link.title[:50]}")
            try:
                page = self.scrape_page(link)
            except FetchError as e:
                print(f"    Error: {e}", file=sys.stderr)
                result.failed.append(link.url)
                continue

            result.pages.append(page)

        return result
