"""Filter contract, filter chains and the generic filters shared by sources.

A Filter rewrites one Page. A FilterChain runs a fixed sequence of filters
over each page of a documentation version, strictly in registration order.
Chains and filters hold no per-page state, so one chain may normalize many
pages concurrently as long as every call gets its own Page.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Comment

from docsmith.core.dom import (
    at_css,
    css,
    inner_html,
    new_element,
    parse_fragment,
    remove,
    squish,
    squish_contents,
    unwrap,
)
from docsmith.core.errors import FilterDefect
from docsmith.core.parser import url_to_path


@dataclass
class Page:
    """One scraped documentation page and its mutable tree."""
    url: str
    path: str
    doc: BeautifulSoup
    title: str = ""

    @property
    def name(self) -> str:
        """Display name: first <h1>, else the navigation title, else the path."""
        heading = self.doc.find("h1")
        if heading is not None:
            text = squish(heading.get_text())
            if text:
                return text
        return self.title or self.path

    def to_html(self) -> str:
        return str(self.doc)


class Filter(ABC):
    """A single tree transformation."""

    @abstractmethod
    def transform(self, page: Page) -> Page:
        """Rewrite ``page.doc`` (in place or by replacing it) and return the page."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FilterChain:
    """Ordered, immutable composition of filters for one documentation version."""

    def __init__(self, filters: Iterable[Filter]):
        self._filters = tuple(filters)

    @property
    def filters(self) -> tuple[Filter, ...]:
        return self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters)

    def __repr__(self) -> str:
        return f"FilterChain({list(self._filters)!r})"

    def run(self, page: Page) -> Page:
        """Run every filter once, feeding each one the previous filter's output."""
        for page_filter in self._filters:
            result = page_filter.transform(page)
            if not isinstance(result, Page):
                raise FilterDefect(f"{page_filter!r} returned {type(result).__name__}, not a Page")
            page = result
        return page


# =============================================================================
# Generic filters
# =============================================================================

class ContainerFilter(Filter):
    """Reduce the page to the contents of its main content element."""

    def __init__(self, selector: str):
        self.selector = selector

    def __repr__(self) -> str:
        return f"ContainerFilter({self.selector!r})"

    def transform(self, page: Page) -> Page:
        container = at_css(page.doc, self.selector)
        page.doc = parse_fragment(inner_html(container))
        return page


class CleanTextFilter(Filter):
    """Drop scripts, styles, comments and empty block elements."""

    JUNK = ("script", "style", "noscript", "link", "meta")
    EMPTY_CANDIDATES = ("p", "div", "span", "li", "ul", "ol", "dd")
    CONTENT_TAGS = ("img", "iframe", "svg", "video", "input", "br", "hr")

    def transform(self, page: Page) -> Page:
        doc = page.doc
        remove(css(doc, *self.JUNK))
        remove(doc.find_all(string=lambda text: isinstance(text, Comment)))

        # Innermost first so a wrapper left empty by its children goes too
        for node in reversed(css(doc, *self.EMPTY_CANDIDATES)):
            if node.get("id") or node.get_text(strip=True):
                continue
            if node.find(self.CONTENT_TAGS):
                continue
            node.extract()

        return page


class NormalizeUrlsFilter(Filter):
    """Absolutize links; links inside the documentation root become internal paths.

    Internal paths are relative to the version root while hrefs resolve
    against the page URL, so a second pass only leaves pages at the root
    unchanged.
    """

    PASSTHROUGH_SCHEMES = ("mailto", "javascript", "data", "tel")

    def __init__(self, base_url: str):
        self.base_url = base_url

    def __repr__(self) -> str:
        return f"NormalizeUrlsFilter({self.base_url!r})"

    def normalize(self, href: str, page_url: str) -> str:
        href = href.strip()
        if not href or href.startswith("#"):
            return href
        if urlparse(href).scheme in self.PASSTHROUGH_SCHEMES:
            return href

        absolute = urljoin(page_url, href)
        if not absolute.startswith(self.base_url):
            return absolute

        path = url_to_path(absolute, self.base_url)
        fragment = urlparse(absolute).fragment
        return f"{path}#{fragment}" if fragment else path

    def transform(self, page: Page) -> Page:
        for node in css(page.doc, "a[href]"):
            node["href"] = self.normalize(node["href"], page.url)
        for node in css(page.doc, "img[src]"):
            node["src"] = urljoin(page.url, node["src"])
        return page


class TitleFilter(Filter):
    """Prepend an <h1> with the navigation title when the page has none."""

    def transform(self, page: Page) -> Page:
        if page.doc.find("h1") is None and page.title:
            page.doc.insert(0, new_element(page.doc, "h1", page.title))
        return page


class UnwrapNestedCodeFilter(Filter):
    """Collapse <code> inside <code> to a single level."""

    def transform(self, page: Page) -> Page:
        for node in css(page.doc, "code code"):
            unwrap(node)
        return page


class SquishCodeFilter(Filter):
    """Collapse whitespace inside inline code; expects nested code already unwrapped.

    Code inside <pre> is a block listing and keeps its layout.
    """

    def transform(self, page: Page) -> Page:
        for node in css(page.doc, "code"):
            if node.find_parent("pre") is None:
                squish_contents(node)
        return page
