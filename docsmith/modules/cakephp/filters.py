"""CakePHP API page filters."""

from bs4 import BeautifulSoup

from docsmith.core.dom import (
    at_css,
    children,
    css,
    get_content,
    insert_before,
    new_element,
    remove,
    remove_attr,
    rename,
    set_content,
    unwrap,
)
from docsmith.core.filters import Filter, Page, SquishCodeFilter, UnwrapNestedCodeFilter


def remove_chrome(doc: BeautifulSoup) -> None:
    remove(css(doc, ".breadcrumbs", "a.permalink", "a.anchor"))


def unwrap_wrappers(doc: BeautifulSoup) -> None:
    for node in css(doc, ".section", "#content", ".description", ".list"):
        unwrap(node)


def remap_headings(doc: BeautifulSoup) -> None:
    """Demote extra h1s; top-level h6 become h2, nested h6 become h4."""
    for node in css(doc, "h1")[1:]:
        rename(node, "h2")

    for node in children(doc, "h6"):
        rename(node, "h2")

    for node in css(doc, "h6"):
        rename(node, "h4")

    for node in css(doc, ".property-name"):
        rename(node, "h3")


def rename_vars(doc: BeautifulSoup) -> None:
    for node in css(doc, "var"):
        rename(node, "code")


def move_anchor_ids(doc: BeautifulSoup) -> None:
    """Method and property names become the link targets instead of their containers."""
    for node in css(doc, ".method-detail"):
        at_css(node, ".method-name")["id"] = at_css(node, "a[id]")["id"]
        remove_attr(node, "id")

    for node in css(doc, ".property-detail"):
        if not node.get("id"):
            continue
        at_css(node, ".property-name")["id"] = node["id"]
        remove_attr(node, "id")


def split_source_links(doc: BeautifulSoup) -> None:
    """<a>foo()</a> becomes <span class="name">foo()</span><a class="source">source</a>."""
    for node in css(doc, ".method-name", ".property-name"):
        if node.select_one("a.source") is not None:
            continue
        source = at_css(node, "a")
        insert_before(source, new_element(doc, "span", get_content(source), class_="name"))
        set_content(source, "source")
        source["class"] = ["source"]


def format_signatures(doc: BeautifulSoup) -> None:
    for node in css(doc, ".method-signature"):
        rename(node, "pre")
        set_content(node, get_content(node).strip())
        node["data-language"] = "php"


def strip_names(doc: BeautifulSoup) -> None:
    for node in css(doc, "span.name > code"):
        set_content(node, get_content(node).strip())


class CleanHtmlFilter(Filter):
    """Normalize a CakePHP API page.

    Rules depend on each other and must stay in this order: the source link
    split reads the anchors moved by the id relocation, and squishing code
    assumes nested code has already been unwrapped. Every rule except
    ``remap_headings`` leaves an already cleaned page unchanged.
    """

    RULES = (
        remove_chrome,
        unwrap_wrappers,
        remap_headings,
        rename_vars,
        move_anchor_ids,
        split_source_links,
        format_signatures,
        strip_names,
    )

    def __init__(self):
        self._unwrap_nested_code = UnwrapNestedCodeFilter()
        self._squish_code = SquishCodeFilter()

    def transform(self, page: Page) -> Page:
        for rule in self.RULES:
            rule(page.doc)

        page = self._unwrap_nested_code.transform(page)
        return self._squish_code.transform(page)
