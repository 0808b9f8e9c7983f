"""Underscore.js page filters."""

from docsmith.core.dom import css, get_content, new_element, remove, remove_attr, rename, squish
from docsmith.core.filters import Filter, Page


class CleanHtmlFilter(Filter):
    """Turn the single-page reference into headed sections."""

    def __init__(self, language: str):
        self.language = language

    def __repr__(self) -> str:
        return f"CleanHtmlFilter({self.language!r})"

    def transform(self, page: Page) -> Page:
        doc = page.doc

        remove(css(doc, "#links", "#sidebar", "img", "br.clear"))

        # <p id="map"><b class="header">map</b><code>_.map(list, iteratee)</code> ...</p>
        for node in css(doc, "p[id] > b.header"):
            paragraph = node.parent
            heading = new_element(doc, "h3", squish(get_content(node)), id=paragraph["id"])
            remove_attr(paragraph, "id")
            paragraph.insert_before(heading)
            node.extract()

        for node in css(doc, "h2"):
            if not node.get("id"):
                node["id"] = squish(get_content(node)).lower().replace(" ", "-")

        for node in css(doc, "span.alias"):
            rename(node, "em")

        for node in css(doc, "pre"):
            node["data-language"] = self.language
            remove_attr(node, "class")

        return page
