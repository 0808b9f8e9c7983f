"""Sphinx page filters for the Jinja documentation."""

from docsmith.core.dom import children, css, remove, remove_attr, rename, unwrap
from docsmith.core.filters import Filter, Page

HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


class CleanHtmlFilter(Filter):
    """Strip Sphinx chrome and flatten its section and highlight wrappers."""

    def __init__(self, default_language: str):
        self.default_language = default_language

    def __repr__(self) -> str:
        return f"CleanHtmlFilter({self.default_language!r})"

    def transform(self, page: Page) -> Page:
        doc = page.doc

        remove(css(doc, "a.headerlink", ".sphinxsidebar", ".related"))

        # Section ids are the link targets; keep them on the section heading
        for node in css(doc, "div.section", "section"):
            heading = node.find(HEADINGS, recursive=False)
            if node.get("id") and heading is not None and not heading.get("id"):
                heading["id"] = node["id"]
            unwrap(node)

        for node in css(doc, 'div[class*="highlight-"]'):
            language = self._language(node.get("class", []))
            for pre in css(node, "pre"):
                pre["data-language"] = language
            unwrap(node)

        for node in css(doc, "div.highlight"):
            unwrap(node)

        for node in css(doc, "pre"):
            for span in node.find_all("span"):
                unwrap(span)
            node.smooth()

        for node in css(doc, "tt"):
            rename(node, "code")

        for node in css(doc, "code span.pre"):
            unwrap(node)

        for node in css(doc, "code.docutils", "code.literal"):
            remove_attr(node, "class")

        # Signature headings
        for node in css(doc, "dl[class] > dt[id]"):
            rename(node, "h3")

        for node in children(doc, "blockquote"):
            unwrap(node)

        return page

    def _language(self, classes: list[str]) -> str:
        for name in classes:
            if name.startswith("highlight-"):
                language = name[len("highlight-"):]
                if language not in ("default", "none", "text"):
                    return language
        return self.default_language
