"""Tree operations available to filters.

Pages are BeautifulSoup trees: ``Tag`` element nodes (name, ordered attrs,
ordered children) and ``NavigableString`` text nodes. Filters only touch a
tree through the helpers below plus plain attribute access
(``node["id"]``, ``node.get("id")``), so every rule reads the same way.
"""

from typing import Iterable, Union

from bs4 import BeautifulSoup, NavigableString, Tag

from docsmith.core.errors import FilterDefect

Node = Union[Tag, NavigableString]


def parse_document(html: Union[str, bytes]) -> BeautifulSoup:
    """Parse a complete upstream HTML page."""
    return BeautifulSoup(html, "lxml")


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment without adding <html>/<body> wrappers.

    The returned soup is the root: its direct children are the fragment's
    top-level nodes.
    """
    return BeautifulSoup(html, "html.parser")


def css(scope: Tag, *selectors: str) -> list[Tag]:
    """All elements under ``scope`` matching any selector, in document order."""
    return scope.select(", ".join(selectors))


def at_css(scope: Tag, *selectors: str) -> Tag:
    """First element under ``scope`` matching any selector.

    Raises:
        FilterDefect: nothing matches
    """
    node = scope.select_one(", ".join(selectors))
    if node is None:
        raise FilterDefect(f"expected {', '.join(selectors)!r} in <{scope.name}>")
    return node


def children(scope: Tag, name: str) -> list[Tag]:
    """Direct child elements of ``scope`` with the given tag name."""
    return scope.find_all(name, recursive=False)


def remove(nodes: Union[Node, Iterable[Node]]) -> None:
    """Splice nodes out of their parents."""
    if isinstance(nodes, (Tag, NavigableString)):
        nodes = [nodes]
    for node in nodes:
        node.extract()


def unwrap(node: Tag) -> None:
    """Replace ``node`` with its children, in place."""
    if node.parent is None:
        raise FilterDefect(f"cannot unwrap detached <{node.name}>")
    node.unwrap()


def rename(node: Tag, name: str) -> Tag:
    """Change the tag name, keeping attributes and children."""
    node.name = name
    return node


def insert_before(node: Node, new: Union[Node, str]) -> None:
    node.insert_before(new)


def insert_after(node: Node, new: Union[Node, str]) -> None:
    node.insert_after(new)


def new_element(doc: BeautifulSoup, name: str, text: str = None, **attrs: str) -> Tag:
    """Create a detached element; use ``class_`` for the class attribute."""
    if "class_" in attrs:
        attrs["class"] = attrs.pop("class_")
    element = doc.new_tag(name, attrs=attrs)
    if text is not None:
        element.string = text
    return element


def remove_attr(node: Tag, name: str) -> None:
    node.attrs.pop(name, None)


def get_content(node: Tag) -> str:
    """Concatenated text of the node and its descendants."""
    return node.get_text()


def set_content(node: Tag, text: str) -> None:
    """Replace all children with a single text node."""
    node.string = text


def inner_html(node: Tag) -> str:
    return node.decode_contents()


def set_inner_html(node: Tag, html: str) -> None:
    node.clear()
    for child in list(parse_fragment(html).contents):
        node.append(child)


def squish(text: str) -> str:
    """Strip the text and collapse every run of whitespace into one space."""
    return " ".join(text.split())


def squish_contents(node: Tag) -> None:
    """Squish the node's inner HTML, keeping child elements."""
    set_inner_html(node, squish(inner_html(node)))
