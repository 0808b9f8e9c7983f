import pytest

from docsmith.core.dom import (
    at_css,
    children,
    css,
    get_content,
    insert_after,
    insert_before,
    new_element,
    parse_document,
    parse_fragment,
    remove,
    remove_attr,
    rename,
    set_content,
    squish,
    squish_contents,
    unwrap,
)
from docsmith.core.errors import FilterDefect


def test_parse_fragment_keeps_top_level_nodes_at_the_root():
    doc = parse_fragment("<h1>A</h1><p>B</p>")

    assert [node.name for node in doc.find_all(recursive=False)] == ["h1", "p"]


def test_parse_document_wraps_in_html_body():
    doc = parse_document("<p>x</p>")

    assert doc.select_one("html > body > p").get_text() == "x"


def test_css_matches_any_selector_in_document_order():
    doc = parse_fragment('<p class="a">1</p><div><span class="b">2</span></div><p class="a">3</p>')

    assert [get_content(node) for node in css(doc, ".b", ".a")] == ["1", "2", "3"]


def test_css_can_be_scoped_to_a_subtree():
    doc = parse_fragment('<div id="one"><code>a</code></div><div id="two"><code>b</code></div>')

    assert [get_content(node) for node in css(at_css(doc, "#two"), "code")] == ["b"]


def test_at_css_raises_filter_defect_when_missing():
    doc = parse_fragment("<p>x</p>")

    with pytest.raises(FilterDefect):
        at_css(doc, ".method-name")


def test_children_only_matches_direct_children():
    doc = parse_fragment("<h6>a</h6><div><h6>b</h6></div><h6>c</h6>")

    assert [get_content(node) for node in children(doc, "h6")] == ["a", "c"]


def test_remove_handles_nested_matches():
    doc = parse_fragment('<div class="breadcrumbs"><a class="anchor"></a></div><p>x</p>')

    remove(css(doc, ".breadcrumbs", "a.anchor"))

    assert str(doc) == "<p>x</p>"


def test_unwrap_splices_children_into_parent():
    doc = parse_fragment('<div><div class="section"><p>a</p><p>b</p></div><p>c</p></div>')

    unwrap(at_css(doc, ".section"))

    assert str(doc) == "<div><p>a</p><p>b</p><p>c</p></div>"


def test_unwrap_detached_node_is_a_defect():
    doc = parse_fragment("<div><span>x</span></div>")
    node = at_css(doc, "span").extract()

    with pytest.raises(FilterDefect):
        unwrap(node)


def test_rename_keeps_attributes_and_children():
    doc = parse_fragment('<var class="x">n <b>m</b></var>')

    rename(at_css(doc, "var"), "code")

    assert str(doc) == '<code class="x">n <b>m</b></code>'


def test_insert_before_and_after():
    doc = parse_fragment("<p><a>link</a></p>")
    link = at_css(doc, "a")

    insert_before(link, new_element(doc, "span", "name", class_="name"))
    insert_after(link, " tail")

    assert str(doc) == '<p><span class="name">name</span><a>link</a> tail</p>'


def test_attributes_read_write_remove():
    doc = parse_fragment('<div id="m1" class="detail"></div>')
    node = at_css(doc, "div")

    node["data-language"] = "php"
    remove_attr(node, "id")
    remove_attr(node, "missing")

    assert node.get("id") is None
    assert node["data-language"] == "php"


def test_set_content_replaces_children_with_text():
    doc = parse_fragment("<pre>  <b>a</b> &lt;b&gt;  </pre>")
    node = at_css(doc, "pre")

    set_content(node, get_content(node).strip())

    assert str(doc) == "<pre>a &lt;b&gt;</pre>"


def test_squish_collapses_whitespace_runs():
    assert squish("  foo \n\t bar  baz ") == "foo bar baz"


def test_squish_contents_keeps_child_elements():
    doc = parse_fragment('<code>  foo   <a href="#x">bar</a>\n baz </code>')

    squish_contents(at_css(doc, "code"))

    assert str(doc) == '<code>foo <a href="#x">bar</a> baz</code>'
