import pytest

from conftest import FakeFetcher, make_page
from docsmith.core.dom import parse_document
from docsmith.core.errors import FilterDefect
from docsmith.core.filters import Page
from docsmith.modules.cakephp.filters import CleanHtmlFilter, remap_headings
from docsmith.modules.cakephp.module import CakephpModule

PAGE_URL = "https://api.cakephp.org/4.4/class-Cake.Http.Client.html"


@pytest.fixture
def cakephp():
    return CakephpModule(fetcher=FakeFetcher())


def run_chain(module, body):
    version = module.version("4.4")
    html = f'<html><body><div id="side-nav"></div><div id="right">{body}</div></body></html>'
    page = Page(url=PAGE_URL, path="class-Cake.Http.Client", doc=parse_document(html))
    return module.filter_chain(version).run(page)


def clean(html):
    return CleanHtmlFilter().transform(make_page(html)).doc


def test_method_detail_anchor_id_moves_to_method_name(cakephp):
    page = run_chain(
        cakephp,
        '<div class="method-detail" id="m1"><a id="a1"></a><h6>Title</h6>'
        '<h3 class="method-name"><a href="https://github.com/cakephp/cakephp/blob/4.4/src/Client.php#L10">'
        'foo()</a></h3></div>'
    )
    doc = page.doc

    name = doc.select_one(".method-name")
    assert name["id"] == "a1"
    assert doc.select("h3[id]") == [name]
    assert doc.select('[id="m1"]') == []
    assert doc.select_one(".method-detail").get("id") is None

    assert doc.find("h6") is None
    assert doc.find("h4").get_text() == "Title"

    assert name.select_one("span.name").get_text() == "foo()"
    source = name.select_one("a.source")
    assert source.get_text() == "source"
    assert source["class"] == ["source"]


def test_method_detail_without_method_name_is_a_defect(cakephp):
    with pytest.raises(FilterDefect):
        run_chain(cakephp, '<div class="method-detail" id="m1"><a id="a1"></a><h6>Title</h6></div>')


def test_chain_composition(cakephp):
    chain = cakephp.filter_chain(cakephp.default_version)

    assert [type(f).__name__ for f in chain] == [
        "ContainerFilter",
        "CleanHtmlFilter",
        "NormalizeUrlsFilter",
        "TitleFilter",
        "CleanTextFilter",
    ]


def test_heading_remapping_depends_on_position():
    doc = clean("<h1>Class</h1><h1>Second</h1><h6>Top</h6><div><h6>Nested</h6></div>")

    assert [(h.name, h.get_text()) for h in doc.find_all(["h1", "h2", "h4", "h6"])] == [
        ("h1", "Class"),
        ("h2", "Second"),
        ("h2", "Top"),
        ("h4", "Nested"),
    ]


def test_wrappers_are_unwrapped_and_chrome_removed():
    doc = clean(
        '<div class="breadcrumbs">Cake / Http</div>'
        '<div class="section"><div class="description"><p>Text<a class="permalink" href="#x">#</a></p></div></div>'
    )

    assert str(doc) == "<p>Text</p>"


def test_property_detail_id_moves_to_property_name():
    doc = clean(
        '<div class="property-detail" id="$config"><div class="property-name">'
        '<a href="https://github.com/x">$_config</a></div></div>'
    )

    name = doc.select_one("h3.property-name")
    assert name["id"] == "$config"
    assert doc.select_one(".property-detail").get("id") is None
    assert name.select_one("span.name").get_text() == "$_config"


def test_method_signature_becomes_php_block():
    doc = clean('<div class="method-signature">\n  foo(<var>$a</var>)\n</div>')

    pre = doc.find("pre")
    assert pre["data-language"] == "php"
    assert pre.get_text() == "foo($a)"


def test_var_becomes_code_and_nested_code_is_flattened():
    doc = clean("<p><code>Client <var>$client</var>  </code></p>")

    assert str(doc) == "<p><code>Client $client</code></p>"


API_PAGE = (
    '<div class="breadcrumbs">Cake / Http</div><h1>Class Client</h1>'
    '<div class="section"><div class="description"><p>An <var>HTTP</var> client.</p></div></div>'
    '<div class="method-detail" id="m1"><a id="a1"></a><h6>Title</h6>'
    '<h3 class="method-name"><a href="https://github.com/x#L10"><code> get() </code></a></h3>'
    '<div class="method-signature">\n  get(<var>$url</var>)\n</div></div>'
    '<div class="property-detail" id="$config"><div class="property-name">'
    '<a href="https://github.com/x#L5">$_config</a></div></div>'
    "<p><code>foo <code> bar</code></code></p>"
)

RERUNNABLE_RULES = [rule for rule in CleanHtmlFilter.RULES if rule is not remap_headings]


@pytest.mark.parametrize("rule", RERUNNABLE_RULES, ids=lambda rule: rule.__name__)
def test_rule_is_stable_on_cleaned_page(rule):
    doc = clean(API_PAGE)
    before = str(doc)

    rule(doc)

    assert str(doc) == before


def test_clean_html_twice_gives_the_same_tree():
    page = CleanHtmlFilter().transform(make_page(API_PAGE))
    once = page.to_html()

    assert CleanHtmlFilter().transform(page).to_html() == once
    assert page.doc.select_one(".method-name")["id"] == "a1"
    assert len(page.doc.select("span.name")) == 2
