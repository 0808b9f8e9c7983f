from conftest import FakeFetcher, make_page
from docsmith.core.dom import parse_document
from docsmith.core.filters import Page
from docsmith.modules.underscore.filters import CleanHtmlFilter
from docsmith.modules.underscore.module import UnderscoreModule


def clean(html):
    return CleanHtmlFilter("javascript").transform(make_page(html, url="https://underscorejs.org/", path="index")).doc


def test_function_headers_become_headings():
    doc = clean('<p id="map"><b class="header">map</b><code>_.map(list, iteratee)</code> Alias: '
                '<span class="alias">collect</span></p>')

    heading = doc.find("h3")
    assert heading["id"] == "map"
    assert heading.get_text() == "map"
    assert doc.find("p").get("id") is None
    assert doc.find("b") is None
    assert str(doc.find("em")) == '<em class="alias">collect</em>'


def test_sections_get_ids_and_code_gets_language():
    doc = clean('<h2>Collection Functions</h2><pre class="code">_.each([1, 2, 3], alert);</pre>')

    assert doc.find("h2")["id"] == "collection-functions"
    assert str(doc.find("pre")) == '<pre data-language="javascript">_.each([1, 2, 3], alert);</pre>'


def test_module_is_unversioned():
    module = UnderscoreModule(fetcher=FakeFetcher())

    assert not module.versioned
    assert len(module.versions) == 1
    assert module.default_version.path == "underscore"
    assert [link.url for link in module.get_doc_urls(module.default_version)] == ["https://underscorejs.org/"]


def test_full_chain_keeps_documentation_only():
    module = UnderscoreModule(fetcher=FakeFetcher())
    version = module.default_version
    html = (
        '<html><body><div id="sidebar">links</div><div id="documentation">'
        '<div id="links">x</div><p id="first"><b class="header">first</b><code>_.first(array)</code></p>'
        '<img src="logo.png"></div></body></html>'
    )
    page = Page(url=version.base_url, path="index", doc=parse_document(html))

    page = module.filter_chain(version).run(page)

    assert page.to_html() == '<h3 id="first">first</h3><p><code>_.first(array)</code></p>'
