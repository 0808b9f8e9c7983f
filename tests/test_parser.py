import pytest

from docsmith.core.parser import NavLink, parse_nav_links, url_to_path

BASE = "https://api.cakephp.org/4.4/"

NAV = """
<html><body>
<div id="side-nav">
  <ul>
    <li><a href="namespace-Cake.html">Cake</a>
      <ul>
        <li><a href="class-Cake.Http.Client.html">Client</a></li>
        <li><a href="class-Cake.Http.Client.html#method-get">Client::get()</a></li>
        <li><a href="#top">Top</a></li>
        <li><a href="mailto:team@cakephp.org">Mail</a></li>
        <li><a href="https://book.cakephp.org/">Book</a></li>
        <li><a href="/3.10/class-Cake.Http.Client.html">Old</a></li>
        <li><a href="search/">Search</a></li>
        <li><a href="class-Empty.html"> </a></li>
      </ul>
    </li>
  </ul>
</div>
<a href="class-Outside.html">Outside</a>
</body></html>
"""


def test_parse_nav_links_keeps_unique_links_under_base():
    links = parse_nav_links(NAV, "#side-nav", BASE)

    assert links == [
        NavLink(title="Cake", url=BASE + "namespace-Cake.html", depth=1),
        NavLink(title="Client", url=BASE + "class-Cake.Http.Client.html", depth=2),
        NavLink(title="Search", url=BASE + "search/", depth=2),
    ]


def test_parse_nav_links_url_filter():
    links = parse_nav_links(NAV, "#side-nav", BASE, url_filter=".html")

    assert [link.title for link in links] == ["Cake", "Client"]


def test_parse_nav_links_missing_container():
    assert parse_nav_links(NAV, "#nope", BASE) == []


@pytest.mark.parametrize("url, path", [
    (BASE, "index"),
    (BASE + "index.html", "index"),
    (BASE + "class-Cake.Http.Client.html#method-get", "class-Cake.Http.Client"),
    (BASE + "guide/setup.htm", "guide/setup"),
    (BASE + "guide/", "guide"),
    (BASE + "guide/index.html", "guide"),
    (BASE + "/double.html", "double"),
    ("https://other.org/x/page.html", "x/page"),
])
def test_url_to_path(url, path):
    assert url_to_path(url, BASE) == path
