"""Shared pytest fixtures: fake collaborators and a small test documentation source."""

import threading

import pytest

from docsmith.core.dom import parse_fragment
from docsmith.core.errors import FetchError
from docsmith.core.filters import CleanTextFilter, ContainerFilter, Filter, Page, TitleFilter
from docsmith.core.manifest import ManifestBuilder
from docsmith.core.models import Version
from docsmith.core.parser import NavLink, parse_nav_links
from docsmith.core.store import DocStore
from docsmith.modules.base import BaseModule


class FakeFetcher:
    """Serves canned responses; unknown URLs fail like a 404."""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requested = []
        self._lock = threading.Lock()

    def fetch(self, url):
        with self._lock:
            self.requested.append(url)
        body = self.pages.get(url)
        if isinstance(body, Exception):
            raise body
        if body is None:
            raise FetchError(url, "404 Client Error: Not Found")
        return body.encode("utf-8") if isinstance(body, str) else body

    def fetch_text(self, url, encoding="utf-8"):
        return self.fetch(url).decode(encoding)


class DummyModule(BaseModule):
    """Two-version source served from docs.example.com."""

    VERSIONS = (("2.0", "2.0.1"), ("1.0", "1.0.3"))

    @property
    def name(self):
        return "Dummy"

    @property
    def slug(self):
        return "dummy"

    def base_url(self, version):
        return f"https://docs.example.com/{version}/"

    def get_doc_urls(self, version: Version) -> list[NavLink]:
        html = self.fetcher.fetch_text(version.base_url)
        links = [NavLink(title=self.name, url=version.base_url)]
        links.extend(parse_nav_links(html, "nav", version.base_url))
        return links

    def filters(self, version: Version) -> list[Filter]:
        return [ContainerFilter("main"), TitleFilter(), CleanTextFilter()]


def dummy_site(version):
    """Pages of a healthy dummy documentation version."""
    base = f"https://docs.example.com/{version}/"
    return {
        base: (
            '<html><body><nav><a href="intro.html">Intro</a> <a href="api/">API</a></nav>'
            f"<main><h1>Dummy {version}</h1><p>Welcome</p></main></body></html>"
        ),
        base + "intro.html": "<html><body><main><p>Intro text</p></main></body></html>",
        base + "api/": "<html><body><main><h1>API</h1><p>Reference</p></main></body></html>",
    }


def make_page(html, url="https://docs.example.com/1.0/guide/intro.html", path="guide/intro", title=""):
    return Page(url=url, path=path, doc=parse_fragment(html), title=title)


@pytest.fixture
def fetcher():
    return FakeFetcher({**dummy_site("2.0"), **dummy_site("1.0")})


@pytest.fixture
def dummy(fetcher):
    return DummyModule(fetcher=fetcher)


@pytest.fixture
def store(tmp_path):
    return DocStore(tmp_path / "docs")


@pytest.fixture
def manifest(store, dummy):
    return ManifestBuilder(store, [dummy])
