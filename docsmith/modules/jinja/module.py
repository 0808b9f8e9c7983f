"""Jinja documentation module implementation."""

from docsmith.core.filters import (
    CleanTextFilter,
    ContainerFilter,
    Filter,
    NormalizeUrlsFilter,
    SquishCodeFilter,
    TitleFilter,
    UnwrapNestedCodeFilter,
)
from docsmith.core.models import Version
from docsmith.core.parser import NavLink, parse_nav_links
from docsmith.modules.base import BaseModule
from docsmith.modules.jinja import config
from docsmith.modules.jinja.filters import CleanHtmlFilter


class JinjaModule(BaseModule):
    """Builds the Jinja documentation from its Sphinx site."""

    VERSIONS = config.VERSIONS

    @property
    def name(self) -> str:
        return config.NAME

    @property
    def slug(self) -> str:
        return config.SLUG

    def base_url(self, version: str) -> str:
        return config.BASE_URL.format(version=version)

    def get_doc_urls(self, version: Version) -> list[NavLink]:
        """Landing page plus every page of its table of contents."""
        print(f"Fetching table of contents from {version.base_url}...")
        html = self.fetcher.fetch_text(version.base_url)

        links = [NavLink(title=self.name, url=version.base_url)]
        links.extend(parse_nav_links(
            html=html,
            nav_selector=config.NAV_SELECTOR,
            base_url=version.base_url
        ))

        print(f"Found {len(links)} documentation pages")
        return links

    def filters(self, version: Version) -> list[Filter]:
        return [
            ContainerFilter(config.CONTAINER_SELECTOR),
            CleanHtmlFilter(config.CODE_LANGUAGE),
            NormalizeUrlsFilter(version.base_url),
            UnwrapNestedCodeFilter(),
            SquishCodeFilter(),
            TitleFilter(),
            CleanTextFilter(),
        ]
