"""CakePHP API documentation module implementation."""

from docsmith.core.filters import (
    CleanTextFilter,
    ContainerFilter,
    Filter,
    NormalizeUrlsFilter,
    TitleFilter,
)
from docsmith.core.models import Version
from docsmith.core.parser import NavLink, parse_nav_links
from docsmith.modules.base import BaseModule
from docsmith.modules.cakephp import config
from docsmith.modules.cakephp.filters import CleanHtmlFilter


class CakephpModule(BaseModule):
    """Builds the CakePHP API reference from api.cakephp.org."""

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
        """Parse the API sidebar to get every class page."""
        print(f"Fetching navigation from {version.base_url}...")
        html = self.fetcher.fetch_text(version.base_url)

        links = parse_nav_links(
            html=html,
            nav_selector=config.NAV_SELECTOR,
            base_url=version.base_url,
            url_filter=config.URL_FILTER
        )

        print(f"Found {len(links)} documentation pages")
        return links

    def filters(self, version: Version) -> list[Filter]:
        return [
            ContainerFilter(config.CONTAINER_SELECTOR),
            CleanHtmlFilter(),
            NormalizeUrlsFilter(version.base_url),
            TitleFilter(),
            CleanTextFilter(),
        ]
