"""Underscore.js documentation module implementation."""

from docsmith.core.filters import (
    CleanTextFilter,
    ContainerFilter,
    Filter,
    NormalizeUrlsFilter,
    SquishCodeFilter,
    UnwrapNestedCodeFilter,
)
from docsmith.core.models import Version
from docsmith.core.parser import NavLink
from docsmith.modules.base import BaseModule
from docsmith.modules.underscore import config
from docsmith.modules.underscore.filters import CleanHtmlFilter


class UnderscoreModule(BaseModule):
    """Builds the Underscore.js reference from underscorejs.org (one page, unversioned)."""

    RELEASE = config.RELEASE

    @property
    def name(self) -> str:
        return config.NAME

    @property
    def slug(self) -> str:
        return config.SLUG

    def base_url(self, version: str) -> str:
        return config.BASE_URL

    def get_doc_urls(self, version: Version) -> list[NavLink]:
        return [NavLink(title=self.name, url=version.base_url)]

    def filters(self, version: Version) -> list[Filter]:
        return [
            ContainerFilter(config.CONTAINER_SELECTOR),
            CleanHtmlFilter(config.CODE_LANGUAGE),
            NormalizeUrlsFilter(version.base_url),
            UnwrapNestedCodeFilter(),
            SquishCodeFilter(),
            CleanTextFilter(),
        ]
