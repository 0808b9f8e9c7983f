"""Registry of documentation sources."""

import re
from typing import Iterable, Optional, Union

from docsmith.core.errors import DocNotFound
from docsmith.core.fetcher import Fetcher
from docsmith.core.models import Version
from docsmith.modules.base import BaseModule
from docsmith.modules.cakephp.module import CakephpModule
from docsmith.modules.jinja.module import JinjaModule
from docsmith.modules.underscore.module import UnderscoreModule

# Every registered source, in listing order
MODULES: tuple[type[BaseModule], ...] = (
    CakephpModule,
    JinjaModule,
    UnderscoreModule,
)

# "slug@version" or "slug~version"
TOKEN_SEPARATOR = re.compile(r"[@~]")

ALL_VERSIONS = "all"


def parse_token(token: str) -> tuple[str, Optional[str]]:
    """Split a "slug@version" (or "slug~version") token; version is None when absent."""
    parts = TOKEN_SEPARATOR.split(token.strip(), maxsplit=1)
    slug = parts[0].lower()
    version = parts[1] if len(parts) > 1 and parts[1] else None
    return slug, version


class Registry:
    """Lookup table from slug to documentation source."""

    def __init__(self, modules: Iterable[BaseModule]):
        self._modules: dict[str, BaseModule] = {}
        for module in modules:
            if module.slug in self._modules:
                raise ValueError(f"duplicate documentation slug: {module.slug}")
            versions = [version.version for version in module.versions]
            if len(set(versions)) != len(versions):
                raise ValueError(f"duplicate version in {module.slug}: {versions}")
            self._modules[module.slug] = module

    def all(self) -> list[BaseModule]:
        return list(self._modules.values())

    def versions(self) -> list[Version]:
        """Every version of every source, in registry order."""
        return [version for module in self._modules.values() for version in module.versions]

    def find(self, slug: str, version: Optional[str] = None) -> Union[BaseModule, Version]:
        """
        Look up a source, or one of its versions.

        Args:
            slug: Source slug; may also be a combined "slug@version" token
            version: Version string or version slug

        Returns:
            The source when no version is given, otherwise the matching Version

        Raises:
            DocNotFound: unknown slug or version
        """
        if version is None:
            slug, version = parse_token(slug)

        module = self._modules.get(slug.lower())
        if module is None:
            raise DocNotFound(f'could not find doc "{slug}"', slug)

        if version is None:
            return module
        return module.version(version)

    def resolve(self, token: str) -> list[Version]:
        """Versions named by a CLI token: default version, one version, or "slug@all"."""
        slug, version = parse_token(token)
        module = self.find(slug)
        if version is None:
            return [module.default_version]
        if version == ALL_VERSIONS:
            return list(module.versions)
        return [module.version(version)]


def default_registry(fetcher: Optional[Fetcher] = None) -> Registry:
    """Registry of all built-in sources sharing one fetcher."""
    fetcher = fetcher or Fetcher()
    return Registry(module_class(fetcher=fetcher) for module_class in MODULES)
