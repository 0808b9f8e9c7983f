"""Abstract base class for documentation sources."""

from abc import ABC, abstractmethod
from typing import Optional

from docsmith.core.errors import DocNotFound
from docsmith.core.fetcher import Fetcher
from docsmith.core.filters import Filter, FilterChain
from docsmith.core.models import Version
from docsmith.core.parser import NavLink, url_to_path


class BaseModule(ABC):
    """Base class that all documentation sources must implement.

    A source is either versioned (``VERSIONS`` lists ``(version, release)``
    pairs, newest first) or acts as its own single implicit version.
    """

    #: ``(version, release)`` pairs, newest first; empty for unversioned docs
    VERSIONS: tuple[tuple[str, str], ...] = ()

    #: Release label of an unversioned source
    RELEASE: str = ""

    def __init__(self, fetcher: Optional[Fetcher] = None):
        self.fetcher = fetcher or Fetcher()
        self._versions: Optional[tuple[Version, ...]] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name (e.g., 'CakePHP')."""
        pass

    @property
    @abstractmethod
    def slug(self) -> str:
        """Registry slug (e.g., 'cakephp')."""
        pass

    @abstractmethod
    def base_url(self, version: str) -> str:
        """Root URL of the upstream documentation for a version string."""
        pass

    @abstractmethod
    def get_doc_urls(self, version: Version) -> list[NavLink]:
        """Enumerate the pages of one documentation version."""
        pass

    @abstractmethod
    def filters(self, version: Version) -> list[Filter]:
        """Filters normalizing every page of the version, in execution order."""
        pass

    @property
    def versioned(self) -> bool:
        return bool(self.VERSIONS)

    @property
    def versions(self) -> tuple[Version, ...]:
        """All versions, newest first; one implicit version when unversioned."""
        if self._versions is None:
            if self.versioned:
                self._versions = tuple(
                    Version(source=self, version=version, release=release, base_url=self.base_url(version))
                    for version, release in self.VERSIONS
                )
            else:
                self._versions = (
                    Version(source=self, version="", release=self.RELEASE, base_url=self.base_url("")),
                )
        return self._versions

    @property
    def default_version(self) -> Version:
        return self.versions[0]

    def version(self, version: str) -> Version:
        """Look up a version by its version string or version slug."""
        for candidate in self.versions:
            if version in (candidate.version, candidate.version_slug):
                return candidate
        raise DocNotFound(f'could not find version "{version}" of doc "{self.slug}"', self.slug)

    def filter_chain(self, version: Version) -> FilterChain:
        return FilterChain(self.filters(version))

    def page_path(self, url: str, version: Version) -> str:
        """Storage path of a page relative to the version directory."""
        return url_to_path(url, version.base_url)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.slug}>"
