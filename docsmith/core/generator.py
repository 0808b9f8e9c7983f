"""Generation of documentation versions and the manifest that lists them."""

import sys
from typing import Iterable
from urllib.parse import urljoin

from docsmith.core.errors import FetchError
from docsmith.core.filters import Page
from docsmith.core.manifest import ManifestBuilder
from docsmith.core.models import Version
from docsmith.core.parser import NavLink
from docsmith.core.scraper import Scraper
from docsmith.core.store import DocStore
from docsmith.modules.base import BaseModule


class Generator:
    """Scrapes versions into the store and keeps the manifest in sync."""

    def __init__(self, store: DocStore, manifest: ManifestBuilder):
        self.store = store
        self.manifest = manifest

    def generate(self, version: Version) -> bool:
        """
        Scrape, normalize and store one version.

        Returns:
            True when the version was stored (its meta.json marks it generated)
        """
        print(f"\nGenerating {version.label}...")

        try:
            links = version.source.get_doc_urls(version)
        except FetchError as e:
            print(f"Error: {e}", file=sys.stderr)
            print(f"Failed! {version.label}")
            return False

        result = Scraper(version).scrape(links)

        if not result.pages:
            print(f"Failed! {version.label}: no pages could be scraped")
            return False

        entry = self.store.write_version(version, result.pages)
        print(f"Done! {entry.pages} pages stored in {self.store.version_dir(version)}"
              + (f" ({len(result.failed)} failed)" if result.failed else ""))
        return True

    def generate_versions(self, versions: Iterable[Version]) -> bool:
        """
        Generate each version independently, then rebuild the manifest if all succeeded.

        A partial success leaves the manifest untouched so it never lists a
        mix of fresh and missing versions.
        """
        results = [(version, self.generate(version)) for version in versions]

        if len(results) > 1:
            print("\nSummary:")
            for version, ok in results:
                print(f"  {version.label}: {'OK' if ok else 'FAILED'}")

        if not all(ok for _, ok in results):
            print("Manifest not updated: some versions failed.")
            return False

        self.manifest.build()
        return True

    def generate_source(self, source: BaseModule, all_versions: bool = False) -> bool:
        versions = source.versions if all_versions else [source.default_version]
        return self.generate_versions(versions)

    def page(self, version: Version, path: str) -> Page:
        """Scrape and normalize one page (path relative to the version root, or a full URL)."""
        url = urljoin(version.base_url, path)
        return Scraper(version).scrape_page(NavLink(title="", url=url))
