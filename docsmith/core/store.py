"""Local storage of generated documentation versions.

Layout under the docs path:

    <path>/<page>.html   normalized pages
    <path>/index.json    {"pages": [{"name": ..., "path": ...}]}
    <path>/meta.json     ManifestEntry of the version (marks it generated)
    <path>.tar.gz        package of the directory
"""

import shutil
from pathlib import Path
from typing import Iterable, Optional

from docsmith import config
from docsmith.core.file_utils import read_json, replace_directory, staging_dir, write_json
from docsmith.core.filters import Page
from docsmith.core.models import ManifestEntry, Version


class DocStore:
    """Reads and writes version directories under one docs path."""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else config.DOCS_PATH

    def version_dir(self, version: Version) -> Path:
        return self.root / version.path

    def package_path(self, version: Version) -> Path:
        return self.root / f"{version.path}{config.ARCHIVE_SUFFIX}"

    def meta_path(self, version: Version) -> Path:
        return self.version_dir(version) / config.META_FILENAME

    def is_installed(self, version: Version) -> bool:
        return self.meta_path(version).exists()

    def installed(self, versions: Iterable[Version]) -> list[Version]:
        return [version for version in versions if self.is_installed(version)]

    def read_meta(self, version: Version) -> Optional[ManifestEntry]:
        path = self.meta_path(version)
        if not path.exists():
            return None
        return ManifestEntry.from_dict(read_json(path))

    def write_version(self, version: Version, pages: list[Page]) -> ManifestEntry:
        """
        Persist all pages of a version, replacing the previous build in one step.

        Returns:
            The ManifestEntry written to meta.json
        """
        target = self.version_dir(version)
        staging = staging_dir(target)

        try:
            for page in pages:
                filepath = staging / f"{page.path}.html"
                filepath.parent.mkdir(parents=True, exist_ok=True)
                filepath.write_text(page.to_html(), encoding="utf-8")

            index = {"pages": [{"name": page.name, "path": page.path} for page in pages]}
            write_json(staging / config.INDEX_FILENAME, index)

            entry = ManifestEntry.for_version(version, pages=len(pages))
            write_json(staging / config.META_FILENAME, entry.to_dict())
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        replace_directory(staging, target)
        return entry
