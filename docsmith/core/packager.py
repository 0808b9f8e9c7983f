"""Packaging of generated versions into downloadable archives."""

import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from docsmith.core.archiver import TarArchiver
from docsmith.core.errors import ArchiveError
from docsmith.core.models import Version
from docsmith.core.store import DocStore


class Packager:
    """Writes <docs>/<path>.tar.gz for generated versions."""

    def __init__(self, store: DocStore, archiver: Optional[TarArchiver] = None):
        self.store = store
        self.archiver = archiver or TarArchiver()

    def package(self, version: Version) -> Path:
        if not self.store.is_installed(version):
            raise ArchiveError(f"{version.label} has not been generated or downloaded")

        data = self.archiver.compress(self.store.version_dir(version))
        path = self.store.package_path(version)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        print(f"Packaged {version.label}: {path} ({len(data) / 1_000_000:.1f} MB)")
        return path

    def clean(self, versions: Iterable[Version]) -> list[Path]:
        """Delete existing packages; returns the removed paths."""
        removed = []
        for version in versions:
            path = self.store.package_path(version)
            if path.exists():
                path.unlink()
                removed.append(path)
        return removed
