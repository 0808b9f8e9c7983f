"""Aggregate index of every generated or downloaded documentation version."""

from pathlib import Path
from typing import Iterable

from docsmith import config
from docsmith.core.file_utils import read_json, write_json
from docsmith.core.models import ManifestEntry
from docsmith.core.store import DocStore
from docsmith.modules.base import BaseModule


class ManifestBuilder:
    """Rebuilds manifest.json from the meta.json of each installed version."""

    def __init__(self, store: DocStore, sources: Iterable[BaseModule]):
        self.store = store
        self.sources = list(sources)

    @property
    def path(self) -> Path:
        return self.store.root / config.MANIFEST_FILENAME

    def entries(self) -> list[ManifestEntry]:
        """Entries of all installed versions, in registry order."""
        entries = []
        for source in self.sources:
            for version in source.versions:
                entry = self.store.read_meta(version)
                if entry is not None:
                    entries.append(entry)
        return entries

    def build(self) -> Path:
        """Write the manifest; replaces the previous one atomically."""
        entries = self.entries()
        write_json(self.path, [entry.to_dict() for entry in entries])
        print(f"Manifest: {len(entries)} docs written to {self.path}")
        return self.path

    def read(self) -> list[ManifestEntry]:
        if not self.path.exists():
            return []
        return [ManifestEntry.from_dict(item) for item in read_json(self.path)]
