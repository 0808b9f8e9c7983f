"""Entity model shared by the scraping and download paths."""

import re
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from docsmith.modules.base import BaseModule


def version_slug(version: str) -> str:
    """Turn a version string into a path-safe slug ("4.4" -> "4.4", "Beta 2" -> "beta_2")."""
    return re.sub(r"[^a-z0-9_.]", "_", version.lower())


@dataclass(frozen=True)
class Version:
    """One release-specific instance of a documentation source.

    Unversioned sources get a single implicit Version whose version string
    is empty; its path is then just the source slug.
    """
    source: "BaseModule" = field(compare=False, repr=False)
    version: str
    release: str
    base_url: str

    @property
    def slug(self) -> str:
        return self.source.slug

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def version_slug(self) -> str:
        return version_slug(self.version)

    @property
    def path(self) -> str:
        if not self.version:
            return self.slug
        return f"{self.slug}~{self.version_slug}"

    @property
    def label(self) -> str:
        return f"{self.name} {self.version}".strip()

    def __str__(self) -> str:
        return self.label


class JobStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    OK = "OK"
    FAILED = "FAILED"

    @property
    def done(self) -> bool:
        return self in (JobStatus.OK, JobStatus.FAILED)


@dataclass
class DownloadJob:
    """One unit of fetch-and-unpack work for a documentation version."""
    slug: str
    version: Optional[str]
    path: str
    label: str
    status: JobStatus = JobStatus.PENDING
    reason: Optional[str] = None

    @classmethod
    def for_version(cls, version: Version) -> "DownloadJob":
        return cls(
            slug=version.slug,
            version=version.version or None,
            path=version.path,
            label=version.label,
        )

    @property
    def status_text(self) -> str:
        if self.status is JobStatus.FAILED and self.reason:
            return f"{self.status.value} ({self.reason})"
        return self.status.value


@dataclass(frozen=True)
class ManifestEntry:
    """Summary of one generated or downloaded version, stored as its meta.json."""
    name: str
    slug: str
    version: str
    release: str
    path: str
    mtime: int = 0
    pages: int = 0

    @classmethod
    def for_version(cls, version: Version, pages: int) -> "ManifestEntry":
        return cls(
            name=version.name,
            slug=version.slug,
            version=version.version,
            release=version.release,
            path=version.path,
            mtime=int(time.time()),
            pages=pages,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ManifestEntry":
        known = {key: data[key] for key in cls.__dataclass_fields__ if key in data}
        return cls(**known)

    def to_dict(self) -> dict:
        return asdict(self)
