"""
Mirror local documentation to an S3-compatible bucket.

Works like ``aws s3 sync --delete``: new or changed files are uploaded,
remote objects without a local counterpart are deleted, and a dry run only
prints what would happen.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config

from docsmith import config


@dataclass(frozen=True)
class SyncAction:
    """One planned change to the bucket."""
    action: str  # "upload" or "delete"
    key: str
    path: Optional[Path] = None

    def __str__(self) -> str:
        if self.action == "upload":
            return f"upload: {self.path} to {self.key}"
        return f"delete: {self.key}"


def _md5(path: Path) -> str:
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(1024 * 1024), b""):
            digest.update(block)
    return digest.hexdigest()


class S3Sync:
    """Deletion-aware mirror of local directories and files into a bucket."""

    DELETE_BATCH = 1000  # S3 limit per DeleteObjects call
    MD5_METADATA = "md5"

    def __init__(
        self,
        bucket: str = config.S3_BUCKET,
        prefix: str = config.S3_PREFIX,
        dry_run: bool = False,
        client=None,
        endpoint_url: Optional[str] = config.S3_ENDPOINT_URL,
    ):
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.dry_run = dry_run
        self.client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            config=Config(retries={"max_attempts": 3, "mode": "standard"}),
        )

    def key(self, *parts: str) -> str:
        return "/".join(part.strip("/") for part in (self.prefix, *parts) if part and part.strip("/"))

    def _remote_etags(self, prefix: str) -> dict[str, str]:
        """Keys under ``prefix`` mapped to their ETag (MD5 for single-part uploads)."""
        etags = {}
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                etags[obj["Key"]] = obj.get("ETag", "").strip('"')
        return etags

    def _unchanged(self, key: str, etag: Optional[str], path: Path) -> bool:
        """Whether the object at ``key`` already holds the file's content.

        Multipart uploads get an ``<md5>-<parts>`` ETag, so their MD5 is read
        from the metadata written by ``_apply``.
        """
        if etag is None:
            return False
        if "-" in etag:
            response = self.client.head_object(Bucket=self.bucket, Key=key)
            etag = response.get("Metadata", {}).get(self.MD5_METADATA)
        return etag == _md5(path)

    def plan(self, local_dir: Path, remote_dir: str) -> list[SyncAction]:
        """Actions that would make ``<prefix>/<remote_dir>/`` mirror ``local_dir``."""
        local_dir = Path(local_dir)
        base = self.key(remote_dir) + "/"
        remote = self._remote_etags(base)

        actions = []
        local_keys = set()
        for path in sorted(p for p in local_dir.rglob("*") if p.is_file()):
            key = base + path.relative_to(local_dir).as_posix()
            local_keys.add(key)
            if not self._unchanged(key, remote.get(key), path):
                actions.append(SyncAction("upload", key, path))

        for key in sorted(set(remote) - local_keys):
            actions.append(SyncAction("delete", key))

        return actions

    def sync(self, local_dir: Path, remote_dir: str) -> list[SyncAction]:
        """Mirror a directory; returns the actions taken (or planned, on a dry run)."""
        actions = self.plan(local_dir, remote_dir)
        self._apply(actions)
        return actions

    def sync_file(self, path: Path, remote_name: str) -> list[SyncAction]:
        """Upload a single file unless the bucket already holds identical content."""
        key = self.key(remote_name)
        remote = self._remote_etags(key)
        path = Path(path)
        actions = [] if self._unchanged(key, remote.get(key), path) else [SyncAction("upload", key, path)]
        self._apply(actions)
        return actions

    def _apply(self, actions: list[SyncAction]) -> None:
        for action in actions:
            print(f"{'(dryrun) ' if self.dry_run else ''}{action}")

        if self.dry_run:
            return

        for action in actions:
            if action.action == "upload":
                self.client.upload_file(
                    str(action.path),
                    self.bucket,
                    action.key,
                    ExtraArgs={"Metadata": {self.MD5_METADATA: _md5(action.path)}},
                )

        deletes = [action.key for action in actions if action.action == "delete"]
        for i in range(0, len(deletes), self.DELETE_BATCH):
            batch = deletes[i:i + self.DELETE_BATCH]
            self.client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
            )
