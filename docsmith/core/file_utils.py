"""File helpers for atomic writes and directory swaps."""

import json
import os
import shutil
import tempfile
from pathlib import Path


def write_json(path: Path, data) -> None:
    """Write JSON through a temporary file so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def staging_dir(target: Path) -> Path:
    """Create an empty directory next to ``target`` to build its replacement in."""
    target.parent.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f".{target.name}.", dir=target.parent))


def replace_directory(source: Path, target: Path) -> None:
    """
    Move ``source`` to ``target``, replacing whatever was there.

    Both paths must be on the same filesystem. The old target is renamed
    aside first and only deleted once the new one is in place, so ``target``
    never holds a mix of old and new files.
    """
    backup = None
    if target.exists():
        backup = target.with_name(f".{target.name}.old")
        if backup.exists():
            shutil.rmtree(backup)
        os.rename(target, backup)

    try:
        os.rename(source, target)
    except OSError:
        if backup is not None:
            os.rename(backup, target)
        raise

    if backup is not None:
        shutil.rmtree(backup, ignore_errors=True)
