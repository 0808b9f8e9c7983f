"""Packing and unpacking of documentation version directories."""

import io
import shutil
import tarfile
import zlib
from pathlib import Path

from docsmith.core.errors import ArchiveError
from docsmith.core.file_utils import replace_directory, staging_dir


class TarArchiver:
    """gzip'd tarballs whose members are relative to the version directory."""

    def compress(self, source_dir: Path) -> bytes:
        """Pack the contents of ``source_dir`` into tar.gz bytes."""
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise ArchiveError(f"nothing to package: {source_dir} is not a directory")

        buffer = io.BytesIO()
        try:
            with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
                for path in sorted(source_dir.rglob("*")):
                    tar.add(path, arcname=path.relative_to(source_dir).as_posix(), recursive=False)
        except (tarfile.TarError, OSError) as e:
            raise ArchiveError(f"could not package {source_dir}: {e}") from e
        return buffer.getvalue()

    def extract(self, archive: Path, target_dir: Path) -> None:
        """
        Unpack ``archive`` into ``target_dir``.

        The archive is extracted next to the target first; the old contents
        are only replaced once extraction succeeded.

        Raises:
            ArchiveError: corrupt or unreadable archive, or unsafe members
        """
        target_dir = Path(target_dir)
        staging = staging_dir(target_dir)

        try:
            try:
                with tarfile.open(archive, mode="r:gz") as tar:
                    tar.extractall(staging, filter="data")
            except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
                raise ArchiveError(f"could not extract {Path(archive).name}: {e}") from e

            replace_directory(staging, target_dir)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise
