"""Concurrent download of prebuilt documentation packages."""

import queue
import tempfile
import threading
from pathlib import Path
from typing import Iterable, Optional

from docsmith import config
from docsmith.core.archiver import TarArchiver
from docsmith.core.fetcher import Fetcher
from docsmith.core.models import DownloadJob, JobStatus, Version


class _Progress:
    """Completion counter whose increments are printed under the same lock."""

    def __init__(self, total: int):
        self.total = total
        self.done = 0
        self._lock = threading.Lock()

    def report(self, job: DownloadJob) -> None:
        with self._lock:
            self.done += 1
            print(f"({self.done}/{self.total}) {job.label} {job.status_text}", flush=True)


class ConcurrentFetcher:
    """Downloads and unpacks packages with a fixed pool of worker threads.

    Workers drain one shared backlog; a claim is a single ``get_nowait`` on a
    ``queue.Queue``, so each job is processed by exactly one worker. A failing
    job is marked FAILED and never stops the other jobs.
    """

    def __init__(
        self,
        docs_path: Optional[Path] = None,
        fetcher: Optional[Fetcher] = None,
        archiver: Optional[TarArchiver] = None,
        download_url: str = config.DOWNLOAD_URL,
        workers: int = config.DOWNLOAD_WORKERS,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.docs_path = Path(docs_path) if docs_path is not None else config.DOCS_PATH
        self.fetcher = fetcher or Fetcher(delay=0)
        self.archiver = archiver or TarArchiver()
        self.download_url = download_url.rstrip("/")
        self.workers = workers

    @staticmethod
    def jobs_for(versions: Iterable[Version]) -> list[DownloadJob]:
        return [DownloadJob.for_version(version) for version in versions]

    def url_for(self, job: DownloadJob) -> str:
        return f"{self.download_url}/{job.path}{config.ARCHIVE_SUFFIX}"

    def run(self, jobs: list[DownloadJob]) -> list[DownloadJob]:
        """Process every job once; returns when all workers have exited."""
        backlog: "queue.Queue[DownloadJob]" = queue.Queue()
        for job in jobs:
            backlog.put(job)

        progress = _Progress(total=len(jobs))
        self.docs_path.mkdir(parents=True, exist_ok=True)

        threads = [
            threading.Thread(target=self._work, args=(backlog, progress), name=f"download-{i + 1}")
            for i in range(min(self.workers, len(jobs)))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        return jobs

    def _work(self, backlog: "queue.Queue[DownloadJob]", progress: _Progress) -> None:
        while True:
            try:
                job = backlog.get_nowait()
            except queue.Empty:
                return
            self._process(job)
            progress.report(job)

    def _process(self, job: DownloadJob) -> None:
        job.status = JobStatus.RUNNING
        staging: Optional[Path] = None

        try:
            data = self.fetcher.fetch(self.url_for(job))

            fd, name = tempfile.mkstemp(prefix=f".{job.path}.", suffix=config.ARCHIVE_SUFFIX, dir=self.docs_path)
            staging = Path(name)
            with open(fd, "wb") as f:
                f.write(data)

            self.archiver.extract(staging, self.docs_path / job.path)
            job.status = JobStatus.OK
        except Exception as e:
            job.status = JobStatus.FAILED
            job.reason = f"{type(e).__name__}: {e}"
        finally:
            if staging is not None:
                staging.unlink(missing_ok=True)
