"""Exception types shared across the build pipeline."""


class DocsmithError(Exception):
    """Base class for recoverable docsmith errors."""


class DocNotFound(DocsmithError):
    """Raised when a documentation slug or version is not registered."""

    def __init__(self, message: str, slug: str):
        super().__init__(message)
        self.slug = slug


class FetchError(DocsmithError):
    """Raised when a URL cannot be retrieved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"could not fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ArchiveError(DocsmithError):
    """Raised when an archive cannot be created or extracted."""


class FilterDefect(RuntimeError):
    """A filter's structural assumption about the page does not hold.

    A programming error in the filter or an upstream markup change it was
    not written for. Not a DocsmithError; the pipeline never catches it.
    """
