"""Global docsmith configuration."""

import os
from pathlib import Path

# Local directory holding generated and downloaded documentation
DOCS_PATH = Path(os.environ.get("DOCSMITH_DOCS_PATH", "public/docs"))

# Where prebuilt packages are downloaded from: <DOWNLOAD_URL>/<path><ARCHIVE_SUFFIX>
DOWNLOAD_URL = os.environ.get("DOCSMITH_DOWNLOAD_URL", "https://downloads.devdocs.io")

ARCHIVE_SUFFIX = ".tar.gz"

MANIFEST_FILENAME = "manifest.json"
INDEX_FILENAME = "index.json"
META_FILENAME = "meta.json"

# Number of parallel download workers
DOWNLOAD_WORKERS = 4

# HTTP settings
USER_AGENT = "docsmith/1.0 (+https://github.com/docsmith/docsmith)"
REQUEST_DELAY = 0.5  # seconds between page requests while scraping
REQUEST_TIMEOUT = 30
MAX_RETRIES = 3

# Remote storage for packages (upload command)
S3_BUCKET = os.environ.get("DOCSMITH_S3_BUCKET", "docsmith-downloads")
S3_PREFIX = os.environ.get("DOCSMITH_S3_PREFIX", "")
S3_ENDPOINT_URL = os.environ.get("DOCSMITH_S3_ENDPOINT_URL")
