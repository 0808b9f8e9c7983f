"""CakePHP API documentation configuration."""

NAME = "CakePHP"
SLUG = "cakephp"

# (version, release), newest first
VERSIONS = (
    ("4.4", "4.4.18"),
    ("3.10", "3.10.5"),
    ("2.10", "2.10.24"),
)

# API reference root for a version
BASE_URL = "https://api.cakephp.org/{version}/"

# Sidebar listing every namespace, class and interface page
NAV_SELECTOR = "#side-nav"

# Only class, interface and trait pages hold API content
URL_FILTER = ".html"

# Main content element of an API page
CONTAINER_SELECTOR = "#right"
