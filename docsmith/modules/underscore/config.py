"""Underscore.js documentation configuration."""

NAME = "Underscore.js"
SLUG = "underscore"
RELEASE = "1.13.6"

# Everything lives on a single page
BASE_URL = "https://underscorejs.org/"

CONTAINER_SELECTOR = "#documentation"

CODE_LANGUAGE = "javascript"
