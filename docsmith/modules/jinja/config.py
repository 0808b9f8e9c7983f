"""Jinja documentation configuration."""

NAME = "Jinja"
SLUG = "jinja"

# (version, release), newest first
VERSIONS = (
    ("3.1", "3.1.4"),
    ("2.11", "2.11.3"),
)

BASE_URL = "https://jinja.palletsprojects.com/en/{version}.x/"

# Sphinx table of contents on the landing page
NAV_SELECTOR = ".toctree-wrapper"

# Sphinx puts the page body in div.body (role=main)
CONTAINER_SELECTOR = "div.body"

CODE_LANGUAGE = "python"
