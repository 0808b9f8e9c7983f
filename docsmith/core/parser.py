"""Navigation parsing used to enumerate the pages of a documentation version."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup


@dataclass
class NavLink:
    """A navigation link with hierarchy information."""
    title: str
    url: str
    depth: int = 0


def parse_nav_links(
    html: str,
    nav_selector: str,
    base_url: str,
    link_selector: str = "a",
    url_filter: Optional[str] = None
) -> list[NavLink]:
    """
    Parse navigation links from an index page.

    Args:
        html: HTML content to parse
        nav_selector: CSS selector for the navigation container
        base_url: Base URL for resolving relative links
        link_selector: CSS selector for links within navigation
        url_filter: Only include URLs containing this string

    Returns:
        List of NavLink objects with title, URL, and depth, in page order.
        Only links under ``base_url`` are kept; fragments are dropped.
    """
    soup = BeautifulSoup(html, "lxml")
    nav = soup.select_one(nav_selector)

    if not nav:
        return []

    links: list[NavLink] = []
    seen_urls: set[str] = set()

    for anchor in nav.select(link_selector):
        href = anchor.get("href")
        if not href:
            continue

        # Skip in-page anchors and mail links
        if href.startswith("#") or href.startswith("mailto:"):
            continue

        full_url, _ = urldefrag(urljoin(base_url, href))

        # Stay inside the documentation version
        if not full_url.startswith(base_url):
            continue

        if url_filter and url_filter not in full_url:
            continue

        if full_url in seen_urls:
            continue
        seen_urls.add(full_url)

        title = anchor.get_text(strip=True)
        if not title:
            continue

        depth = len(anchor.find_parents("ul"))

        links.append(NavLink(title=title, url=full_url, depth=depth))

    return links


def url_to_path(url: str, base_url: str) -> str:
    """
    Convert a page URL into its storage path relative to the version root.

    "https://x.org/4.4/class-Foo.html#m" -> "class-Foo"; the root URL itself
    and directory index pages map to "index" and their directory name.
    """
    url, _ = urldefrag(url)
    if url.startswith(base_url):
        path = urlparse("/" + url[len(base_url):].lstrip("/")).path
    else:
        path = urlparse(url).path

    path = path.strip("/")
    for suffix in (".html", ".htm"):
        if path.endswith(suffix):
            path = path[:-len(suffix)]
            break

    if path == "index" or path.endswith("/index"):
        path = path[:-len("index")].rstrip("/")

    return path or "index"
