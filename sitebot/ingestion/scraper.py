"""Site crawler: URL discovery and page fetching.

URL discovery tries the site's /sitemap.xml first and falls back to the
anchors on the homepage. Only URLs on the same scheme and host as the
configured site are kept.
"""

import logging
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 40
DEFAULT_TIMEOUT_MS = 15000
DEFAULT_USER_AGENT = "SiteBotIngest/0.1"

DEFAULT_PORTS = {"http": 80, "https": 443}


def build_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict:
    """Request headers sent with every crawl request."""
    return {"User-Agent": user_agent}


def _timeout_seconds(timeout_ms: int) -> float:
    return timeout_ms / 1000.0


def is_same_host(url: str, site: str) -> bool:
    """Return True if ``url`` is absolute and shares scheme, host and port with ``site``.

    Hosts compare case-insensitively, credentials are ignored and an explicit
    default port equals no port. Relative and malformed URLs are rejected.
    """
    try:
        candidate = urlparse(url)
        origin = urlparse(site)
        # .port raises ValueError on an out-of-range or non-numeric port
        candidate_port = _effective_port(candidate)
        origin_port = _effective_port(origin)
    except ValueError:
        return False

    if not candidate.scheme or not candidate.hostname:
        return False
    return (
        candidate.scheme.lower() == origin.scheme.lower()
        and candidate.hostname == origin.hostname
        and candidate_port == origin_port
    )


def _effective_port(parsed) -> int | None:
    return parsed.port or DEFAULT_PORTS.get(parsed.scheme.lower())


def _dedupe(urls: list[str]) -> list[str]:
    """Drop repeated URLs, keeping first-seen order."""
    return list(dict.fromkeys(urls))


def parse_sitemap(xml: str) -> list[str]:
    """Extract page URLs (<url><loc>) from a sitemap document, in order.

    A sitemap index lists child sitemaps in <sitemap><loc>, not pages, so it
    yields nothing.
    """
    soup = BeautifulSoup(xml, "html.parser")
    urls = []
    for entry in soup.find_all("url"):
        loc = entry.find("loc", recursive=False)
        value = loc.get_text(strip=True) if loc else ""
        if value:
            urls.append(value)
    return urls


def parse_homepage_links(html: str, site: str) -> list[str]:
    """Resolve every anchor href on a page and keep the same-host ones."""
    soup = BeautifulSoup(html, "html.parser")
    urls = []
    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        if not href:
            continue
        try:
            absolute = urljoin(site, href)
        except ValueError:
            continue
        if is_same_host(absolute, site):
            urls.append(absolute)
    return _dedupe(urls)


def fetch_sitemap_urls(
    site: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    headers: dict | None = None,
) -> list[str]:
    """Fetch /sitemap.xml relative to the site root and return its URLs.

    Returns an empty list if the sitemap cannot be fetched or parsed.
    """
    sitemap_url = urljoin(site, "/sitemap.xml")
    try:
        resp = requests.get(sitemap_url, timeout=_timeout_seconds(timeout_ms), headers=headers)
        resp.raise_for_status()
        urls = parse_sitemap(resp.text)
    except Exception as e:
        logger.warning("Failed to read sitemap %s: %s", sitemap_url, e)
        return []

    logger.info("Sitemap %s listed %d URLs", sitemap_url, len(urls))
    return urls


def fetch_homepage_urls(
    site: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    headers: dict | None = None,
) -> list[str]:
    """Fetch the homepage and return its same-host links.

    Returns an empty list if the homepage cannot be fetched.
    """
    try:
        resp = requests.get(site, timeout=_timeout_seconds(timeout_ms), headers=headers)
        resp.raise_for_status()
    except Exception as e:
        logger.warning("Failed to fetch homepage %s: %s", site, e)
        return []

    urls = parse_homepage_links(resp.text, site)
    logger.info("Homepage %s linked %d same-host URLs", site, len(urls))
    return urls


def discover_urls(
    site: str,
    limit: int = DEFAULT_LIMIT,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> list[str]:
    """Enumerate in-scope URLs for a site.

    Uses the sitemap when it yields any URLs, the homepage links otherwise.
    The result is same-host filtered, de-duplicated and capped at ``limit``
    in discovery order.
    """
    headers = build_headers(user_agent)

    urls = fetch_sitemap_urls(site, timeout_ms, headers)
    if not urls:
        logger.info("No sitemap URLs for %s, falling back to homepage links", site)
        urls = fetch_homepage_urls(site, timeout_ms, headers)

    in_scope = _dedupe([u for u in urls if is_same_host(u, site)])
    dropped = len(urls) - len(in_scope)
    if dropped:
        logger.info("Dropped %d off-site or duplicate URLs", dropped)

    return in_scope[:max(limit, 0)]


def fetch_page(
    url: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    headers: dict | None = None,
) -> str | None:
    """Fetch a single page's raw HTML.

    Returns None if the fetch fails.
    """
    try:
        resp = requests.get(url, timeout=_timeout_seconds(timeout_ms), headers=headers)
        resp.raise_for_status()
    except Exception as e:
        logger.warning("Failed to fetch %s: %s", url, e)
        return None

    return resp.text
