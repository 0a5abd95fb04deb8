"""Title and visible-text extraction for crawled HTML pages."""

import re

from bs4 import BeautifulSoup

from sitebot.models.page import WebPage

# Elements whose content is never visible page text
INVISIBLE_TAGS = ["script", "style", "noscript"]

# Elements that break words apart; inline markup (em, a, span...) does not
BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "table",
    "td", "th", "tr", "ul",
]

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def extract_title_and_text(html: str) -> tuple[str, str]:
    """Extract the page title and normalized body text from raw HTML.

    The title is the first <title> element's text, or "" when absent.
    Script, style and noscript content is dropped before the visible text
    is taken from <body> (or the whole document when there is no body).
    Malformed markup is parsed best-effort and never raises.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title_tag = soup.find("title")
    title = normalize_whitespace(title_tag.get_text()) if title_tag else ""

    for tag in soup.find_all(INVISIBLE_TAGS):
        tag.decompose()

    root = soup.body
    if root is None:
        if title_tag is not None:
            title_tag.decompose()
        root = soup

    for tag in root.find_all(BLOCK_TAGS):
        tag.insert_before(" ")
        tag.insert_after(" ")

    text = normalize_whitespace(root.get_text())
    return title, text


def extract_page(url: str, html: str) -> WebPage:
    """Extract a fetched page into a WebPage."""
    title, text = extract_title_and_text(html)
    return WebPage(url=url, title=title, text=text, raw_html=html)
