"""Web page data model."""

from dataclasses import dataclass


@dataclass
class WebPage:
    """A fetched page after text extraction."""

    url: str
    title: str
    text: str
    raw_html: str = ""

    def __post_init__(self):
        if not self.url:
            raise ValueError("url must not be empty")
