from __future__ import annotations

from typing import Dict, Iterable, Optional

from rss_maker.exceptions import NetworkError
from rss_maker.fetcher import parse_document


def tile(title: str, href: str, section: str = "Science", sponsored: bool = False) -> str:
    sponsor = '<div class="SectionLabel SectionLabel--sponsor">Paid Content</div>' if sponsored else ""
    return (
        '<div class="GridPromoTile__Tile">'
        '<div class="PromoTile">'
        '<div class="PromoTile__Link">'
        f'<a class="AnchorLink PromoTile__Link" tabindex="0" aria-label="{title}, {section}" href="{href}"></a>'
        "</div>"
        f'<div class="SectionLabel SectionLabel--link"><a href="/section"><span>{section}</span></a></div>'
        f"{sponsor}"
        "</div>"
        "</div>"
    )


def listing_html(first_row: Iterable[str], second_row: Iterable[str] = ()) -> str:
    return (
        "<html><body>"
        '<div class="FilterBar FilterBar--latest"><button>All</button></div>\n'
        '<div class="Grid">\n'
        f'  <div class="GridPromoTile"><div class="GridPromoTile__Row">{"".join(first_row)}</div></div>\n'
        '  <div class="Spacer"></div>\n'
        f'  <div class="GridPromoTile"><div class="GridPromoTile__Row">{"".join(second_row)}</div></div>\n'
        "</div>"
        "</body></html>"
    )


def article_html(description: str, published: str) -> str:
    return (
        "<html><body><article>"
        "<h1>Headline</h1>"
        f'<p class="Article__Headline__Desc">{description}</p>'
        f'<div class="Byline__Meta Byline__Meta--publishDate">{published}</div>'
        "</article></body></html>"
    )


class FakeSite:
    """Fake fetch_document: serves parsed pages from a dict and fails for URLs listed in ``broken``."""

    def __init__(self, pages: Dict[str, str], broken: Iterable[str] = ()) -> None:
        self.pages = pages
        self.broken = set(broken)
        self.calls = []

    def __call__(self, url: str, *, timeout: Optional[float] = None, cancel=None):
        self.calls.append(url)
        if url in self.broken:
            raise NetworkError(f"Failed to fetch page: {url} (connection refused)")
        return parse_document(self.pages[url].encode("utf-8"))


