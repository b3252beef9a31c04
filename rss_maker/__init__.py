"""
rss_maker

A small library that turns sources without a usable feed into RSS.

Sources:
- National Geographic "latest stories": listing page → teasers → article pages (fetched concurrently)
- VK community walls: API posts → items with derived titles, inline photos and local dates

Both produce the same Feed (channel + ordered items), which rss_maker.writer serializes to RSS 2.0.

Example
-------
from rss_maker import FeedMaker, to_xml

maker = FeedMaker()
feed = maker.natgeo()

for item in feed.items:
    print(item.date, item.title)

print(to_xml(feed).decode("utf-8"))
"""
from .models import ArticleRecord, Channel, Community, EnrichmentResult, EnrichmentStatus, Feed, FeedItem, WallPost
from .config import Settings
from .core import FeedMaker
from .writer import to_xml

__all__ = [
    "ArticleRecord",
    "Channel",
    "Community",
    "EnrichmentResult",
    "EnrichmentStatus",
    "Feed",
    "FeedItem",
    "FeedMaker",
    "Settings",
    "WallPost",
    "to_xml",
]
