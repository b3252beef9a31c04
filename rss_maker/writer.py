from __future__ import annotations

from email.utils import format_datetime
from typing import Optional
import xml.etree.ElementTree as ET

from .dates import parse_feed_date
from .models import Feed, FeedItem


def _sub(parent: ET.Element, tag: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el


def last_build_date(feed: Feed) -> Optional[str]:
    """RFC 822 date of the newest item whose date can be read, if any."""
    dates = [d for d in (parse_feed_date(i.date) for i in feed.items) if d is not None]
    if not dates:
        return None
    return format_datetime(max(dates))


def _item_element(parent: ET.Element, item: FeedItem) -> None:
    el = ET.SubElement(parent, "item")
    _sub(el, "title", item.title)
    if item.link:
        _sub(el, "link", item.link)
    _sub(el, "description", item.description)
    if item.date:
        _sub(el, "pubDate", item.date)
    if item.link:
        guid = _sub(el, "guid", item.link)
        guid.set("isPermaLink", "true")


def to_xml(feed: Feed) -> bytes:
    """Serialize a Feed to an RSS 2.0 document (UTF-8, with XML declaration)."""
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    _sub(channel, "title", feed.channel.title)
    _sub(channel, "link", feed.channel.link)
    _sub(channel, "description", feed.channel.description)

    built = last_build_date(feed)
    if built:
        _sub(channel, "lastBuildDate", built)

    for item in feed.items:
        _item_element(channel, item)

    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)
