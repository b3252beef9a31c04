from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass
class ArticleRecord:
    """
    One article scraped from a listing page.

    Fields default to an empty string when the page does not expose them.
    A record is filled in place by the single enrichment task that owns it.
    """
    link: str = ""
    date: str = ""
    title: str = ""
    description: str = ""


class EnrichmentStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    CANCELLED = "cancelled"


@dataclass
class EnrichmentResult:
    record: ArticleRecord
    status: EnrichmentStatus = EnrichmentStatus.OK
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PhotoSize:
    width: int
    height: int
    url: str


@dataclass(frozen=True)
class Photo:
    sizes: Tuple[PhotoSize, ...] = ()


@dataclass(frozen=True)
class Attachment:
    type: str
    photo: Optional[Photo] = None


@dataclass(frozen=True)
class WallPost:
    """A wall post as returned by the VK API, already typed."""
    id: int
    owner_id: int
    text: str = ""
    date: Optional[int] = None
    attachments: Tuple[Attachment, ...] = ()


@dataclass(frozen=True)
class Community:
    name: str
    screen_name: str
    description: str = ""


@dataclass(frozen=True)
class FeedItem:
    """
    Stable public model representing one syndicated entry.

    WARNING: Do not change fields lightly. The writer and both sources rely on them.
    """
    title: str
    description: str
    date: str
    link: str


@dataclass(frozen=True)
class Channel:
    title: str
    link: str
    description: str


@dataclass(frozen=True)
class Feed:
    channel: Channel
    items: Tuple[FeedItem, ...] = field(default_factory=tuple)
