from __future__ import annotations

from typing import Iterable, List

from .dates import DEFAULT_TIMEZONE, format_timestamp, load_timezone
from .models import Channel, Community, Feed, FeedItem, Photo, WallPost

TITLE_LIMIT = 80
ELLIPSIS = "..."
LINE_BREAK = "<br>"


def post_title(text: str) -> str:
    """
    Derive an item title from the post body.

    The first line wins if it ends before the limit. Longer text is cut at the
    last space at or before the limit, or hard-cut, and marked with an ellipsis.
    """
    for i, ch in enumerate(text):
        if i == TITLE_LIMIT:
            cut = text.rfind(" ", 1, TITLE_LIMIT + 1)
            if cut > 0:
                return text[:cut] + ELLIPSIS
            return text[:TITLE_LIMIT - len(ELLIPSIS)] + ELLIPSIS
        if ch == "\n":
            return text[:i]
    return text


def max_size_photo_url(photo: Photo) -> str:
    """
    Pick the URL of the largest size of a photo.

    A size replaces the current best only if it is strictly wider and strictly
    taller. Returns an empty string when no size qualifies.
    """
    best_width = 0
    best_height = 0
    url = ""
    for size in photo.sizes:
        if size.width > best_width and size.height > best_height:
            best_width, best_height = size.width, size.height
            url = size.url
    return url


def post_description(post: WallPost) -> str:
    description = post.text.replace("\n", LINE_BREAK)
    for attachment in post.attachments:
        if attachment.type != "photo" or attachment.photo is None:
            continue
        url = max_size_photo_url(attachment.photo)
        if not url:
            continue
        description = f'<img src="{url}">\n{description}'
    return description


def post_link(post: WallPost) -> str:
    return f"https://vk.com/wall{post.owner_id}_{post.id}"


def community_channel(community: Community) -> Channel:
    return Channel(
        title=community.name,
        link="https://vk.com/" + community.screen_name,
        description=community.description.replace("\n", LINE_BREAK),
    )


def compose_feed(
    community: Community,
    posts: Iterable[WallPost],
    *,
    tz_name: str = DEFAULT_TIMEZONE,
) -> Feed:
    """
    Map a community and its wall posts to a Feed, keeping the post order.

    Raises TimezoneError if ``tz_name`` is not in the tz database.
    """
    tz = load_timezone(tz_name)

    items: List[FeedItem] = []
    for post in posts:
        items.append(
            FeedItem(
                title=post_title(post.text),
                description=post_description(post),
                date=format_timestamp(post.date, tz),
                link=post_link(post),
            )
        )

    return Feed(channel=community_channel(community), items=tuple(items))
