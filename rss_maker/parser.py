from __future__ import annotations

from typing import Any, Dict, Optional

from .models import Attachment, Community, Photo, PhotoSize, WallPost


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _get_date(post: Dict[str, Any]) -> Optional[int]:
    value = post.get("date")
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_photo(photo: Dict[str, Any]) -> Photo:
    sizes = []
    for size in photo.get("sizes") or []:
        if not isinstance(size, dict):
            continue
        sizes.append(
            PhotoSize(
                width=_to_int(size.get("width")),
                height=_to_int(size.get("height")),
                url=(size.get("url") or size.get("src") or "").strip(),
            )
        )
    return Photo(sizes=tuple(sizes))


def parse_attachment(attachment: Dict[str, Any]) -> Attachment:
    kind = attachment.get("type") or ""
    photo = None
    if kind == "photo" and isinstance(attachment.get("photo"), dict):
        photo = parse_photo(attachment["photo"])
    return Attachment(type=kind, photo=photo)


def parse_wall_post(post: Dict[str, Any]) -> WallPost:
    """
    Map a raw ``wall.get`` item to a WallPost.
    Missing numbers become 0, missing text becomes "", a missing date stays None.
    """
    attachments = tuple(
        parse_attachment(a) for a in post.get("attachments") or [] if isinstance(a, dict)
    )
    return WallPost(
        id=_to_int(post.get("id")),
        owner_id=_to_int(post.get("owner_id")),
        text=post.get("text") or "",
        date=_get_date(post),
        attachments=attachments,
    )


def parse_community(group: Dict[str, Any]) -> Community:
    """Map a raw ``groups.getById`` entry to a Community."""
    screen_name = group.get("screen_name") or ""
    if not screen_name and group.get("id") is not None:
        screen_name = f"club{_to_int(group.get('id'))}"
    return Community(
        name=group.get("name") or "",
        screen_name=screen_name,
        description=group.get("description") or "",
    )
