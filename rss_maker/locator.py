"""
Schema-less element lookup over parsed HTML.

Elements are found by a substring of their ``class`` attribute rather than by
selectors, so small markup changes on the source site degrade into empty
fields instead of crashes.
"""
from __future__ import annotations

from typing import List, Optional

from bs4 import NavigableString, PageElement, Tag

from .exceptions import RenderError


def class_value(node: Tag) -> Optional[str]:
    value = node.get("class")
    if value is None:
        return None
    # Documents parsed with bs4 defaults hold class as a list of tokens.
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def has_class(node: PageElement, class_substring: str) -> bool:
    if not isinstance(node, Tag):
        return False
    value = class_value(node)
    return value is not None and class_substring in value


def locate(root: Optional[PageElement], class_substring: str) -> Optional[Tag]:
    """
    Return the first element, in document order, whose class contains ``class_substring``.

    ``root`` itself is checked first. Text and comment nodes never match.
    Returns None when nothing matches or when ``root`` is None.
    """
    if not isinstance(root, Tag):
        return None
    if has_class(root, class_substring):
        return root
    return root.find(lambda tag: has_class(tag, class_substring))


def element_children(node: Optional[PageElement]) -> List[Tag]:
    if not isinstance(node, Tag):
        return []
    return [child for child in node.children if isinstance(child, Tag)]


def extract_text(node: PageElement) -> str:
    """
    Render ``node`` to markup and return the text between its opening tag and the next tag.

    Raises RenderError if the subtree cannot be rendered.
    """
    try:
        markup = node.decode() if isinstance(node, Tag) else str(node)
    except Exception as e:
        raise RenderError(f"Failed to render element <{getattr(node, 'name', None)}> ({e})") from e

    if isinstance(node, NavigableString):
        return markup

    start = markup.find(">")
    if start == -1:
        return markup
    rest = markup[start + 1:]
    end = rest.find("<")
    if end == -1:
        return rest
    return rest[:end]


def field_text(node: PageElement) -> str:
    """
    Text of an element, read directly from the tree with entities decoded.

    Elements that interleave text with inline child tags keep only the text
    run before their first child tag, matching ``extract_text``.
    """
    if not isinstance(node, Tag):
        return extract_text(node)
    if not element_children(node):
        return node.get_text()
    parts = []
    for child in node.children:
        if isinstance(child, Tag):
            break
        if type(child) is NavigableString:
            parts.append(str(child))
    return "".join(parts)
