"""
Scraper for the National Geographic "latest stories" listing page.

The listing is split into tiles; every tile that is neither sponsored nor part
of the Magazine section links to an article page, which is fetched to read the
description and the publication date. Article pages are fetched concurrently.

All assumptions about the page layout live in the small accessor functions
below, so a markup change on the site needs a single edit.
"""
from __future__ import annotations

import concurrent.futures as _fut
import dataclasses
import logging
import threading
from typing import Callable, Iterator, List, Optional, Tuple

from bs4 import Tag

from . import fetcher
from .exceptions import NetworkError, ParseError, RenderError, StructuralAssumptionError
from .locator import element_children, field_text, locate
from .models import ArticleRecord, Channel, EnrichmentResult, EnrichmentStatus, Feed, FeedItem

logger = logging.getLogger(__name__)

LATEST_STORIES_URL = "https://www.nationalgeographic.com/pages/topic/latest-stories"

FILTER_BAR_CLASS = "FilterBar"
ROW_CLASS = "GridPromoTile__Row"
SPONSOR_CLASS = "SectionLabel--sponsor"
SECTION_LABEL_CLASS = "SectionLabel SectionLabel--link"
DESCRIPTION_CLASS = "Article__Headline__Desc"
PUBLISH_DATE_CLASS = "Byline__Meta Byline__Meta--publishDate"

EXCLUDED_SECTION = "Magazine"
PUBLISHED_PREFIX = "Published "

# Seconds a batch of article fetches may take before pending ones are cancelled.
DEFAULT_BATCH_DEADLINE = 60.0

# Positions used when the keyed attribute or child is not present.
_TITLE_ATTR = ("aria-label", 2)
_LINK_ATTR = ("href", 3)
_ROW_POSITIONS = (0, 2)
_ANCHOR_DEPTH = 3

DocumentFetcher = Callable[..., Tag]


def _attribute(tag: Tag, name: str, position: int) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        values = list(tag.attrs.values())
        if position >= len(values):
            return None
        value = values[position]
    if isinstance(value, (list, tuple)):
        value = " ".join(value)
    return value


def teaser_title_source(teaser: Tag) -> Optional[str]:
    """Composite label of a teaser, e.g. ``"Headline, Section, ..."``."""
    return _attribute(teaser, *_TITLE_ATTR)


def teaser_link(teaser: Tag) -> Optional[str]:
    return _attribute(teaser, *_LINK_ATTR)


def teaser_anchor(tile: Tag) -> Optional[Tag]:
    """The anchor element nested three levels inside a tile."""
    node: Optional[Tag] = tile
    for _ in range(_ANCHOR_DEPTH):
        children = element_children(node)
        if not children:
            return None
        node = children[0]
    return node


def listing_container(root: Tag) -> Optional[Tag]:
    """The element right after the filter bar that holds the tile rows."""
    marker = locate(root, FILTER_BAR_CLASS)
    if marker is None:
        return None
    return marker.find_next_sibling()


def listing_rows(container: Tag) -> Iterator[Tag]:
    children = element_children(container)
    for position in _ROW_POSITIONS:
        if position >= len(children):
            continue
        row = locate(children[position], ROW_CLASS)
        if row is not None:
            yield row


def section_label(tile: Tag) -> str:
    label = locate(tile, SECTION_LABEL_CLASS)
    if label is None:
        return ""
    return label.get_text()


def is_sponsored(tile: Tag) -> bool:
    return locate(tile, SPONSOR_CLASS) is not None


def is_magazine(tile: Tag) -> bool:
    return EXCLUDED_SECTION in section_label(tile)


def iter_teasers(container: Tag) -> Iterator[Tag]:
    """Yield the teaser anchors of every tile that belongs in the feed."""
    for row in listing_rows(container):
        for tile in element_children(row):
            if is_sponsored(tile):
                logger.debug("Skipping sponsored tile")
                continue
            if is_magazine(tile):
                logger.debug("Skipping magazine tile")
                continue
            anchor = teaser_anchor(tile)
            if anchor is None:
                logger.warning("Tile without a teaser anchor skipped")
                continue
            yield anchor


def teaser_title(teaser: Tag) -> str:
    """Headline part of the teaser label: everything before the last comma."""
    label = teaser_title_source(teaser)
    if label is None:
        raise StructuralAssumptionError("teaser has no title label")
    i = label.rfind(",")
    if i == -1:
        raise StructuralAssumptionError(f"teaser label has no comma: {label!r}")
    return label[:i]


def seed_record(teaser: Tag) -> Tuple[ArticleRecord, List[str]]:
    """
    Build a record with the fields readable from the teaser itself.

    Returns the record and the problems found; a malformed label leaves the
    title empty instead of failing.
    """
    record = ArticleRecord()
    errors: List[str] = []

    try:
        record.title = teaser_title(teaser)
    except StructuralAssumptionError as e:
        logger.warning("%s", e)
        errors.append(str(e))

    link = teaser_link(teaser)
    if link:
        record.link = link
    else:
        logger.warning("teaser has no link")
        errors.append("teaser has no link")

    return record, errors


def _field(doc: Tag, class_substring: str, errors: List[str]) -> str:
    tag = locate(doc, class_substring)
    if tag is None:
        logger.warning("Article page has no element with class %r", class_substring)
        errors.append(f"no element with class {class_substring!r}")
        return ""
    try:
        return field_text(tag).strip()
    except RenderError as e:
        logger.warning("%s", e)
        errors.append(str(e))
        return ""


def fill_from_article(
    record: ArticleRecord,
    errors: List[str],
    *,
    fetch_document: DocumentFetcher = fetcher.fetch_document,
    timeout: float = fetcher.DEFAULT_TIMEOUT,
    cancel: Optional[threading.Event] = None,
) -> EnrichmentResult:
    """Fetch the article page of ``record`` and fill its description and date in place."""
    if record.link:
        try:
            doc = fetch_document(record.link, timeout=timeout, cancel=cancel)
        except (NetworkError, ParseError) as e:
            logger.warning("Article page unavailable: %s", e)
            errors.append(str(e))
        else:
            record.description = _field(doc, DESCRIPTION_CLASS, errors)
            date = _field(doc, PUBLISH_DATE_CLASS, errors)
            record.date = date.replace(PUBLISHED_PREFIX, "")

    status = EnrichmentStatus.PARTIAL if errors else EnrichmentStatus.OK
    return EnrichmentResult(record=record, status=status, errors=tuple(errors))


def enrich(
    teaser: Tag,
    *,
    fetch_document: DocumentFetcher = fetcher.fetch_document,
    timeout: float = fetcher.DEFAULT_TIMEOUT,
    cancel: Optional[threading.Event] = None,
) -> EnrichmentResult:
    """
    Turn one teaser into an article record.

    Title and link come from the teaser; description and date come from the
    article page. Fetch and parse failures leave the page fields empty and
    mark the result as partial.
    """
    record, errors = seed_record(teaser)
    return fill_from_article(
        record, errors, fetch_document=fetch_document, timeout=timeout, cancel=cancel
    )


def collect_articles(
    listing_root: Tag,
    *,
    fetch_document: DocumentFetcher = fetcher.fetch_document,
    timeout: float = fetcher.DEFAULT_TIMEOUT,
    deadline: Optional[float] = DEFAULT_BATCH_DEADLINE,
    max_workers: Optional[int] = None,
) -> List[EnrichmentResult]:
    """
    Enrich every qualifying teaser of a listing page concurrently.

    Results come back in completion order. When ``deadline`` seconds pass
    first, pending fetches are cancelled and their teasers are reported with
    status CANCELLED and only the teaser fields filled. Pass ``deadline=None``
    to wait for every fetch.
    """
    container = listing_container(listing_root)
    if container is None:
        logger.warning("Listing page has no %s container", FILTER_BAR_CLASS)
        return []

    seeds = [seed_record(t) for t in iter_teasers(container)]
    if not seeds:
        logger.warning("Listing page has no teasers")
        return []

    workers = len(seeds) if not max_workers else min(max_workers, len(seeds))
    cancel = threading.Event()
    results: List[EnrichmentResult] = []
    pending = {}

    executor = _fut.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="natgeo")
    try:
        for record, errors in seeds:
            snapshot = dataclasses.replace(record)
            future = executor.submit(
                fill_from_article,
                record,
                list(errors),
                fetch_document=fetch_document,
                timeout=timeout,
                cancel=cancel,
            )
            pending[future] = (snapshot, errors)

        try:
            for future in _fut.as_completed(pending, timeout=deadline):
                pending.pop(future)
                results.append(future.result())
        except _fut.TimeoutError:
            cancel.set()
            logger.warning("Batch deadline of %ss passed with %d articles pending", deadline, len(pending))
            for future, (snapshot, errors) in pending.items():
                if future.done() and not future.cancelled():
                    results.append(future.result())
                    continue
                results.append(
                    EnrichmentResult(
                        record=snapshot,
                        status=EnrichmentStatus.CANCELLED,
                        errors=tuple(errors) + ("batch deadline exceeded",),
                    )
                )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    logger.info("Collected %d articles", len(results))
    return results


def decompose(listing_root: Tag, **kwargs) -> List[ArticleRecord]:
    """Article records of a listing page; see ``collect_articles`` for the options."""
    return [result.record for result in collect_articles(listing_root, **kwargs)]


def articles_channel(url: str = LATEST_STORIES_URL) -> Channel:
    return Channel(
        title="National Geographic: Latest Stories",
        link=url,
        description="Latest stories from National Geographic",
    )


def compose_feed(records: List[ArticleRecord], *, url: str = LATEST_STORIES_URL) -> Feed:
    items = tuple(
        FeedItem(title=r.title, description=r.description, date=r.date, link=r.link)
        for r in records
    )
    return Feed(channel=articles_channel(url), items=items)


def get_articles(
    url: str = LATEST_STORIES_URL,
    *,
    fetch_document: DocumentFetcher = fetcher.fetch_document,
    timeout: float = fetcher.DEFAULT_TIMEOUT,
    deadline: Optional[float] = DEFAULT_BATCH_DEADLINE,
    max_workers: Optional[int] = None,
) -> List[EnrichmentResult]:
    """
    Fetch the listing page and enrich its articles.

    Raises NetworkError or ParseError if the listing page itself is unavailable.
    """
    doc = fetch_document(url, timeout=timeout)
    return collect_articles(
        doc,
        fetch_document=fetch_document,
        timeout=timeout,
        deadline=deadline,
        max_workers=max_workers,
    )
