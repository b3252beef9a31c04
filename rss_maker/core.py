from __future__ import annotations

from typing import List, Optional
import functools
import logging

import requests

from . import fetcher, natgeo, normalizer
from .config import Settings
from .exceptions import RSSMakerError
from .models import EnrichmentResult, Feed
from .vk_api import VKClient

logger = logging.getLogger(__name__)


class FeedMaker:
    """
    High-level API: build a Feed from one of the supported sources.

    natgeo: fetch listing → pick teasers → enrich articles concurrently → Feed
    vk:     groups.getById + wall.get → normalize posts in order → Feed
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._session = session or requests.Session()
        self.last_results: List[EnrichmentResult] = []

    def natgeo(self, url: Optional[str] = None) -> Feed:
        url = url or self.settings.natgeo_url
        fetch_document = functools.partial(fetcher.fetch_document, session=self._session)
        results = natgeo.get_articles(
            url,
            fetch_document=fetch_document,
            timeout=self.settings.http_timeout,
            deadline=self.settings.batch_deadline,
            max_workers=self.settings.max_workers,
        )
        self.last_results = results
        partial = sum(1 for r in results if r.errors)
        if partial:
            logger.warning("%d of %d articles are incomplete", partial, len(results))
        return natgeo.compose_feed([r.record for r in results], url=url)

    def vk(self, domain: str, count: int = 20) -> Feed:
        if not self.settings.vk_access_token:
            raise RSSMakerError("VK_ACCESS_TOKEN is not set.")
        client = VKClient(
            self.settings.vk_access_token,
            version=self.settings.vk_api_version,
            timeout=self.settings.http_timeout,
            session=self._session,
        )
        community = client.get_community(domain)
        posts = client.get_wall_posts(domain, count=count)
        return normalizer.compose_feed(community, posts, tz_name=self.settings.timezone)
