from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .exceptions import NetworkError, ParseError, VKAPIError
from .models import Community, WallPost
from .parser import parse_community, parse_wall_post

logger = logging.getLogger(__name__)

API_URL = "https://api.vk.com/method/"
DEFAULT_VERSION = "5.131"


class VKClient:
    """
    Minimal VK API client for the two calls a community feed needs.

    Raises NetworkError on transport failures and VKAPIError when the API
    answers with an ``error`` payload.
    """

    def __init__(
        self,
        access_token: str,
        *,
        version: str = DEFAULT_VERSION,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._token = access_token
        self._version = version
        self._timeout = timeout
        self._session = session or requests.Session()

    def call(self, method: str, **params: Any) -> Any:
        query = dict(params)
        query["access_token"] = self._token
        query["v"] = self._version
        try:
            response = self._session.get(API_URL + method, params=query, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"VK API request failed: {method} ({e})") from e
        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(f"VK API returned invalid JSON: {method} ({e})") from e

        if not isinstance(payload, dict):
            raise ParseError(f"VK API returned unexpected payload: {method}")
        if "error" in payload:
            error = payload["error"] or {}
            raise VKAPIError(int(error.get("error_code") or 0), error.get("error_msg") or "unknown error")
        return payload.get("response")

    def get_community(self, group_id: str) -> Community:
        response = self.call("groups.getById", group_id=group_id, fields="description")
        # Newer API versions wrap the list in {"groups": [...]}.
        if isinstance(response, dict):
            response = response.get("groups")
        if not isinstance(response, list) or not response:
            raise VKAPIError(0, f"community not found: {group_id}")
        return parse_community(response[0])

    def get_wall_posts(self, domain: str, count: int = 20) -> List[WallPost]:
        response = self.call("wall.get", domain=domain, count=count)
        items: List[Dict[str, Any]] = []
        if isinstance(response, dict):
            items = [i for i in response.get("items") or [] if isinstance(i, dict)]
        logger.debug("wall.get %s returned %d posts", domain, len(items))
        return [parse_wall_post(i) for i in items]
