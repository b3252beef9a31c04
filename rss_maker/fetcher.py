from __future__ import annotations

import logging
import threading
from typing import Optional

import requests
from bs4 import BeautifulSoup

from .exceptions import FetchCancelled, NetworkError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
_CHUNK_SIZE = 64 * 1024


def _check_cancelled(url: str, cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise FetchCancelled(f"Fetch cancelled: {url}")


def fetch(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    cancel: Optional[threading.Event] = None,
    session: Optional[requests.Session] = None,
) -> bytes:
    """
    Fetch a URL with a plain GET and return the response body.

    The body is streamed so that a set ``cancel`` event stops the download
    between chunks. Raises NetworkError on transport failures, HTTP error
    statuses and cancellation.
    """
    _check_cancelled(url, cancel)
    http = session or requests
    chunks = []
    try:
        with http.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                _check_cancelled(url, cancel)
                chunks.append(chunk)
    except requests.RequestException as e:
        raise NetworkError(f"Failed to fetch page: {url} ({e})") from e
    body = b"".join(chunks)
    logger.debug("Fetched %s (%d bytes)", url, len(body))
    return body


def parse_document(body: bytes) -> BeautifulSoup:
    """
    Parse HTML bytes into a document tree.

    Attribute values are kept as raw strings in source order, so ``class`` is
    matched exactly as written and positional attribute access is stable.
    """
    try:
        return BeautifulSoup(body, "html.parser", multi_valued_attributes=None)
    except Exception as e:  # bs4 surfaces parser failures with several types
        raise ParseError(f"Failed to parse HTML document ({e})") from e


def fetch_document(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    cancel: Optional[threading.Event] = None,
    session: Optional[requests.Session] = None,
) -> BeautifulSoup:
    return parse_document(fetch(url, timeout=timeout, cancel=cancel, session=session))
