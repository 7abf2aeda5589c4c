from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

import httpx

from .errors import FetchFailed

logger = logging.getLogger(__name__)


class FeedFetcher(Protocol):
    def fetch(self, source: str) -> bytes:
        ...


class HttpFeedFetcher:
    """
    Downloads the feed over HTTP(S). Any transport or status error is
    reported as FetchFailed; retrying is left to whoever calls refresh.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headers: Optional[dict] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport
        self.headers = {"accept": "text/csv, text/plain, */*"}
        if headers:
            self.headers.update(headers)

    def fetch(self, source: str) -> bytes:
        logger.info("Fetching dictionary feed from %s", source)
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport) as client:
                r = client.get(source, headers=self.headers)
                r.raise_for_status()
                return r.content
        except httpx.HTTPError as exc:
            raise FetchFailed(source, str(exc) or exc.__class__.__name__) from exc


class FileFeedFetcher:
    def fetch(self, source: str) -> bytes:
        path = Path(source)
        logger.info("Reading dictionary feed from %s", path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FetchFailed(source, str(exc)) from exc


class StaticFeedFetcher:
    """
    Serves an in-memory payload. Setting the payload to an exception makes
    the next fetch fail with it, which is how tests simulate an outage.
    """

    def __init__(self, payload: Union[bytes, str, BaseException]):
        self.payload = payload
        self.calls = 0

    def set_payload(self, payload: Union[bytes, str, BaseException]) -> None:
        self.payload = payload

    def fetch(self, source: str) -> bytes:
        self.calls += 1
        payload = self.payload
        if isinstance(payload, FetchFailed):
            raise payload
        if isinstance(payload, BaseException):
            raise FetchFailed(source, str(payload)) from payload
        if isinstance(payload, str):
            return payload.encode("utf-8")
        return payload


def fetcher_for(source: str, timeout: float = 30.0) -> FeedFetcher:
    if source.startswith(("http://", "https://")):
        return HttpFeedFetcher(timeout=timeout)
    return FileFeedFetcher()
