"""
Acquisition Orchestrator - One fetch, scrape, filter and dedup cycle.

Responsibilities:
1. Scrapes the top listing, and the configured state listing if any
2. Applies the whitelist / blacklist
3. Sorts by feed id and drops duplicate ids
4. Tags any failure with the listing it came from

A failed listing fails the whole cycle; no partial feed list is returned.
Retrying is left to the caller's poll loop.
"""
import logging
import threading
from typing import List, Optional

import requests

from ..settings.model import Config
from .base import BaseScraper, FeedSource, FetchError, ScrapeError
from .broadcastify import StateFeedsScraper, TopFeedsScraper
from .filters import filter_feeds
from .models import Feed

logger = logging.getLogger(__name__)


class AcquireError(Exception):
    """An acquisition cycle failed while reading one of the listings."""

    def __init__(self, source: FeedSource, cause: Optional[Exception] = None):
        self.source = source
        self.cause = cause
        message = f"failed to parse {source.value} feeds"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class AcquireCancelledError(AcquireError):
    """The cycle was cancelled before a listing was fetched."""

    def __init__(self, source: FeedSource):
        super().__init__(source)
        self.args = (f"acquisition cancelled before {source.value} fetch",)


def dedup_sorted(feeds: List[Feed]) -> List[Feed]:
    """Sort by id and keep the first record of each id."""
    result: List[Feed] = []
    for feed in sorted(feeds, key=lambda f: f.id):
        if result and result[-1] == feed:
            continue
        result.append(feed)
    return result


class FeedAcquirer:
    """
    Runs acquisition cycles against the listings site.

    Example:
        with FeedAcquirer() as acquirer:
            feeds = acquirer.acquire(config)
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize acquirer.

        Args:
            session: Optional requests session shared by both scrapers
            base_url: Site root, defaults to FEEDWATCH_BASE_URL
            timeout: Per-request timeout in seconds
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.base_url = base_url
        self.timeout = timeout

    def close(self) -> None:
        """Close the HTTP session, unless it was passed in by the caller."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _scrapers(self, config: Config) -> List[BaseScraper]:
        options = dict(session=self.session, base_url=self.base_url, timeout=self.timeout)
        scrapers: List[BaseScraper] = [TopFeedsScraper(**options)]

        state_id = config.misc.state_feeds_id
        if state_id is not None:
            scrapers.append(StateFeedsScraper.for_state_id(state_id, **options))
        return scrapers

    def acquire(self, config: Config, cancel_event: Optional[threading.Event] = None) -> List[Feed]:
        """
        Run one acquisition cycle.

        Args:
            config: Operator config (state feeds id, whitelist, blacklist)
            cancel_event: Checked before each fetch; when set the cycle stops

        Returns:
            Filtered feeds sorted by id, one record per id

        Raises:
            AcquireError: A listing failed to download or parse
        """
        feeds: List[Feed] = []

        for scraper in self._scrapers(config):
            if cancel_event is not None and cancel_event.is_set():
                raise AcquireCancelledError(scraper.SOURCE)
            try:
                feeds.extend(scraper.run())
            except (FetchError, ScrapeError) as e:
                logger.error(f"Acquisition failed on {scraper.SOURCE.value} listing: {e}")
                raise AcquireError(scraper.SOURCE, e) from e

        scraped = len(feeds)
        feeds = dedup_sorted(filter_feeds(config, feeds))
        logger.info(f"Acquired {len(feeds)} feeds ({scraped} scraped)")
        return feeds
