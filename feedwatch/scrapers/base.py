"""
Base Scraper - Abstract template for the Broadcastify listing scrapers.

Provides common functionality:
- Page fetching through a shared requests session
- Timeout and User-Agent handling
- The scrape error taxonomy

Subclasses implement get_url() and parse_page().
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

import requests

from .. import config as runtime
from .models import Feed

logger = logging.getLogger(__name__)


class FeedSource(Enum):
    """Which listing page a scrape came from."""
    TOP = "top"
    STATE = "state"


# =============================================================================
# Errors
# =============================================================================

class ScrapeError(Exception):
    """Base exception for page parsing errors."""
    pass


class NoElementError(ScrapeError):
    """An expected page landmark was not found."""

    def __init__(self, landmark: str):
        self.landmark = landmark
        super().__init__(f"unable to find element that contains {landmark} information")


class FailedIntParseError(ScrapeError):
    """A landmark was found but its text is not an unsigned integer."""

    def __init__(self, field: str, cause: Exception):
        self.field = field
        self.cause = cause
        super().__init__(f"unable to parse {field} information: {cause}")


class NoneFoundError(ScrapeError):
    """The page parsed but held no feeds."""

    def __init__(self):
        super().__init__("no feeds found")


class FetchError(Exception):
    """The page could not be downloaded."""

    def __init__(self, url: str, cause: Exception):
        self.url = url
        self.cause = cause
        super().__init__(f"failed to fetch {url}: {cause}")


# =============================================================================
# Base scraper
# =============================================================================

class BaseScraper(ABC):
    """
    Abstract base class for listing scrapers.

    Subclasses should set class attributes:
    - SCRAPER_NAME: Unique scraper identifier
    - SOURCE: FeedSource this scraper reads
    """

    # Override in subclass
    SCRAPER_NAME: str = "base"
    SOURCE: FeedSource = FeedSource.TOP

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize scraper.

        Args:
            session: Optional requests session (one is created if omitted)
            base_url: Site root, defaults to FEEDWATCH_BASE_URL
            timeout: Per-request timeout in seconds, defaults to FEEDWATCH_HTTP_TIMEOUT
        """
        self.session = session or requests.Session()
        self.base_url = (base_url or runtime.get_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else runtime.get_http_timeout()

    @abstractmethod
    def get_url(self) -> str:
        """URL of the listing page."""
        pass

    @abstractmethod
    def parse_page(self, html: str) -> List[Feed]:
        """
        Parse a listing page.

        Raises:
            ScrapeError: If the page does not have the expected shape.
        """
        pass

    def fetch_page(self, url: str) -> str:
        """
        Fetch a page.

        Raises:
            FetchError: On connection errors, timeouts and non-2xx responses.
        """
        logger.debug(f"[{self.SCRAPER_NAME}] GET {url}")
        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={
                    "User-Agent": runtime.get_user_agent(),
                    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9",
                },
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise FetchError(url, e) from e

        return response.text

    def run(self) -> List[Feed]:
        """Fetch and parse the listing page."""
        html = self.fetch_page(self.get_url())
        feeds = self.parse_page(html)
        logger.info(f"[{self.SCRAPER_NAME}] Scraped {len(feeds)} feeds")
        return feeds
