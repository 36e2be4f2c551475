"""
Scraping Package

Broadcastify listing acquisition:
- Top and state listing scrapers (BeautifulSoup)
- Whitelist / blacklist filtering
- Acquisition orchestrator with sort and dedup
"""

from .base import (
    BaseScraper,
    FailedIntParseError,
    FeedSource,
    FetchError,
    NoElementError,
    NoneFoundError,
    ScrapeError,
)
from .broadcastify import StateFeedsScraper, TopFeedsScraper, scrape_state, scrape_top
from .filters import filter_feeds
from .models import Feed, State
from .orchestrator import AcquireCancelledError, AcquireError, FeedAcquirer

__all__ = [
    "AcquireCancelledError",
    "AcquireError",
    "BaseScraper",
    "FailedIntParseError",
    "Feed",
    "FeedAcquirer",
    "FeedSource",
    "FetchError",
    "NoElementError",
    "NoneFoundError",
    "ScrapeError",
    "State",
    "StateFeedsScraper",
    "TopFeedsScraper",
    "filter_feeds",
    "scrape_state",
    "scrape_top",
]
