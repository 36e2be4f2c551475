"""
Broadcastify Listing Scrapers

Two page shapes are supported:
- Top listing (/listen/top): feeds from any state, location column holds a
  state link and optionally a county link
- State listing (/listen/stid/{id}): feeds from one state; the page may
  open with an "areawide" table that is skipped

Parsing fails loudly on missing landmarks instead of guessing, so a site
redesign shows up as a precise NoElementError.
"""
import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from ..constants import (
    CONFIG_STATE_ABBREVIATION,
    COUNTY_LINK_PREFIX,
    FEED_TABLE_CLASS,
    LISTENER_CLASSES,
    NUMEROUS_COUNTY,
    STATE_ALERT_CLASS,
    STATE_ALERT_TAG,
    STATE_FEEDS_PATH,
    STATE_ID_NAME_CLASS,
    TOP_ALERT_CLASS,
    TOP_FEEDS_PATH,
    TOP_ID_NAME_CLASS,
)
from .base import (
    BaseScraper,
    FailedIntParseError,
    FeedSource,
    NoElementError,
    NoneFoundError,
)
from .models import Feed, State

logger = logging.getLogger(__name__)

_LISTENER_SELECTOR = "".join(f".{cls}" for cls in LISTENER_CLASSES)


# =============================================================================
# Row helpers
# =============================================================================

def parse_link_id(url: str) -> Optional[str]:
    """
    Trailing path segment of a link, e.g. '/listen/feed/123' -> '123'.

    Returns None when the link has no '/' or ends with one.
    """
    pos = url.rfind("/")
    if pos == -1 or pos + 1 >= len(url):
        return None
    return url[pos + 1:]


def parse_uint(text: str, field: str) -> int:
    """Parse an unsigned ASCII integer, raising FailedIntParseError otherwise."""
    if not (text.isascii() and text.isdigit()):
        raise FailedIntParseError(field, ValueError(f"invalid digit found in {text!r}"))
    return int(text)


def parse_id_and_name(row, class_name: str) -> Tuple[int, str]:
    """Feed id and name from the anchor inside the given column class."""
    anchor = row.select_one(f".{class_name} a")
    if anchor is None:
        raise NoElementError("id and name")

    href = anchor.get("href")
    link_id = parse_link_id(href) if href else None
    if link_id is None:
        raise NoElementError("feed id")

    return parse_uint(link_id, "feed id"), anchor.get_text()


def parse_listeners(row) -> int:
    node = row.select_one(_LISTENER_SELECTOR)
    if node is None:
        raise NoElementError("feed listeners")
    return parse_uint(node.get_text().rstrip(), "feed listeners")


def _node_text(node) -> Optional[str]:
    return node.get_text() if node is not None else None


# =============================================================================
# Top listing
# =============================================================================

def _parse_top_location(row) -> Tuple[State, str]:
    # The top listing spans many states and counties, so nothing is assumed
    cells = row.find_all("td")
    if len(cells) < 2:
        raise NoElementError("location")

    hyperlinks = [
        (link["href"], link.get_text())
        for link in cells[1].find_all("a")
        if link.get("href") is not None
    ]
    if not hyperlinks:
        raise NoElementError("state data")

    state_link, state_abbreviation = hyperlinks[0]
    state_id = parse_link_id(state_link)
    if state_id is None:
        raise NoElementError("state id")
    state = State(parse_uint(state_id, "state id"), state_abbreviation)

    county = NUMEROUS_COUNTY
    if len(hyperlinks) > 1 and hyperlinks[1][0].startswith(COUNTY_LINK_PREFIX):
        county = hyperlinks[1][1]

    return state, county


def scrape_top(html: str) -> List[Feed]:
    """
    Parse the top feeds listing.

    Args:
        html: Raw page HTML

    Returns:
        Feeds in page order

    Raises:
        NoElementError: A row is missing a landmark
        FailedIntParseError: An id or listener count is not numeric
        NoneFoundError: No feed rows were found
    """
    soup = BeautifulSoup(html, "html.parser")
    rows = soup.select(f".{FEED_TABLE_CLASS} tr")[1:]
    logger.debug(f"Top listing has {len(rows)} data rows")

    feeds = []
    for row in rows:
        feed_id, name = parse_id_and_name(row, TOP_ID_NAME_CLASS)
        state, county = _parse_top_location(row)

        feeds.append(Feed(
            id=feed_id,
            name=name,
            listeners=parse_listeners(row),
            state=state,
            county=county,
            alert=_node_text(row.select_one(f".{TOP_ALERT_CLASS}")),
        ))

    if not feeds:
        raise NoneFoundError()

    return feeds


# =============================================================================
# State listing
# =============================================================================

def scrape_state(state: State, html: str) -> List[Feed]:
    """
    Parse a single state's feed listing.

    Args:
        state: State the page belongs to; copied onto every feed
        html: Raw page HTML

    Returns:
        Feeds in page order

    Raises:
        NoElementError: No feed table, or a row is missing a landmark
        FailedIntParseError: An id or listener count is not numeric
        NoneFoundError: The feed table has no data rows
    """
    soup = BeautifulSoup(html, "html.parser")

    # When present, the areawide table comes first; its layout is not
    # supported, so only the second table is read
    tables = soup.select(f".{FEED_TABLE_CLASS}", limit=2)
    if not tables:
        raise NoElementError("feed data")
    table = tables[1] if len(tables) >= 2 else tables[0]
    logger.debug(f"State {state.id} listing has {len(tables)} feed tables")

    feeds = []
    for row in table.find_all("tr")[1:]:
        feed_id, name = parse_id_and_name(row, STATE_ID_NAME_CLASS)

        county_link = row.find("a")
        county = county_link.get_text() if county_link is not None else NUMEROUS_COUNTY

        feeds.append(Feed(
            id=feed_id,
            name=name,
            listeners=parse_listeners(row),
            state=state,
            county=county,
            alert=_node_text(row.select_one(f"{STATE_ALERT_TAG}.{STATE_ALERT_CLASS}")),
        ))

    if not feeds:
        raise NoneFoundError()

    return feeds


# =============================================================================
# Scrapers
# =============================================================================

class TopFeedsScraper(BaseScraper):
    """Scraper for the top 50 feeds listing."""

    SCRAPER_NAME = "broadcastify_top"
    SOURCE = FeedSource.TOP

    def get_url(self) -> str:
        return f"{self.base_url}{TOP_FEEDS_PATH}"

    def parse_page(self, html: str) -> List[Feed]:
        return scrape_top(html)


class StateFeedsScraper(BaseScraper):
    """Scraper for one state's feed listing."""

    SCRAPER_NAME = "broadcastify_state"
    SOURCE = FeedSource.STATE

    def __init__(self, state: State, session=None, base_url=None, timeout=None):
        super().__init__(session, base_url, timeout)
        self.state = state

    @classmethod
    def for_state_id(cls, state_id: int, **kwargs) -> "StateFeedsScraper":
        """Scraper for the state named by 'State Feeds ID' in the config."""
        return cls(State(state_id, CONFIG_STATE_ABBREVIATION), **kwargs)

    def get_url(self) -> str:
        return f"{self.base_url}{STATE_FEEDS_PATH.format(state_id=self.state.id)}"

    def parse_page(self, html: str) -> List[Feed]:
        return scrape_state(self.state, html)
