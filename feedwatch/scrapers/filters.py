"""Whitelist / blacklist filtering of scraped feeds."""
from typing import Iterable, List

from ..settings.model import Config
from .models import Feed


def filter_feeds(config: Config, feeds: Iterable[Feed]) -> List[Feed]:
    """
    Apply the config's whitelist then blacklist, keeping survivor order.

    - Non-empty whitelist: keep feeds matched by any whitelist entry
    - Non-empty blacklist: then drop feeds matched by any blacklist entry
    """
    result = list(feeds)

    if config.whitelist:
        result = [
            feed for feed in result
            if any(ident.matches_feed(feed) for ident in config.whitelist)
        ]

    if config.blacklist:
        result = [
            feed for feed in result
            if not any(ident.matches_feed(feed) for ident in config.blacklist)
        ]

    return result
