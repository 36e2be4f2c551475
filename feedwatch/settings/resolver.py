"""
Threshold Resolver - Picks the Spike that applies to a feed on a weekday.

Precedence:
1. The first Feed Settings entry whose ident matches the feed
   - its first weekday override for today, else its own spike
2. No entry matched
   - the first global weekday override for today, else the global spike

Feed Settings are first-match-wins, so operators must list narrow rules
(a single feed ID) before broad ones (a whole state).
"""
from typing import TYPE_CHECKING

from .model import Config, Spike, Weekday, spike_for_day

if TYPE_CHECKING:
    from ..scrapers.models import Feed


def get_feed_spike(config: Config, feed: "Feed", today: Weekday) -> Spike:
    """
    Resolve the alert thresholds for a feed.

    Args:
        config: Loaded operator config
        feed: Feed being evaluated
        today: Current weekday, supplied by the caller

    Returns:
        The Spike stored in config (not a copy). Always returns a value.
    """
    setting = next(
        (s for s in config.feed_settings if s.ident.matches_feed(feed)),
        None,
    )

    if setting is not None:
        override = spike_for_day(setting.weekday_spikes, today)
        return override if override is not None else setting.spike

    override = spike_for_day(config.weekday_spikes, today)
    return override if override is not None else config.global_spike
