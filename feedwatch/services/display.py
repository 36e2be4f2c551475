"""
Display Selection - Which feeds to show, and in what order.

Applies the operator's Misc and Feed Sorting settings to a feed snapshot:
minimum listener floor, sort by listeners or jump, and the display cap.
The jump ratio comes from the statistics engine through jump_for().
"""
from typing import Callable, Iterable, List, Optional

from ..scrapers.models import Feed
from ..settings.model import Config, SortOrder, SortType

JumpLookup = Callable[[Feed], float]


def select_for_display(
    feeds: Iterable[Feed],
    config: Config,
    jump_for: Optional[JumpLookup] = None,
) -> List[Feed]:
    """
    Pick the feeds to display.

    Args:
        feeds: Acquired feeds
        config: Operator config (misc.minimum_listeners, misc.max_feeds, sorting)
        jump_for: Jump ratio per feed, required when sorting by jump

    Returns:
        At most misc.max_feeds feeds, ordered per config.sorting

    Raises:
        ValueError: Sorting by jump without a jump_for lookup.
    """
    sorting = config.sorting

    if sorting.sort_type is SortType.JUMP:
        if jump_for is None:
            raise ValueError("sorting by jump requires a jump_for lookup")
        key = jump_for
    else:
        key = _listeners

    shown = [feed for feed in feeds if feed.listeners >= config.misc.minimum_listeners]
    shown.sort(key=key, reverse=sorting.sort_order is SortOrder.DESCENDING)
    return shown[:config.misc.max_feeds]


def _listeners(feed: Feed) -> float:
    return feed.listeners
