"""Operator configuration: typed model, YAML loader and threshold resolver."""

from .loader import ConfigError, ConfigIOError, ConfigParseError, load_config, parse_config
from .model import (
    Config,
    FeedIdent,
    FeedSetting,
    IdentKind,
    Misc,
    SortOrder,
    SortType,
    Sorting,
    Spike,
    UnskewedAverage,
    Weekday,
    WeekdaySpike,
)
from .resolver import get_feed_spike

__all__ = [
    "Config",
    "ConfigError",
    "ConfigIOError",
    "ConfigParseError",
    "FeedIdent",
    "FeedSetting",
    "IdentKind",
    "Misc",
    "SortOrder",
    "SortType",
    "Sorting",
    "Spike",
    "UnskewedAverage",
    "Weekday",
    "WeekdaySpike",
    "get_feed_spike",
    "load_config",
    "parse_config",
]
