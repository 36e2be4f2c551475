"""
Config Model - Typed records for the operator YAML configuration.

Each record is a frozen dataclass paired with a FieldSpec table that maps it
to the YAML keys used in Config.yaml. Example document:

    Spike Percentage:
      Jump Required: 0.3
    Weekday Spike Percentages:
      - Saturday:
          Jump Required: 0.5
    Feed Settings:
      - County: Travis
        Spike Percentages:
          Jump Required: 0.4
    Misc:
      State Feeds ID: 44
    Blacklist:
      - ID: 1234
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .fields import (
    SELF,
    FieldSpec,
    Rule,
    VariantCase,
    decode_float,
    decode_str,
    decode_uint,
    enum_decoder,
    probe_variants,
    struct_decoder,
)

if TYPE_CHECKING:
    from ..scrapers.models import Feed


# =============================================================================
# Spike thresholds
# =============================================================================

@dataclass(frozen=True)
class Spike:
    """Thresholds deciding when a listener change is alert-worthy."""
    jump: float = 0.3
    low_listener_increase: float = 0.005
    high_listener_dec: float = 0.02
    high_listener_dec_every: float = 100.0


SPIKE_FIELDS = (
    FieldSpec("jump", "Jump Required", decode_float, default=0.3, minimum=0.0),
    FieldSpec("low_listener_increase", "Low Listener Increase", decode_float, default=0.005, minimum=0.0),
    FieldSpec("high_listener_dec", "High Listener Decrease", decode_float, default=0.02, minimum=0.0),
    FieldSpec("high_listener_dec_every", "High Listener Decrease Per Listeners", decode_float,
              default=100.0, minimum=1.0),
)

decode_spike = struct_decoder(Spike, SPIKE_FIELDS)


@dataclass(frozen=True)
class UnskewedAverage:
    """Smoothing and hysteresis parameters for the statistics engine."""
    reset_pcnt: float = 0.15
    adjust_pcnt: float = 0.0075
    spikes_required: int = 1
    jump_required: float = 4.0


UNSKEWED_AVERAGE_FIELDS = (
    FieldSpec("reset_pcnt", "Reset To Average Percentage", decode_float, default=0.15, minimum=0.0),
    FieldSpec("adjust_pcnt", "Adjust to Average Percentage", decode_float, default=0.0075, minimum=0.0),
    FieldSpec("spikes_required", "Spikes Required", decode_uint, default=1),
    FieldSpec("jump_required", "Jump Required To Set", decode_float, default=4.0, minimum=1.1),
)

decode_unskewed_average = struct_decoder(UnskewedAverage, UNSKEWED_AVERAGE_FIELDS)


# =============================================================================
# Feed identity
# =============================================================================

class IdentKind(Enum):
    NAME = "name"
    ID = "id"
    COUNTY = "county"
    STATE = "state"


@dataclass(frozen=True)
class FeedIdent:
    """Operator-authored predicate selecting feeds by one attribute."""
    kind: IdentKind
    value: Union[str, int]

    @classmethod
    def name(cls, value: str) -> "FeedIdent":
        return cls(IdentKind.NAME, value)

    @classmethod
    def id(cls, value: int) -> "FeedIdent":
        return cls(IdentKind.ID, value)

    @classmethod
    def county(cls, value: str) -> "FeedIdent":
        return cls(IdentKind.COUNTY, value)

    @classmethod
    def state(cls, value: int) -> "FeedIdent":
        return cls(IdentKind.STATE, value)

    def matches_feed(self, feed: "Feed") -> bool:
        """True if the feed's corresponding attribute equals this ident's value."""
        if self.kind is IdentKind.NAME:
            return feed.name == self.value
        if self.kind is IdentKind.ID:
            return feed.id == self.value
        if self.kind is IdentKind.COUNTY:
            return feed.county == self.value
        return feed.state.id == self.value


# Probed in this order; the first key present with a valid value wins
FEED_IDENT_CASES = (
    VariantCase("Name", decode_str, FeedIdent.name),
    VariantCase("ID", decode_uint, FeedIdent.id),
    VariantCase("County", decode_str, FeedIdent.county),
    VariantCase("State ID", decode_uint, FeedIdent.state),
)


def decode_feed_ident(node) -> FeedIdent:
    return probe_variants(FEED_IDENT_CASES, node)


# =============================================================================
# Weekday overrides
# =============================================================================

class Weekday(Enum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        # date.weekday(): Monday == 0
        return _WEEKDAYS_FROM_MONDAY[day.weekday()]

    @classmethod
    def today(cls) -> "Weekday":
        """Local weekday. For composition code; resolvers take the day as input."""
        return cls.from_date(date.today())


_WEEKDAYS_FROM_MONDAY = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
    Weekday.SUNDAY,
)


@dataclass(frozen=True)
class WeekdaySpike:
    """Spike override scoped to one day of the week."""
    day: Weekday
    spike: Spike


def _weekday_case(day: Weekday) -> VariantCase:
    return VariantCase(day.value, decode_spike, lambda spike: WeekdaySpike(day, spike))


WEEKDAY_SPIKE_CASES = tuple(_weekday_case(day) for day in Weekday)


def decode_weekday_spike(node) -> WeekdaySpike:
    return probe_variants(WEEKDAY_SPIKE_CASES, node)


def spike_for_day(weekday_spikes: Tuple[WeekdaySpike, ...], today: Weekday) -> Optional[Spike]:
    """First override for today in sequence order, or None."""
    for weekday_spike in weekday_spikes:
        if weekday_spike.day is today:
            return weekday_spike.spike
    return None


# =============================================================================
# Per-feed settings
# =============================================================================

@dataclass(frozen=True)
class FeedSetting:
    """Override block applying to the feeds matched by ident."""
    ident: FeedIdent
    spike: Spike = field(default_factory=Spike)
    weekday_spikes: Tuple[WeekdaySpike, ...] = ()


FEED_SETTING_FIELDS = (
    FieldSpec("ident", SELF, decode_feed_ident, rule=Rule.FAIL),
    FieldSpec("spike", "Spike Percentages", decode_spike, rule=Rule.DEFAULT, default_factory=Spike),
    FieldSpec("weekday_spikes", "Weekday Spike Percentages", decode_weekday_spike, rule=Rule.ALL),
)

decode_feed_setting = struct_decoder(FeedSetting, FEED_SETTING_FIELDS)


# =============================================================================
# Misc / sorting
# =============================================================================

@dataclass(frozen=True)
class Misc:
    update_time: float = 6.0
    minimum_listeners: int = 15
    state_feeds_id: Optional[int] = None
    max_feeds: int = 10


MISC_FIELDS = (
    # 6.0 is only the fallback; any value at or above 5.0 is kept as is
    FieldSpec("update_time", "Update Time", decode_float, default=6.0, minimum=5.0),
    FieldSpec("minimum_listeners", "Minimum Listeners", decode_uint, default=15),
    FieldSpec("state_feeds_id", "State Feeds ID", decode_uint, default=None),
    FieldSpec("max_feeds", "Maximum Feeds To Display", decode_uint, default=10),
)

decode_misc = struct_decoder(Misc, MISC_FIELDS)


class SortType(Enum):
    LISTENERS = "Listeners"
    JUMP = "Jump"


class SortOrder(Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


@dataclass(frozen=True)
class Sorting:
    sort_type: SortType = SortType.LISTENERS
    sort_order: SortOrder = SortOrder.DESCENDING


SORTING_FIELDS = (
    FieldSpec("sort_type", "Sort By", enum_decoder(SortType), default=SortType.LISTENERS),
    FieldSpec("sort_order", "Sort Order", enum_decoder(SortOrder), default=SortOrder.DESCENDING),
)

decode_sorting = struct_decoder(Sorting, SORTING_FIELDS)


# =============================================================================
# Top level
# =============================================================================

@dataclass(frozen=True)
class Config:
    """Complete operator configuration. Immutable once loaded."""
    global_spike: Spike = field(default_factory=Spike)
    unskewed_avg: UnskewedAverage = field(default_factory=UnskewedAverage)
    weekday_spikes: Tuple[WeekdaySpike, ...] = ()
    feed_settings: Tuple[FeedSetting, ...] = ()
    misc: Misc = field(default_factory=Misc)
    sorting: Sorting = field(default_factory=Sorting)
    blacklist: Tuple[FeedIdent, ...] = ()
    whitelist: Tuple[FeedIdent, ...] = ()


CONFIG_FIELDS = (
    FieldSpec("global_spike", ("Spike Percentage", "Spike Percentages"), decode_spike,
              rule=Rule.DEFAULT, default_factory=Spike),
    FieldSpec("unskewed_avg", "Unskewed Average", decode_unskewed_average,
              rule=Rule.DEFAULT, default_factory=UnskewedAverage),
    FieldSpec("weekday_spikes", "Weekday Spike Percentages", decode_weekday_spike, rule=Rule.ALL),
    FieldSpec("feed_settings", "Feed Settings", decode_feed_setting, rule=Rule.ALL),
    FieldSpec("misc", "Misc", decode_misc, rule=Rule.DEFAULT, default_factory=Misc),
    FieldSpec("sorting", "Feed Sorting", decode_sorting, rule=Rule.DEFAULT, default_factory=Sorting),
    FieldSpec("blacklist", "Blacklist", decode_feed_ident, rule=Rule.ALL),
    FieldSpec("whitelist", "Whitelist", decode_feed_ident, rule=Rule.ALL),
)
