"""
Feed Records - Canonical shapes produced by the scrapers.

Records are rebuilt every acquisition cycle; the feed id is the only identity
carried between cycles.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class State:
    """US state as listed by Broadcastify."""
    id: int
    abbreviation: str


@dataclass(eq=False)
class Feed:
    """
    One listed audio stream.

    Equality and hashing use the feed id only, so two records for the same
    feed compare equal even when their listener counts differ.
    """
    id: int
    name: str
    listeners: int
    state: State
    county: str
    alert: Optional[str] = None

    def __eq__(self, other):
        if not isinstance(other, Feed):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    def __repr__(self):
        return f"<Feed {self.id} '{self.name}' listeners={self.listeners}>"
