"""
feedwatch - Broadcastify listener-spike monitor core.

Acquires the live feed listings, filters them against operator rules and
resolves which alert thresholds apply to each feed on a given weekday.
"""

__version__ = "1.0.0"
