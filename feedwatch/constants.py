"""
Centralized Constants - SINGLE SOURCE OF TRUTH

Broadcastify URL layout and the page landmarks the scrapers rely on.
If the site markup drifts, this is the file to update.

DO NOT duplicate these definitions in other files.
"""

# =============================================================================
# URL LAYOUT
# =============================================================================

DEFAULT_BASE_URL = "http://www.broadcastify.com"

TOP_FEEDS_PATH = "/listen/top"
STATE_FEEDS_PATH = "/listen/stid/{state_id}"
FEED_PAGE_PATH = "/listen/feed/{feed_id}"

# County links on the top page start with this prefix
COUNTY_LINK_PREFIX = "/listen/ctid"


# =============================================================================
# PAGE LANDMARKS (CSS classes)
# =============================================================================

# Table holding feed rows (both page shapes)
FEED_TABLE_CLASS = "btable"

# Column holding the id + name anchor
TOP_ID_NAME_CLASS = "w100"
STATE_ID_NAME_CLASS = "w1p"

# Listener count cell carries both classes
LISTENER_CLASSES = ("c", "m")

# Alert markers
TOP_ALERT_CLASS = "messageBox"
STATE_ALERT_TAG = "font"
STATE_ALERT_CLASS = "fontRed"


# =============================================================================
# FEED VALUES
# =============================================================================

# County used when a feed spans several counties (or none is linked)
NUMEROUS_COUNTY = "Numerous"

# Abbreviation given to the state named by 'State Feeds ID' in the config
CONFIG_STATE_ABBREVIATION = "CS"
