"""
Constants for BTU.

Slot layout and naming defaults. Several of these are also exposed
through the config system.
"""

# Slot groups
HUNT_PREFIX = "Hunt"
TEST_PREFIX = "Test"
HUNT_SLOT_COUNT = 7
TEST_SLOT_COUNT = 2

# URL dialects
DIALECT_ARKIME = "arkime"
DIALECT_KIBANA = "kibana"
DIALECT_UNKNOWN = "unknown"

# Slot outcome statuses
STATUS_SKIPPED = "skipped"
STATUS_UNMATCHED = "unmatched"
STATUS_APPLIED = "applied"

# Output naming
DEFAULT_OUTPUT_TEMPLATE = "bookmarks_updated_{date}.html"

# Display limits
PREVIEW_URL_LENGTH = 80
