"""
BTU - Bookmark Time Updater

Re-points saved Arkime and Kibana bookmarks at a new time window.

Design Principles:
- The bookmarks export is treated as text; only the URLs under matching
  Hunt/Test headings change, everything else is returned untouched
- Core functions are pure: callers own the document and the time ranges
- Bad time input fails loudly instead of leaking NaN into a URL

Example Usage:
    >>> from btu import SlotGroup, update_document_report
    >>> hunts = SlotGroup.hunts()
    >>> hunts.set("Hunt3", "2024-01-01T00:00", "2024-01-02T00:00")
    >>> result = update_document_report(html, hunts, SlotGroup.tests(), tz="UTC")
    >>> result.summary()
    '1 of 1 configured slots were applied'
"""

__version__ = "0.3.1"
__author__ = "BTU Contributors"

# Core transformation API
from btu.dialects import (
    detect_url_type,
    rewrite_arkime_url,
    rewrite_kibana_url,
    rewrite_url,
)
from btu.rewriter import update_document, update_document_report
from btu.extract import extract_urls

# Models
from btu.models import TimeRange, SlotGroup, ExtractedUrl, SlotOutcome, UpdateResult

# Errors
from btu.timeutils import DateParseError, UnknownTimezoneError

# Configuration
from btu.config import BtuConfig, get_config, init_config

# Document I/O
from btu.documents import read_document, write_document, default_output_name

__all__ = [
    # Core
    "detect_url_type",
    "rewrite_arkime_url",
    "rewrite_kibana_url",
    "rewrite_url",
    "update_document",
    "update_document_report",
    "extract_urls",
    # Models
    "TimeRange",
    "SlotGroup",
    "ExtractedUrl",
    "SlotOutcome",
    "UpdateResult",
    # Errors
    "DateParseError",
    "UnknownTimezoneError",
    # Config
    "BtuConfig",
    "get_config",
    "init_config",
    # Document I/O
    "read_document",
    "write_document",
    "default_output_name",
]
