"""
URL dialect detection and time-window rewriting.

Two dashboard dialects are recognised:

- Arkime session links carry the window as epoch seconds in
  ``startTime=`` / ``stopTime=`` query parameters.
- Kibana links carry it as quoted ISO-8601 values in the ``_g`` rison
  fragment: ``time:(from:'...',to:'...')``.
"""
import re

from btu.constants import DIALECT_ARKIME, DIALECT_KIBANA, DIALECT_UNKNOWN
from btu.timeutils import TimezoneLike, to_epoch_seconds, to_iso8601

ARKIME_START_RE = re.compile(r"startTime=\d+")
ARKIME_STOP_RE = re.compile(r"stopTime=\d+")
KIBANA_FROM_RE = re.compile(r"from:'[^']+'")
KIBANA_TO_RE = re.compile(r"to:'[^']+'")


def detect_url_type(url: str) -> str:
    """
    Classify a URL by the time parameters it carries.

    Args:
        url: URL to classify

    Returns:
        "arkime", "kibana" or "unknown"
    """
    if "startTime=" in url and "stopTime=" in url:
        return DIALECT_ARKIME
    if "from:'" in url and "to:'" in url:
        return DIALECT_KIBANA
    return DIALECT_UNKNOWN


def rewrite_arkime_url(url: str, start: str, end: str, tz: TimezoneLike = None) -> str:
    """
    Point an Arkime URL at a new time window.

    Args:
        url: Arkime URL with startTime/stopTime parameters
        start: Window start (local date/time text)
        end: Window end (local date/time text)
        tz: Zone for naive times; None means local

    Returns:
        URL with every startTime/stopTime value replaced

    Raises:
        DateParseError: If either time cannot be parsed
    """
    start_epoch = to_epoch_seconds(start, tz)
    end_epoch = to_epoch_seconds(end, tz)

    updated = ARKIME_STOP_RE.sub(f"stopTime={end_epoch}", url)
    return ARKIME_START_RE.sub(f"startTime={start_epoch}", updated)


def rewrite_kibana_url(url: str, start: str, end: str, tz: TimezoneLike = None) -> str:
    """
    Point a Kibana URL at a new time window.

    Same contract as rewrite_arkime_url, with from/to replaced by
    millisecond-precision UTC instants.
    """
    start_iso = to_iso8601(start, tz)
    end_iso = to_iso8601(end, tz)

    updated = KIBANA_FROM_RE.sub(f"from:'{start_iso}'", url)
    return KIBANA_TO_RE.sub(f"to:'{end_iso}'", updated)


REWRITERS = {
    DIALECT_ARKIME: rewrite_arkime_url,
    DIALECT_KIBANA: rewrite_kibana_url,
}


def rewrite_url(url: str, start: str, end: str, tz: TimezoneLike = None) -> str:
    """Rewrite a URL according to its detected dialect; unknown URLs pass through."""
    rewriter = REWRITERS.get(detect_url_type(url))
    if rewriter is None:
        return url
    return rewriter(url, start, end, tz)
