"""
Bookmark document rewriting.

Anchors are located by pattern, not by parsing the export: a slot matches
its heading text (``Hunt 3``, ``test2``...), any run of text without a
``<``, then the next ``<A ... HREF="``. The URL up to the closing quote is
rewritten for its dialect. Everything outside the captured URLs is
returned byte-for-byte.
"""
import re
import logging
from collections.abc import Mapping
from typing import List, Optional, Tuple

from btu.constants import (
    HUNT_PREFIX, TEST_PREFIX, DIALECT_UNKNOWN,
    STATUS_APPLIED, STATUS_SKIPPED, STATUS_UNMATCHED,
)
from btu.dialects import REWRITERS, detect_url_type
from btu.models import SlotOutcome, TimeRange, UpdateResult
from btu.timeutils import TimezoneLike, check_order

logger = logging.getLogger(__name__)


def slot_suffix(key: str, prefix: str) -> str:
    """Slot number as text: "Hunt3" -> "3"."""
    return key.replace(prefix, "")


def slot_pattern(prefix: str, suffix: str, strict: bool = False) -> "re.Pattern":
    """
    Build the heading-to-anchor pattern for one slot.

    Group 1 is everything from the heading through ``HREF="``; group 2 is
    the URL. Without ``strict`` the suffix is not bounded, so slot 1 also
    matches a "Hunt11" heading.
    """
    guard = r"(?!\d)" if strict else ""
    return re.compile(
        rf'({re.escape(prefix)}\s*{re.escape(suffix)}{guard}[^<]*<A[^>]*HREF=")([^"]+)',
        re.IGNORECASE,
    )


def _validate_ranges(groups, tz: TimezoneLike) -> None:
    # Parse every configured time before touching the document; once per slot.
    for _, slots in groups:
        for key, value in slots.items():
            time_range = TimeRange.coerce(value)
            if time_range.is_configured:
                check_order(time_range.start, time_range.end, tz)


def _apply_slot(content: str, prefix: str, key: str, time_range: TimeRange,
                tz: TimezoneLike, strict: bool) -> Tuple[str, SlotOutcome]:
    outcome = SlotOutcome(group=prefix, key=key, status=STATUS_UNMATCHED)
    pattern = slot_pattern(prefix, slot_suffix(key, prefix), strict)

    def replace(match):
        head, url = match.group(1), match.group(2)
        url_type = detect_url_type(url)
        if url_type == DIALECT_UNKNOWN:
            outcome.unknown += 1
            return head + url
        outcome.rewritten += 1
        return head + REWRITERS[url_type](url, time_range.start, time_range.end, tz)

    updated = pattern.sub(replace, content)
    if outcome.matched:
        outcome.status = STATUS_APPLIED
        logger.debug(f"{key}: rewrote {outcome.rewritten} URL(s), left {outcome.unknown} unknown")
    else:
        logger.warning(f"{key} is configured but no matching bookmark was found")
    return updated, outcome


def update_document_report(content: str, hunts: Optional[Mapping] = None,
                           tests: Optional[Mapping] = None, tz: TimezoneLike = None,
                           strict: bool = False) -> UpdateResult:
    """
    Rewrite the time windows of every configured slot in a bookmarks export.

    Args:
        content: Full bookmarks HTML text
        hunts: Slot key -> time range for Hunt folders
        tests: Slot key -> time range for Test folders
        tz: Zone for naive times; None means local
        strict: Refuse to let a slot number match a longer number

    Returns:
        UpdateResult with the new text and one outcome per slot

    Raises:
        DateParseError: If any configured time is invalid; nothing is rewritten
    """
    groups = [(HUNT_PREFIX, hunts or {}), (TEST_PREFIX, tests or {})]
    _validate_ranges(groups, tz)

    updated = content
    outcomes: List[SlotOutcome] = []
    for prefix, slots in groups:
        for key, value in slots.items():
            time_range = TimeRange.coerce(value)
            if not time_range.is_configured:
                outcomes.append(SlotOutcome(group=prefix, key=key, status=STATUS_SKIPPED))
                continue
            updated, outcome = _apply_slot(updated, prefix, key, time_range, tz, strict)
            outcomes.append(outcome)

    return UpdateResult(content=updated, original=content, outcomes=outcomes)


def update_document(content: str, hunts: Optional[Mapping] = None,
                    tests: Optional[Mapping] = None, tz: TimezoneLike = None,
                    strict: bool = False) -> str:
    """Rewrite a bookmarks export and return only the new text."""
    return update_document_report(content, hunts, tests, tz=tz, strict=strict).content
