"""
Dashboard link extraction for previews.
"""
import re
from typing import List

from btu.constants import DIALECT_UNKNOWN
from btu.dialects import detect_url_type
from btu.models import ExtractedUrl

ANCHOR_RE = re.compile(r'<A[^>]*HREF="([^"]+)"[^>]*>([^<]*)<', re.IGNORECASE)


def extract_urls(content: str) -> List[ExtractedUrl]:
    """
    List the Arkime and Kibana links in a bookmarks document.

    Args:
        content: Bookmarks HTML text

    Returns:
        ExtractedUrl records in document order; other links are left out
    """
    found = []
    for match in ANCHOR_RE.finditer(content):
        url, title = match.group(1), match.group(2)
        url_type = detect_url_type(url)
        if url_type != DIALECT_UNKNOWN:
            found.append(ExtractedUrl(title=title, url=url, type=url_type))
    return found
