"""
Reading and writing bookmark exports.

Documents are handled as plain text; ``-`` stands for stdin/stdout so the
CLI composes with pipes (``btu update - --stdout | xclip``).
"""
import sys
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Union

from btu.constants import DEFAULT_OUTPUT_TEMPLATE

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_document(path: PathLike) -> str:
    """
    Read a bookmarks export.

    Args:
        path: File path, or "-" for stdin

    Returns:
        Document text
    """
    if str(path) == "-":
        return sys.stdin.read()

    path = Path(path)
    with open(path, "r", encoding="utf-8", newline="") as f:
        content = f.read()
    logger.debug(f"Read {len(content)} characters from {path}")
    return content


def default_output_name(day: Optional[date] = None,
                        template: str = DEFAULT_OUTPUT_TEMPLATE) -> str:
    """File name for an updated export, stamped with the given (or current UTC) date."""
    day = day or datetime.now(timezone.utc).date()
    return template.format(date=day.isoformat())


def write_document(content: str, path: PathLike) -> Optional[Path]:
    """
    Write an updated export.

    Args:
        content: Document text
        path: Output file path, or "-" for stdout

    Returns:
        The written path, or None when writing to stdout
    """
    if str(path) == "-":
        sys.stdout.write(content)
        return None

    # Ensure parent directory exists
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.debug(f"Wrote {len(content)} characters to {path}")
    return path
