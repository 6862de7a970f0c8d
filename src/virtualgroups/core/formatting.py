"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/formatting.py
Group title formatting: "{0}" is the group label, "{1}" the number of items.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)

INVALID_FORMAT_PREFIX = "Invalid group format: "


def format_group_title(
        title: str,
        count: int,
        title_format: Optional[str],
        title_singular_format: Optional[str] = None
) -> str:
    """
    Render a group title with its item count.

    Returns the title unchanged when no format is configured. Uses the singular
    format for one-item groups when one is given. A template that cannot be
    rendered yields a diagnostic title instead of raising.

    Examples:
        format_group_title("Eng", 3, "{0} [{1} items]")  → "Eng [3 items]"
        format_group_title("Eng", 1, "{0} [{1} items]", "{0} [{1} item]")  → "Eng [1 item]"
        format_group_title("Eng", 3, "{0} [{2}]")  → "Invalid group format: {0} [{2}]"
    """
    if not title_format:
        return title

    fmt = title_singular_format if count == 1 and title_singular_format else title_format
    try:
        return fmt.format(title, count)
    except (IndexError, KeyError, ValueError, AttributeError, TypeError) as e:
        logger.warning(f"Cannot render group title with format {fmt!r}: {e}")
        return INVALID_FORMAT_PREFIX + fmt
