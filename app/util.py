"""Utility functions for the cat feed screen."""
import re
from typing import Optional

from model import ImageItem


_COUNT_PATTERN = re.compile(r'^([+-]?)([0-9]+)$')

# Longer digit runs are clamped; only their comparison to the bounds matters
_MAX_COUNT_DIGITS = 9


def parse_count(text: Optional[str]) -> Optional[int]:
    """Parse the raw text of the count field.

    Args:
        text: Raw text as typed by the user

    Returns:
        The integer value, or None if the text is not a whole number
    """
    if text is None:
        return None

    match = _COUNT_PATTERN.match(text.strip())
    if not match:
        return None

    sign, digits = match.groups()
    digits = digits.lstrip('0') or '0'
    if len(digits) > _MAX_COUNT_DIGITS:
        digits = '1' + '0' * _MAX_COUNT_DIGITS

    value = int(digits)
    return -value if sign == '-' else value


def image_key(item: ImageItem, index: int) -> str:
    """Generate a grid key for an image.

    Args:
        item: Image being rendered
        index: Position in the grid

    Returns:
        Key like {id}-{index}
    """
    # Placeholders have no id; keep the key shape the grid expects
    image_id = item.id if item.id is not None else 'undefined'
    return f"{image_id}-{index}"


def format_title(count: int) -> str:
    """Format the screen title for the number of displayed cats.

    Args:
        count: Number of images currently displayed

    Returns:
        Title string
    """
    if count:
        return f"{count} number of cats has been found!"
    return "Random Cat Generator"
