"""
SVG path utilities
"""

import re
import logging
from typing import Optional, Tuple

from svgelements import Path

logger = logging.getLogger(__name__)

INVALID_NUMBER_PATTERN = re.compile(r'-?(?:NaN|Infinity)')


def has_invalid_numbers(path: str) -> bool:
    """Check whether a path string carries NaN/Infinity tokens."""
    return bool(path) and INVALID_NUMBER_PATTERN.search(path) is not None


def replace_invalid_numbers(path: str) -> str:
    """Replace NaN/Infinity tokens with 0."""
    return INVALID_NUMBER_PATTERN.sub('0', path)


def get_path_range(path: str) -> Optional[Tuple[float, float, float, float]]:
    """
    Compute the coordinate bounding box of a path.

    Args:
        path: SVG path data string

    Returns:
        (min_x, min_y, max_x, max_y), or None for an empty path
    """
    if not path or not path.strip():
        return None
    bbox = Path(path).bbox()
    if bbox is None:
        return None
    min_x, min_y, max_x, max_y = bbox
    return (float(min_x), float(min_y), float(max_x), float(max_y))
