"""
Geometry - Pure coordinate helpers for lines and grouped elements
"""

import math
import logging
from typing import List, Dict, Any, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _rotation_matrix(angle_deg: float) -> np.ndarray:
    """Clockwise-positive rotation matrix for a y-down coordinate system."""
    rad = math.radians(angle_deg)
    cos_a, sin_a = math.cos(rad), math.sin(rad)
    return np.array([[cos_a, -sin_a],
                     [sin_a, cos_a]])


def rotate_segment(start: Point, end: Point, angle_deg: float) -> Tuple[Point, Point, Point]:
    """
    Rotate a line segment about its own midpoint.

    The rotated endpoints are renormalized so the top-left corner of their
    bounding box sits at the origin.

    Args:
        start: Start point (x, y)
        end: End point (x, y)
        angle_deg: Rotation angle in degrees, clockwise-positive

    Returns:
        Tuple of (start, end, offset) where offset is the shift of the
        bounding-box origin that the caller must add to the element position
    """
    points = np.array([start, end], dtype=float)
    mid = points.mean(axis=0)

    rotated = (points - mid) @ _rotation_matrix(angle_deg).T + mid

    before_min = points.min(axis=0)
    after_min = rotated.min(axis=0)

    adjusted = rotated - after_min
    offset = after_min - before_min

    return (
        (float(adjusted[0][0]), float(adjusted[0][1])),
        (float(adjusted[1][0]), float(adjusted[1][1])),
        (float(offset[0]), float(offset[1])),
    )


def flip_siblings(elements: List[Dict[str, Any]], axis: str) -> List[Dict[str, Any]]:
    """
    Mirror a set of sibling elements inside their joint bounding box.

    Args:
        elements: Raw element dicts with left, top, width, height
        axis: 'y' mirrors left positions (horizontal flip),
              'x' mirrors top positions (vertical flip)

    Returns:
        New list of element copies; the inputs are left untouched
    """
    if not elements:
        return []
    if axis not in ('x', 'y'):
        raise ValueError(f"Unknown flip axis: {axis}")

    min_x = min(el['left'] for el in elements)
    max_x = max(el['left'] + (el.get('width') or 0) for el in elements)
    min_y = min(el['top'] for el in elements)
    max_y = max(el['top'] + (el.get('height') or 0) for el in elements)

    center_x = (min_x + max_x) / 2
    center_y = (min_y + max_y) / 2

    flipped = []
    for el in elements:
        new_el = dict(el)
        if axis == 'y':
            new_el['left'] = 2 * center_x - el['left'] - (el.get('width') or 0)
        else:
            new_el['top'] = 2 * center_y - el['top'] - (el.get('height') or 0)
        flipped.append(new_el)

    return flipped


def rotated_child_position(x: float, y: float, w: float, h: float,
                           ox: float, oy: float, angle_deg: float) -> Point:
    """
    Position of a child point after its container rotates about its centre.

    Args:
        x, y, w, h: Container origin and size
        ox, oy: Child offset inside the unrotated container
        angle_deg: Container rotation in degrees

    Returns:
        (x, y) of the child point in the parent coordinate space
    """
    rad = math.radians(angle_deg)

    center_x = x + w / 2
    center_y = y + h / 2

    rel_x = ox - w / 2
    rel_y = oy - h / 2

    rotated_x = rel_x * math.cos(rad) + rel_y * math.sin(rad)
    rotated_y = -rel_x * math.sin(rad) + rel_y * math.cos(rad)

    return (center_x + rotated_x, center_y + rotated_y)
