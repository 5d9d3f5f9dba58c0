"""
Shape Resolver - Maps vendor shape types and raw paths to editor geometry
"""

import logging
from typing import Dict, Any, List, Optional

from ..exceptions import ShapeResolutionError
from ..shapes.shape_library import ShapeLibrary
from ..utils.svg_path import get_path_range, has_invalid_numbers, replace_invalid_numbers

logger = logging.getLogger(__name__)

MIN_CUSTOM_SIZE = 0.1


class ResolvedShape:
    """Geometry produced for one shape element."""

    def __init__(self, path: str, view_box: List[float], path_formula: Optional[str] = None,
                 keypoints: Optional[List[float]] = None, special: bool = False,
                 width: Optional[float] = None, height: Optional[float] = None):
        self.path = path
        self.view_box = view_box
        self.path_formula = path_formula
        self.keypoints = keypoints
        self.special = special
        # Set only when the element size had to be floored
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"ResolvedShape(viewBox={self.view_box}, formula={self.path_formula}, special={self.special})"


class ShapeResolver:
    """
    Resolves a shape's path and viewBox.

    Order: shape table match, then the raw path, then the 'custom' special case.
    """

    def __init__(self, library: ShapeLibrary):
        self.library = library

    def resolve(self, shape_type: Optional[str], raw_path: Optional[str],
                width: float, height: float,
                origin_width: float, origin_height: float) -> ResolvedShape:
        """
        Resolve geometry for a shape element.

        Args:
            shape_type: Vendor shape type
            raw_path: Raw SVG path data, may be None
            width: Scaled element width
            height: Scaled element height
            origin_width: Pre-scale width (floored to 1 by the caller)
            origin_height: Pre-scale height (floored to 1 by the caller)

        Returns:
            ResolvedShape

        Raises:
            ShapeResolutionError: when no usable geometry exists
        """
        resolved = None

        entry = self.library.find(shape_type)
        if entry:
            resolved = ResolvedShape(entry.path, list(entry.view_box))
            if entry.path_formula:
                formula = self.library.formula(entry.path_formula)
                if formula is None:
                    logger.warning(f"Path formula '{entry.path_formula}' missing for '{shape_type}', using canonical path")
                else:
                    resolved.path_formula = entry.path_formula
                    resolved.view_box = [width, height]
                    resolved.path = formula.build(width, height)
                    if formula.editable:
                        resolved.keypoints = list(formula.default_value)
        elif raw_path and not has_invalid_numbers(raw_path):
            resolved = ResolvedShape(raw_path, self._fit_view_box(raw_path, origin_width, origin_height))

        if shape_type == 'custom':
            if not raw_path:
                raise ShapeResolutionError("Custom shape without path data", context={'shape_type': shape_type})
            if has_invalid_numbers(raw_path):
                path = replace_invalid_numbers(raw_path)
                resolved = ResolvedShape(path, [0, 0],
                                         width=width if width else MIN_CUSTOM_SIZE,
                                         height=height if height else MIN_CUSTOM_SIZE)
            else:
                resolved = ResolvedShape(raw_path, [0, 0], special=True)
            resolved.view_box = self._fit_view_box(resolved.path, origin_width, origin_height)

        if resolved is None or not resolved.path:
            raise ShapeResolutionError("No shape table match and no usable path",
                                       context={'shape_type': shape_type})

        if any(v <= 0 for v in resolved.view_box):
            raise ShapeResolutionError("Degenerate viewBox",
                                       context={'shape_type': shape_type, 'viewBox': resolved.view_box})

        return resolved

    def _fit_view_box(self, path: str, origin_width: float, origin_height: float) -> List[float]:
        """
        Derive a viewBox from the path extent that matches the element aspect ratio.
        """
        try:
            path_range = get_path_range(path)
        except Exception as e:
            raise ShapeResolutionError("Unparseable path data", cause=e) from e

        if path_range is None:
            raise ShapeResolutionError("Empty path data")

        _, _, max_x, max_y = path_range
        if max_x <= 0 or max_y <= 0:
            raise ShapeResolutionError("Path extent has no area",
                                       context={'maxX': max_x, 'maxY': max_y})

        if max_x / max_y > origin_width / origin_height:
            return [max_x, max_x * origin_height / origin_width]
        return [max_y * origin_width / origin_height, max_y]
