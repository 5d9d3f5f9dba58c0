"""
Element Extractor - Helpers for reading raw element lists
"""

import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

CONTAINER_TYPES = ('group', 'diagram')
LINEAR_FIELDS = ('left', 'top', 'width', 'height')


class ElementExtractor:
    """
    Helper class for ordering, classifying and scaling raw elements.
    """

    @staticmethod
    def sort_by_order(elements: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Stable sort by the raw 'order' field; elements without one keep their place at 0."""
        return sorted(elements, key=lambda e: e.get('order') or 0)

    @staticmethod
    def is_container(element: Dict[str, Any]) -> bool:
        return element.get('type') in CONTAINER_TYPES

    @staticmethod
    def get_slide_elements(raw_slide: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Slide elements followed by layout elements."""
        return list(raw_slide.get('elements') or []) + list(raw_slide.get('layoutElements') or [])

    @staticmethod
    def origin_box(element: Dict[str, Any]) -> Dict[str, float]:
        """
        Pre-scale box of an element; zero or missing sizes are floored to 1.
        """
        return {
            'left': element.get('left') or 0,
            'top': element.get('top') or 0,
            'width': element.get('width') or 1,
            'height': element.get('height') or 1,
        }

    @staticmethod
    def scale_element(element: Dict[str, Any], ratio: float) -> Dict[str, Any]:
        """
        Copy of an element with left/top/width/height multiplied by the ratio.
        """
        scaled = dict(element)
        for field in LINEAR_FIELDS:
            scaled[field] = (element.get(field) or 0) * ratio
        return scaled

    @staticmethod
    def translate_children(container: Dict[str, Any], origin_left: float, origin_top: float) -> List[Dict[str, Any]]:
        """Copies of a container's children shifted by the container's raw origin."""
        children = []
        for child in container.get('elements') or []:
            moved = dict(child)
            moved['left'] = (child.get('left') or 0) + origin_left
            moved['top'] = (child.get('top') or 0) + origin_top
            children.append(moved)
        return children
