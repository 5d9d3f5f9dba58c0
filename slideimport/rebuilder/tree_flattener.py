"""
Tree Flattener - Flattens nested group/diagram elements into a single element list
"""

import logging
from typing import List, Dict, Any, Optional

from ..exceptions import ShapeResolutionError, ElementConversionError
from ..reader.element_extractor import ElementExtractor
from .element_converter import ElementConverter
from .geometry import flip_siblings, rotated_child_position
from .slide_model import SlideElement

logger = logging.getLogger(__name__)


class DroppedElement:
    """Diagnostic for a raw element left out of the output."""

    def __init__(self, kind: str, vendor_type: Optional[str], reason: str):
        self.kind = kind
        self.vendor_type = vendor_type
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'vendorType': self.vendor_type, 'reason': self.reason}

    def __repr__(self) -> str:
        return f"DroppedElement({self.kind}/{self.vendor_type}: {self.reason})"


class FlattenResult:
    """Converted elements plus the elements that were dropped on the way."""

    def __init__(self, elements: Optional[List[SlideElement]] = None,
                 dropped: Optional[List[DroppedElement]] = None):
        self.elements = elements or []
        self.dropped = dropped or []

    def extend(self, other: 'FlattenResult'):
        self.elements.extend(other.elements)
        self.dropped.extend(other.dropped)


class TreeFlattener:
    """
    Walks raw elements in 'order', converting leaves and recursing into
    group/diagram containers with their children moved into the parent
    coordinate space.
    """

    def __init__(self, converter: ElementConverter):
        self.converter = converter
        self.ratio = converter.ratio

    async def flatten(self, raw_elements: List[Dict[str, Any]]) -> FlattenResult:
        """
        Flatten a raw element list.

        Args:
            raw_elements: Raw elements in raw (pre-scale) coordinates

        Returns:
            FlattenResult with converted elements in output order
        """
        result = FlattenResult()
        for el in ElementExtractor.sort_by_order(raw_elements):
            result.extend(await self._flatten_element(el))
        return result

    async def _flatten_element(self, el: Dict[str, Any]) -> FlattenResult:
        el_type = el.get('type')

        if el_type == 'group':
            return await self.flatten(self._group_children(el))
        elif el_type == 'diagram':
            return await self.flatten(self._diagram_children(el))

        origin = ElementExtractor.origin_box(el)
        scaled = ElementExtractor.scale_element(el, self.ratio)
        try:
            converted = await self.converter.convert(scaled, origin['width'], origin['height'])
        except (ShapeResolutionError, ElementConversionError) as e:
            logger.warning(f"Dropping {el_type} element '{el.get('shapType')}': {e}")
            return FlattenResult(dropped=[DroppedElement(el_type, el.get('shapType'), str(e))])

        return FlattenResult(elements=converted)

    def _group_children(self, group: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Children of a group in the parent's raw coordinate space.

        Rotated groups place each child's origin with the container rotation;
        flipped groups mirror their children and pass the flip flag down.
        """
        origin = ElementExtractor.origin_box(group)
        rotate = group.get('rotate')
        flip_h = group.get('isFlipH')
        flip_v = group.get('isFlipV')

        children = ElementExtractor.translate_children(group, origin['left'], origin['top'])

        if rotate:
            for child, raw_child in zip(children, group.get('elements') or []):
                child['left'], child['top'] = rotated_child_position(
                    origin['left'], origin['top'], origin['width'], origin['height'],
                    raw_child.get('left') or 0, raw_child.get('top') or 0, rotate,
                )

        for child in children:
            if flip_h and 'isFlipH' in child:
                child['isFlipH'] = True
            if flip_v and 'isFlipV' in child:
                child['isFlipV'] = True

        if flip_h:
            children = flip_siblings(children, 'y')
        if flip_v:
            children = flip_siblings(children, 'x')

        return children

    def _diagram_children(self, diagram: Dict[str, Any]) -> List[Dict[str, Any]]:
        origin = ElementExtractor.origin_box(diagram)
        return ElementExtractor.translate_children(diagram, origin['left'], origin['top'])
