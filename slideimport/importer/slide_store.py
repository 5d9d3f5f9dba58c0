"""
Slide Store - In-memory target for imported slides
"""

import copy
import logging
from typing import List, Dict, Any

from ..utils.ids import generate_id

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_SIZE = 1000


class SlideStore:
    """
    Holds the editor's slides, viewport size, theme and undo history.

    Applications with their own state container provide an object with the
    same methods.
    """

    def __init__(self, viewport_size: float = DEFAULT_VIEWPORT_SIZE):
        self.slides: List[Dict[str, Any]] = [self._blank_slide()]
        self.slide_index = 0
        self.viewport_size = viewport_size
        self.theme: Dict[str, Any] = {}
        self.history: List[List[Dict[str, Any]]] = []

    @staticmethod
    def _blank_slide() -> Dict[str, Any]:
        return {
            'id': generate_id(),
            'elements': [],
            'background': {'type': 'solid', 'color': '#fff'},
            'remark': '',
        }

    def set_slides(self, slides: List[Dict[str, Any]]):
        self.slides = list(slides)
        self.slide_index = min(self.slide_index, max(len(self.slides) - 1, 0))

    def set_viewport_size(self, size: float):
        logger.debug(f"Viewport size: {self.viewport_size} -> {size}")
        self.viewport_size = size

    def set_theme(self, props: Dict[str, Any]):
        self.theme.update(props)

    def update_slide_index(self, index: int):
        self.slide_index = index

    def add_slides(self, slides: List[Dict[str, Any]]):
        """
        Append slides after the existing ones with fresh slide and element ids,
        moving the current index to the first new slide.
        """
        if not slides:
            return
        fresh = []
        for slide in slides:
            new_slide = copy.deepcopy(slide)
            new_slide['id'] = generate_id()
            for element in new_slide.get('elements', []):
                element['id'] = generate_id()
            fresh.append(new_slide)
        first_new = len(self.slides)
        self.slides.extend(fresh)
        self.slide_index = first_new

    def is_empty(self) -> bool:
        """True when the store holds a single slide without elements."""
        return len(self.slides) == 1 and not self.slides[0].get('elements')

    def add_history_snapshot(self):
        self.history.append(copy.deepcopy(self.slides))
