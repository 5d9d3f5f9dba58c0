"""
Slide Rebuilder Module
Flattens raw element trees and converts them into editor slides.
"""

from .slide_model import Slide
from .slide_assembler import SlideAssembler
from .tree_flattener import TreeFlattener
from .element_converter import ElementConverter

__all__ = ['Slide', 'SlideAssembler', 'TreeFlattener', 'ElementConverter']
