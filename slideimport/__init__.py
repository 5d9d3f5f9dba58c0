"""
slideimport - Converts raw slide-deck trees into the editor's slide model.
"""

from .importer import DeckImporter, MergeStrategy, ImportReport, SlideStore
from .rebuilder import SlideAssembler, Slide

__version__ = '0.1.0'

__all__ = ['DeckImporter', 'MergeStrategy', 'ImportReport', 'SlideStore', 'SlideAssembler', 'Slide']
