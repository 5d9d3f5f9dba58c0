"""
Importer Module
Import entry points and the target slide store.
"""

from .deck_importer import DeckImporter, MergeStrategy, ImportReport
from .slide_store import SlideStore

__all__ = ['DeckImporter', 'MergeStrategy', 'ImportReport', 'SlideStore']
