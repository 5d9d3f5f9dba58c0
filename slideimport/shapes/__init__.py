"""
Shape tables: vendor shape types and path formulas.
"""

from .shape_library import ShapeLibrary, SHAPE_LIST, PATH_FORMULAS

__all__ = ['ShapeLibrary', 'SHAPE_LIST', 'PATH_FORMULAS']
