"""
Hierarchy module for the pumi gazetteer.

This module provides the administrative level enumeration and the
hierarchical code helpers shared by tables, the gazetteer and the loaders.
"""

from pumi.hierarchy.levels import GeoLevel, CODE_SEGMENT_LENGTH, MAX_CODE_LENGTH
from pumi.hierarchy.codes import validate_code_length, extract_divisions, parent_code

__all__ = [
    'GeoLevel',
    'CODE_SEGMENT_LENGTH',
    'MAX_CODE_LENGTH',
    'validate_code_length',
    'extract_divisions',
    'parent_code'
]
