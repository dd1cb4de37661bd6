"""
Administrative levels of the Cambodian gazetteer.

This module defines the four levels of the hierarchy (province, district,
commune, village) and how each one maps onto a code length.
"""

from enum import Enum
from typing import Optional

CODE_SEGMENT_LENGTH = 2
MAX_CODE_LENGTH = 8


class GeoLevel(Enum):
    """
    One level of the administrative hierarchy, in root-to-leaf order.

    The value of each member is its plural key, which is also the name of the
    level's data file and its key in serialized results.
    """

    PROVINCE = 'provinces'
    DISTRICT = 'districts'
    COMMUNE = 'communes'
    VILLAGE = 'villages'

    @property
    def key(self) -> str:
        return self.value

    @property
    def depth(self) -> int:
        """Zero-based position of the level, 0 for provinces."""
        return _ORDER.index(self)

    @property
    def code_length(self) -> int:
        return (self.depth + 1) * CODE_SEGMENT_LENGTH

    @property
    def parent(self) -> Optional['GeoLevel']:
        if self.depth == 0:
            return None
        return _ORDER[self.depth - 1]

    @property
    def child(self) -> Optional['GeoLevel']:
        if self.depth == len(_ORDER) - 1:
            return None
        return _ORDER[self.depth + 1]

    @classmethod
    def ordered(cls):
        """All levels from province down to village."""
        return list(_ORDER)

    @classmethod
    def from_depth(cls, depth: int) -> 'GeoLevel':
        if not 0 <= depth < len(_ORDER):
            raise ValueError(f"No administrative level at depth {depth}")
        return _ORDER[depth]

    @classmethod
    def from_code(cls, code: str) -> 'GeoLevel':
        """
        Resolve the level a code belongs to from its length.

        Args:
            code: Division code of 2, 4, 6 or 8 digits

        Returns:
            The matching GeoLevel

        Raises:
            ValueError: If the code length does not correspond to a level
        """
        length = len(code)
        if length % CODE_SEGMENT_LENGTH or not CODE_SEGMENT_LENGTH <= length <= MAX_CODE_LENGTH:
            raise ValueError(f"No administrative level for code of length {length}")
        return cls.from_depth(length // CODE_SEGMENT_LENGTH - 1)

    @classmethod
    def from_key(cls, key: str) -> 'GeoLevel':
        try:
            return cls(key)
        except ValueError:
            valid = ', '.join(level.key for level in _ORDER)
            raise ValueError(f"Unknown administrative level '{key}' (expected one of: {valid})")


_ORDER = (GeoLevel.PROVINCE, GeoLevel.DISTRICT, GeoLevel.COMMUNE, GeoLevel.VILLAGE)
