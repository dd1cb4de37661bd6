"""
pumi - a gazetteer of Cambodian administrative divisions.

This package provides a queryable in-memory catalog of provinces, districts,
communes and villages, identified by hierarchical codes and carrying Khmer
and latin names.
"""

from typing import List, Optional

from .division import DivisionTable
from .exceptions import GazetteerError, InvalidCodeError, InvalidParentCodeError
from .gazetteer import Gazetteer, get_gazetteer, load_gazetteer
from .hierarchy.levels import GeoLevel
from .models import (
    AdministrativeDivision,
    AdministrativeUnit,
    FullDivision,
    FullText,
    GeoData,
    GroupDivision,
    LocalizedName
)

__version__ = "1.0.0"
__author__ = "Data Analytics Team"


def get_child_division(code: str) -> List[AdministrativeDivision]:
    """Direct children of a division in the shared gazetteer."""
    return get_gazetteer().get_child_division(code)


def get_full_division(code: str) -> FullDivision:
    """A division and its ancestors, with bilingual label, from the shared gazetteer."""
    return get_gazetteer().get_full_division(code)


def get_full_group_division(code: str, include_provinces: bool = False) -> GroupDivision:
    """Children of each ancestor of a code, from the shared gazetteer."""
    return get_gazetteer().get_full_group_division(code, include_provinces)


def search(keyword: str, level: Optional[GeoLevel] = None) -> List[AdministrativeDivision]:
    """Name search in the shared gazetteer."""
    return get_gazetteer().search(keyword, level)


__all__ = [
    'AdministrativeDivision',
    'AdministrativeUnit',
    'DivisionTable',
    'FullDivision',
    'FullText',
    'GazetteerError',
    'Gazetteer',
    'GeoData',
    'GeoLevel',
    'GroupDivision',
    'InvalidCodeError',
    'InvalidParentCodeError',
    'LocalizedName',
    'get_child_division',
    'get_full_division',
    'get_full_group_division',
    'get_gazetteer',
    'load_gazetteer',
    'search'
]
