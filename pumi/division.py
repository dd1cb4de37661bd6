"""
Per-level division tables.

A DivisionTable holds the ordered records of one administrative level and
answers ancestor, parent, exact-code and name queries by linear scan.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from .exceptions import InvalidParentCodeError
from .hierarchy.codes import validate_code_length
from .hierarchy.levels import CODE_SEGMENT_LENGTH, MAX_CODE_LENGTH, GeoLevel
from .models import AdministrativeDivision


class DivisionTable:
    """
    Read-only collection of the divisions of one administrative level.

    Records are frozen into a tuple at construction and never change
    afterwards, so a table can be shared between threads without locking.
    """

    def __init__(self, data: Iterable[AdministrativeDivision], parent_code_length: int,
                 level: Optional[GeoLevel] = None):
        """
        Initialize the table.

        Args:
            data: Division records in source order
            parent_code_length: Code length of this level's parent, 0 for the top level
            level: Administrative level the records belong to, if known
        """
        self._data: Tuple[AdministrativeDivision, ...] = tuple(data)
        self.parent_code_length = parent_code_length
        self.level = level

    @classmethod
    def for_level(cls, level: GeoLevel, data: Iterable[AdministrativeDivision]) -> 'DivisionTable':
        """Build the table of a level, deriving the parent code length from it."""
        return cls(data, level.code_length - CODE_SEGMENT_LENGTH, level=level)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[AdministrativeDivision]:
        return iter(self._data)

    def __repr__(self) -> str:
        level = self.level.key if self.level else 'divisions'
        return f"DivisionTable({level}, {len(self._data)} records)"

    def all(self) -> Tuple[AdministrativeDivision, ...]:
        """Return every division of the table in source order."""
        return self._data

    def find_by_ancestor(self, code: str) -> List[AdministrativeDivision]:
        """
        Find every division whose code starts with the given ancestor code.

        Args:
            code: Ancestor code, 2 to parent_code_length digits (2 to 8 for the top level)

        Returns:
            Matching divisions in table order, empty if none

        Raises:
            InvalidCodeError: If the code is not a valid ancestor code for this table
        """
        validate_code_length(code, self.parent_code_length or MAX_CODE_LENGTH)

        return [item for item in self._data if item.code.startswith(code)]

    def find_by_parent(self, code: str) -> List[AdministrativeDivision]:
        """
        Find the divisions whose immediate parent has the given code.

        Raises:
            InvalidParentCodeError: If the code is not exactly parent_code_length digits
        """
        if (not isinstance(code, str) or len(code) != self.parent_code_length
                or not code.isdigit() or not code.isascii()):
            raise InvalidParentCodeError(code, self.parent_code_length)

        return self.find_by_ancestor(code)

    def find_one(self, code: str) -> Optional[AdministrativeDivision]:
        """Return the division with exactly this code, or None."""
        return next((item for item in self._data if item.code == code), None)

    def search_by_name(self, keyword: str) -> List[AdministrativeDivision]:
        """
        Case-sensitive substring search on the Khmer and latin names.

        Args:
            keyword: Fragment to look for

        Returns:
            Matching divisions in table order, empty if none
        """
        return [
            item for item in self._data
            if keyword in item.name.km or keyword in item.name.latin
        ]
