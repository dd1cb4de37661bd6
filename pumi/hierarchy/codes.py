"""
Hierarchical division codes.

A code is a digit string made of 2-digit segments, one per level: the first
two digits identify the province, the first four the district, and so on.
"""

import re
from typing import Any, List

from pumi.exceptions import InvalidCodeError
from pumi.hierarchy.levels import CODE_SEGMENT_LENGTH, MAX_CODE_LENGTH


def validate_code_length(code: Any, max_length: int = MAX_CODE_LENGTH) -> None:
    """
    Check that a code is a digit string of even length between 2 and max_length.

    Args:
        code: Code supplied by the caller
        max_length: Longest accepted code

    Raises:
        InvalidCodeError: If the code fails the check
    """
    if not isinstance(code, str):
        raise InvalidCodeError(code, max_length)

    pattern = re.compile(rf"^[0-9]{{2,{max_length}}}$")
    if not pattern.fullmatch(code) or len(code) % CODE_SEGMENT_LENGTH:
        raise InvalidCodeError(code, max_length)


def extract_divisions(code: str) -> List[str]:
    """
    Decompose a code into its ancestor chain, root first.

    Example:
        extract_divisions("01020304") -> ["01", "0102", "010203", "01020304"]
    """
    return [
        code[:end]
        for end in range(CODE_SEGMENT_LENGTH, len(code) + 1, CODE_SEGMENT_LENGTH)
    ]


def parent_code(code: str) -> str:
    """Code of the immediate parent, empty for a province."""
    return code[:-CODE_SEGMENT_LENGTH]
