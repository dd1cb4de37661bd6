"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_string_conversion,
    is_null_or_empty,
    validate_required_fields,
    records_to_dataframe,
    detect_duplicates,
    get_data_quality_summary
)

__all__ = [
    'safe_string_conversion',
    'is_null_or_empty',
    'validate_required_fields',
    'records_to_dataframe',
    'detect_duplicates',
    'get_data_quality_summary'
]
