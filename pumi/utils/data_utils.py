"""
Data utility functions for null handling and record quality checks.

This module provides helpers used at the load boundary to clean string
values and summarise the quality of a level's records before they are
turned into division objects.
"""

import pandas as pd
from typing import Any, Dict, List


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if is_null_or_empty(value):
        return ""

    return str(value).strip()


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    # pd.isna on containers returns an array, only scalars are checked here
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))

    return False


def validate_required_fields(record: dict, required_fields: list) -> tuple:
    """
    Validate that all required fields are present and not empty.

    Args:
        record: Dictionary containing record data
        required_fields: List of field names that are required

    Returns:
        Tuple of (is_valid, list_of_missing_fields)
    """
    missing_fields = []

    for field in required_fields:
        if field not in record or is_null_or_empty(record[field]):
            missing_fields.append(field)

    return len(missing_fields) == 0, missing_fields


def records_to_dataframe(records: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Flatten division records into a DataFrame for quality checks.

    Nested name and unit objects become dotted columns (``name.km``,
    ``administrative_unit.en``); codes stay strings so zero padding survives.
    """
    df = pd.json_normalize(records)
    if 'code' in df.columns:
        df['code'] = df['code'].astype(str)
    return df


def detect_duplicates(df: pd.DataFrame, key_columns: list) -> pd.DataFrame:
    """
    Detect duplicate records based on specified key columns.

    Args:
        df: DataFrame to check for duplicates
        key_columns: List of column names to use for duplicate detection

    Returns:
        DataFrame containing only the duplicate records
    """
    duplicated_mask = df[key_columns].duplicated(keep=False)
    return df[duplicated_mask].copy()


def get_data_quality_summary(df: pd.DataFrame) -> dict:
    """
    Generate a summary of data quality metrics for a DataFrame.

    Args:
        df: DataFrame to analyze

    Returns:
        Dictionary containing data quality metrics
    """
    # list columns (ancestor) are unhashable, skip them for duplicate counting
    scalar_columns = [
        col for col in df.columns
        if not df[col].map(lambda v: isinstance(v, (list, tuple, dict))).any()
    ]

    summary = {
        'total_records': len(df),
        'null_counts': {col: int(count) for col, count in df.isnull().sum().items() if count},
        'empty_string_counts': {},
        'duplicate_count': int(df[scalar_columns].duplicated().sum()) if scalar_columns else 0,
    }

    for col in df.select_dtypes(include=['object']).columns:
        if col not in scalar_columns:
            continue
        empty_count = int((df[col].astype(str).str.strip() == '').sum())
        if empty_count:
            summary['empty_string_counts'][col] = empty_count

    return summary
