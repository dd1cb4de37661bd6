"""
Data loading and validation module.

This module provides the DivisionLoader class, which reads the per-level JSON
tables, runs quality checks on them and turns every record into an
AdministrativeDivision.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .exceptions import DataLoadError, FileAccessError, ValidationError
from .hierarchy.levels import GeoLevel
from .logging_config import log_data_quality_warning
from .models import AdministrativeDivision
from .utils.data_utils import records_to_dataframe, detect_duplicates, get_data_quality_summary
from .utils.error_handler import (
    RetryConfig, safe_file_operation, create_error_context, log_error_details
)


class DivisionLoader:
    """
    Loads the division tables of every level from a data directory.

    The directory holds one ``<level>.json`` file per level (``provinces.json``,
    ``districts.json``, ...), each an array of division records.
    """

    def __init__(self, data_directory: Union[str, Path], logger: Optional[logging.Logger] = None,
                 retry_config: Optional[RetryConfig] = None):
        """
        Initialize the DivisionLoader.

        Args:
            data_directory: Directory containing the JSON tables
            logger: Optional logger instance for logging operations
            retry_config: Optional retry configuration for file operations
        """
        self.data_directory = Path(data_directory)
        self.logger = logger or logging.getLogger(__name__)
        self.retry_config = retry_config or RetryConfig(max_attempts=3, base_delay=0.5)

    def file_path(self, level: GeoLevel) -> Path:
        return self.data_directory / f"{level.key}.json"

    def load_level(self, level: GeoLevel) -> List[AdministrativeDivision]:
        """
        Load and validate the records of one level.

        Args:
            level: Administrative level to load

        Returns:
            Division records in file order

        Raises:
            FileAccessError: If the file is missing or unreadable
            DataLoadError: If the file is not a JSON array of level records
            ValidationError: If a record does not follow the division schema
        """
        file_path = self.file_path(level)
        self.logger.info(f"Loading {level.key} from: {file_path}")

        if not file_path.is_file():
            raise FileAccessError(
                f"{level.key.capitalize()} file not found: {file_path}",
                file_path=str(file_path),
                operation="read"
            )

        try:
            raw = safe_file_operation(
                operation=lambda: json.loads(file_path.read_text(encoding='utf-8')),
                file_path=file_path,
                operation_name="read JSON",
                retry_config=self.retry_config,
                logger=self.logger
            )
        except json.JSONDecodeError as e:
            raise DataLoadError(
                f"Error parsing {level.key} JSON file: {e}",
                file_path=str(file_path),
                level=level.key,
                original_error=e
            )

        if not isinstance(raw, list):
            raise DataLoadError(
                f"{level.key.capitalize()} file must contain an array of records",
                file_path=str(file_path),
                level=level.key
            )

        self._check_quality(level, raw, file_path)

        records = []
        for index, item in enumerate(raw):
            try:
                records.append(AdministrativeDivision.from_dict(item))
            except ValidationError as e:
                e.context.update(create_error_context(
                    operation="load_level", level=level.key,
                    file_path=str(file_path), record_index=index
                ))
                log_error_details(self.logger, e)
                raise

        self.logger.info(f"Loaded {len(records)} {level.key}")
        return records

    def load_all(self) -> Dict[GeoLevel, List[AdministrativeDivision]]:
        """
        Load every level and check that parents exist one level up.

        Returns:
            Division records keyed by level, province first
        """
        records = {level: self.load_level(level) for level in GeoLevel.ordered()}
        self._check_parents(records)
        return records

    def _check_quality(self, level: GeoLevel, raw: List[Any], file_path: Path):
        """Reject records of the wrong level and report duplicates."""
        if not raw:
            log_data_quality_warning(self.logger, f"{file_path} contains no {level.key}")
            return

        if not all(isinstance(item, dict) for item in raw):
            raise DataLoadError(
                f"Every {level.key} record must be an object",
                file_path=str(file_path),
                level=level.key
            )

        df = records_to_dataframe(raw)
        if 'code' not in df.columns:
            raise DataLoadError(
                f"{level.key.capitalize()} records have no 'code' field",
                file_path=str(file_path),
                level=level.key
            )

        wrong_length = df[df['code'].str.len() != level.code_length]
        if not wrong_length.empty:
            raise DataLoadError(
                f"{len(wrong_length)} {level.key} records have codes that are not "
                f"{level.code_length} digits long (first: {wrong_length['code'].iloc[0]})",
                file_path=str(file_path),
                level=level.key
            )

        duplicates = detect_duplicates(df, ['code'])
        if not duplicates.empty:
            codes = sorted(duplicates['code'].unique())
            log_data_quality_warning(
                self.logger,
                f"{len(codes)} duplicate {level.key} codes, "
                f"first occurrence wins: {', '.join(codes[:10])}"
            )

        self.logger.debug(f"{level.key} data quality: {get_data_quality_summary(df)}")

    def _check_parents(self, records: Dict[GeoLevel, List[AdministrativeDivision]]):
        """Warn about divisions whose parent is missing from the parent table."""
        for level in GeoLevel.ordered()[1:]:
            children = records.get(level) or []
            if not children:
                continue

            parent_codes = pd.Series([item.code for item in records.get(level.parent, [])], dtype=str)
            child_parents = pd.Series([item.code[:-2] for item in children], dtype=str)
            orphans = child_parents[~child_parents.isin(parent_codes)]

            if not orphans.empty:
                log_data_quality_warning(
                    self.logger,
                    f"{len(orphans)} {level.key} reference missing "
                    f"{level.parent.key}: {', '.join(sorted(orphans.unique())[:10])}"
                )
