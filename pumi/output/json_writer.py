"""
JSON output for the generated division tables.

Each level is written to ``<level>.json`` as an array of records, the format
read back by DivisionLoader.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..hierarchy.levels import GeoLevel
from ..utils.error_handler import safe_file_operation


def write_division_json(level: GeoLevel, data: List[Dict[str, Any]],
                        output_directory: Union[str, Path],
                        logger: Optional[logging.Logger] = None) -> Path:
    """
    Write one level's records to ``<output_directory>/<level>.json``.

    Args:
        level: Level the records belong to
        data: Record dictionaries
        output_directory: Target directory, created if missing
        logger: Optional logger instance

    Returns:
        Path of the written file

    Raises:
        FileAccessError: If the file cannot be written
    """
    logger = logger or logging.getLogger(__name__)
    output_path = Path(output_directory)
    output_path.mkdir(parents=True, exist_ok=True)

    file_path = output_path / f"{level.key}.json"
    payload = json.dumps(data, ensure_ascii=False)

    safe_file_operation(
        operation=lambda: file_path.write_text(payload, encoding='utf-8'),
        file_path=file_path,
        operation_name="write JSON",
        logger=logger
    )
    logger.info(f"Wrote {file_path} ({len(data):,} records)")
    return file_path


def write_all_divisions(data: Dict[GeoLevel, List[Dict[str, Any]]],
                        output_directory: Union[str, Path],
                        logger: Optional[logging.Logger] = None) -> Dict[GeoLevel, Path]:
    """Write every level present in ``data``; returns the file path per level."""
    return {
        level: write_division_json(level, records, output_directory, logger=logger)
        for level, records in data.items()
    }
