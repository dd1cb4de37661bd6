"""
Builds the per-level record lists with parent and ancestor codes.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tqdm import tqdm

from ..hierarchy.codes import extract_divisions, parent_code
from ..hierarchy.levels import GeoLevel
from .yaml_source import read_division_yaml


def add_ancestor(data: List[Dict[str, Any]], parent_data: Optional[List[Dict[str, Any]]] = None,
                 show_progress: bool = False, desc: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Attach ``parent`` and ``ancestor`` codes to every record.

    The ancestor chain of a record is its parent's own chain followed by the
    parent code. A parent missing from ``parent_data`` still gets the full
    prefix chain of its code, so orphans load and are reported by the loader.

    Args:
        data: Records of one level
        parent_data: Records of the level above, already carrying ancestors
        show_progress: Display a progress bar
        desc: Progress bar label

    Returns:
        New record dictionaries with code, parent and ancestor first
    """
    parent_ancestors: Dict[str, List[str]] = {}
    for item in parent_data or []:
        # first occurrence wins, as in table lookups
        parent_ancestors.setdefault(item['code'], list(item.get('ancestor') or []))

    result = []
    for item in tqdm(data, desc=desc, disable=not show_progress):
        code = item['code']
        parent = parent_code(code)
        rest = {key: value for key, value in item.items() if key not in ('code', 'parent', 'ancestor')}
        result.append({
            'code': code,
            'parent': parent,
            'ancestor': [*parent_ancestors.get(parent, extract_divisions(parent)[:-1]), parent],
            **rest,
        })
    return result


def generate_all_divisions(source_directory: Union[str, Path], show_progress: bool = False,
                           logger: Optional[logging.Logger] = None) -> Dict[GeoLevel, List[Dict[str, Any]]]:
    """
    Read every level's YAML source and chain the ancestors level by level.

    Provinces are returned as read; districts, communes and villages get
    parent and ancestor codes from the level above.
    """
    logger = logger or logging.getLogger(__name__)

    raw = {
        level: read_division_yaml(source_directory, level, logger=logger)
        for level in GeoLevel.ordered()
    }

    result = {GeoLevel.PROVINCE: raw[GeoLevel.PROVINCE]}
    for level in GeoLevel.ordered()[1:]:
        result[level] = add_ancestor(
            raw[level], result[level.parent],
            show_progress=show_progress, desc=f"Linking {level.key}"
        )
        logger.debug(f"Linked {len(result[level])} {level.key} to {level.parent.key}")

    return result
