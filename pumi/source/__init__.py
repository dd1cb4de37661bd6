"""
Upstream source handling: downloading, parsing and linking the YAML data.
"""

from .yaml_source import parse_division_yaml, read_division_yaml, fetch_source, sync_sources
from .builder import add_ancestor, generate_all_divisions

__all__ = [
    'parse_division_yaml',
    'read_division_yaml',
    'fetch_source',
    'sync_sources',
    'add_ancestor',
    'generate_all_divisions'
]
