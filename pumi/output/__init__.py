"""
Output generation components.
"""

from .json_writer import write_division_json, write_all_divisions

__all__ = ['write_division_json', 'write_all_divisions']
