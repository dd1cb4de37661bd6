"""
Gazetteer of Cambodian administrative divisions.

This module composes the four level tables into the full hierarchy and
answers queries that span several levels: full-record assembly with a
bilingual label, grouped children of every ancestor, and one-hop children.
"""

import functools
import logging
from typing import Dict, List, Optional

from .config import GazetteerConfig
from .data_loader import DivisionLoader
from .division import DivisionTable
from .hierarchy.codes import validate_code_length, extract_divisions
from .hierarchy.levels import GeoLevel
from .models import AdministrativeDivision, FullDivision, FullText, GroupDivision


class Gazetteer:
    """
    The full administrative hierarchy, one DivisionTable per level.

    Instances are immutable once built. Use ``load_gazetteer`` to build one
    from data files, or ``get_gazetteer`` for the shared process-wide handle.
    """

    def __init__(self, provinces: DivisionTable, districts: DivisionTable,
                 communes: DivisionTable, villages: DivisionTable):
        self.provinces = provinces
        self.districts = districts
        self.communes = communes
        self.villages = villages
        self._tables: Dict[GeoLevel, DivisionTable] = {
            GeoLevel.PROVINCE: provinces,
            GeoLevel.DISTRICT: districts,
            GeoLevel.COMMUNE: communes,
            GeoLevel.VILLAGE: villages,
        }

    @classmethod
    def from_records(cls, records: Dict[GeoLevel, List[AdministrativeDivision]]) -> 'Gazetteer':
        """
        Build a gazetteer from already-validated division records.

        Args:
            records: Division records keyed by level; missing levels get empty tables
        """
        tables = {
            level: DivisionTable.for_level(level, records.get(level, []))
            for level in GeoLevel.ordered()
        }
        return cls(
            provinces=tables[GeoLevel.PROVINCE],
            districts=tables[GeoLevel.DISTRICT],
            communes=tables[GeoLevel.COMMUNE],
            villages=tables[GeoLevel.VILLAGE],
        )

    def table(self, level: GeoLevel) -> DivisionTable:
        return self._tables[level]

    def find(self, code: str) -> Optional[AdministrativeDivision]:
        """Exact lookup in the table of the level implied by the code length."""
        validate_code_length(code)
        return self.table(GeoLevel.from_code(code)).find_one(code)

    def search(self, keyword: str, level: Optional[GeoLevel] = None) -> List[AdministrativeDivision]:
        """
        Search divisions by name fragment.

        Args:
            keyword: Case-sensitive fragment of the Khmer or latin name
            level: Restrict the search to one level; all levels when omitted

        Returns:
            Matches in province to village order, then table order
        """
        levels = [level] if level is not None else GeoLevel.ordered()
        results: List[AdministrativeDivision] = []
        for current in levels:
            results.extend(self.table(current).search_by_name(keyword))
        return results

    @staticmethod
    def _full_text(divisions: Dict[GeoLevel, Optional[AdministrativeDivision]]) -> FullText:
        """
        Render the bilingual label of a full division.

        The two scripts follow different rules on purpose. Khmer unit and name
        text is joined with no separator, within a level or between levels.
        Latin text is "{unit} {name}" per level, with levels joined by single
        spaces. Missing levels are skipped.
        """
        km_parts = []
        latin_parts = []
        for division in divisions.values():
            if division is None:
                continue
            km_parts.append(division.administrative_unit.km + division.name.km)
            latin_parts.append(f"{division.administrative_unit.latin} {division.name.latin}")

        return FullText(km=''.join(km_parts), latin=' '.join(latin_parts))

    def get_full_division(self, code: str) -> FullDivision:
        """
        Assemble a division and all of its ancestors with a bilingual label.

        Args:
            code: Division code of 2 to 8 digits

        Returns:
            FullDivision holding one entry per level implied by the code, in
            province to village order, and the rendered text

        Raises:
            InvalidCodeError: If the code is malformed
        """
        validate_code_length(code)

        divisions: Dict[GeoLevel, Optional[AdministrativeDivision]] = {}
        for depth, ancestor_code in enumerate(extract_divisions(code)):
            level = GeoLevel.from_depth(depth)
            divisions[level] = self.table(level).find_one(ancestor_code)

        return FullDivision(divisions=divisions, text=self._full_text(divisions))

    def get_full_group_division(self, code: str, include_provinces: bool = False) -> GroupDivision:
        """
        Expand a code into the children of each of its ancestors, level by level.

        For "010203" the result holds the districts of province "01" and the
        communes of district "0102".

        Args:
            code: Division code of 2 to 8 digits
            include_provinces: Also attach the whole provinces table

        Raises:
            InvalidCodeError: If the code is malformed
        """
        validate_code_length(code)

        ancestors = extract_divisions(code)
        divisions: Dict[GeoLevel, List[AdministrativeDivision]] = {}

        if include_provinces:
            divisions[GeoLevel.PROVINCE] = list(self.provinces.all())

        for depth in range(1, len(ancestors)):
            level = GeoLevel.from_depth(depth)
            divisions[level] = self.table(level).find_by_parent(ancestors[depth - 1])

        return GroupDivision(divisions=divisions)

    def get_child_division(self, code: str) -> List[AdministrativeDivision]:
        """
        Direct children of a division.

        Args:
            code: Division code of 2 to 8 digits

        Returns:
            Districts of a province, communes of a district or villages of a
            commune; empty for a village

        Raises:
            InvalidCodeError: If the code is malformed
        """
        validate_code_length(code)

        child_level = GeoLevel.from_code(code).child
        if child_level is None:
            return []
        return self.table(child_level).find_by_ancestor(code)


def load_gazetteer(config: Optional[GazetteerConfig] = None,
                   logger: Optional[logging.Logger] = None) -> Gazetteer:
    """
    Build a new gazetteer from the JSON data files named by the configuration.

    Args:
        config: Configuration naming the data directory; read from the environment when omitted
        logger: Optional logger for the loading process
    """
    if config is None:
        config = GazetteerConfig.from_env()
    loader = DivisionLoader(config.data_directory, logger=logger)
    return Gazetteer.from_records(loader.load_all())


@functools.lru_cache(maxsize=None)
def get_gazetteer() -> Gazetteer:
    """
    Shared gazetteer built on first use from the environment configuration.

    The data never changes after loading, so the cached instance is handed
    out to every caller.

    The package ships without data files. Run ``pumi sync`` and ``pumi build``
    first, or point PUMI_DATA_DIR at a directory of built JSON tables;
    otherwise this raises FileAccessError for the missing provinces table.
    A failed load is not cached.
    """
    return load_gazetteer()
