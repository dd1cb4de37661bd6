"""
Data models for the pumi gazetteer.

This module defines the division records held by the level tables and the
composite results assembled by the gazetteer.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, List, Any

from .exceptions import ValidationError, create_validation_error
from .hierarchy.codes import validate_code_length, extract_divisions, parent_code
from .hierarchy.levels import GeoLevel
from .utils.data_utils import is_null_or_empty, safe_string_conversion, validate_required_fields


def _require_text(data: Any, field_name: str, keys: Tuple[str, ...]) -> Dict[str, str]:
    """Check that data is a mapping holding a non-empty string for every key."""
    if not isinstance(data, dict):
        raise create_validation_error(field_name, data, [f"{field_name} must be an object"])

    is_valid, missing = validate_required_fields(data, list(keys))
    if not is_valid:
        raise create_validation_error(
            field_name, data, [f"{field_name}.{key} is required" for key in missing]
        )

    for key in keys:
        if not isinstance(data[key], str):
            raise create_validation_error(
                f"{field_name}.{key}", data[key], [f"{field_name}.{key} must be a string"]
            )

    return {key: data[key] for key in keys}


@dataclass(frozen=True)
class LocalizedName:
    """A name in Khmer script and its latin transliteration."""

    km: str
    latin: str

    def to_dict(self) -> Dict[str, str]:
        return {'km': self.km, 'latin': self.latin}


@dataclass(frozen=True)
class AdministrativeUnit:
    """Type of a division (e.g. Khaet/Province), with its English label."""

    km: str
    latin: str
    en: str

    def to_dict(self) -> Dict[str, str]:
        return {'km': self.km, 'latin': self.latin, 'en': self.en}


@dataclass(frozen=True)
class GeoData:
    """Coordinates of a division as published in the source data."""

    lat: str
    long: str

    def to_dict(self) -> Dict[str, str]:
        return {'lat': self.lat, 'long': self.long}


@dataclass(frozen=True)
class AdministrativeDivision:
    """
    One coded node of the administrative hierarchy.

    Attributes:
        code: Digit string; its length gives the level, its prefixes the ancestors
        name: Bilingual name of the division
        administrative_unit: Bilingual and English label of the unit type
        parent: Code of the immediate parent (None for provinces)
        ancestor: Codes of all ancestors, root first
        geodata: Optional coordinates
    """

    code: str
    name: LocalizedName
    administrative_unit: AdministrativeUnit
    parent: Optional[str] = None
    ancestor: Tuple[str, ...] = field(default_factory=tuple)
    geodata: Optional[GeoData] = None

    def __post_init__(self):
        # Freeze ancestor lists handed over by loaders
        if not isinstance(self.ancestor, tuple):
            object.__setattr__(self, 'ancestor', tuple(self.ancestor or ()))

    @property
    def level(self) -> GeoLevel:
        return GeoLevel.from_code(self.code)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AdministrativeDivision':
        """
        Build a division from a parsed JSON/YAML record.

        Args:
            data: Record with code, name, administrative_unit and optionally
                  parent, ancestor and geodata

        Returns:
            AdministrativeDivision instance

        Raises:
            ValidationError: If the record does not follow the division schema
        """
        if not isinstance(data, dict):
            raise create_validation_error('record', data, ["record must be an object"])

        is_valid, missing = validate_required_fields(data, ['code', 'name', 'administrative_unit'])
        if not is_valid:
            raise create_validation_error(
                'record', data.get('code'), [f"{name} is required" for name in missing]
            )

        code = data['code']
        validate_code_length(code)

        name = _require_text(data['name'], 'name', ('km', 'latin'))
        unit = _require_text(data['administrative_unit'], 'administrative_unit', ('km', 'latin', 'en'))

        parent = data.get('parent')
        if is_null_or_empty(parent):
            parent = None
        elif parent != parent_code(code):
            raise ValidationError(
                f"Parent '{parent}' of division '{code}' must be '{parent_code(code)}'",
                field_name='parent',
                invalid_value=parent,
                validation_rules=["parent equals code without its last two digits"]
            )

        ancestor = data.get('ancestor') or []
        if not isinstance(ancestor, (list, tuple)):
            raise create_validation_error('ancestor', ancestor, ["ancestor must be a list of codes"])
        expected_ancestor = extract_divisions(code)[:-1]
        if ancestor and list(ancestor) != expected_ancestor:
            raise ValidationError(
                f"Ancestor chain {list(ancestor)} of division '{code}' must be {expected_ancestor}",
                field_name='ancestor',
                invalid_value=ancestor,
                validation_rules=["ancestor lists every prefix of the code, root first"]
            )

        geodata = data.get('geodata')
        if geodata is not None:
            if not isinstance(geodata, dict) or 'lat' not in geodata or 'long' not in geodata:
                raise create_validation_error('geodata', geodata, ["geodata needs lat and long"])
            geodata = GeoData(lat=safe_string_conversion(geodata['lat']),
                              long=safe_string_conversion(geodata['long']))

        return cls(
            code=code,
            name=LocalizedName(**name),
            administrative_unit=AdministrativeUnit(**unit),
            parent=parent,
            ancestor=tuple(ancestor),
            geodata=geodata
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON record shape used by the data files."""
        result: Dict[str, Any] = {'code': self.code}
        if self.parent is not None:
            result['parent'] = self.parent
        if self.ancestor:
            result['ancestor'] = list(self.ancestor)
        result['name'] = self.name.to_dict()
        result['administrative_unit'] = self.administrative_unit.to_dict()
        if self.geodata is not None:
            result['geodata'] = self.geodata.to_dict()
        return result


@dataclass(frozen=True)
class FullText:
    """Rendered label of a full division in both scripts."""

    km: str = ''
    latin: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {'km': self.km, 'latin': self.latin}


@dataclass(frozen=True)
class FullDivision:
    """
    A division together with all of its ancestors, one record per level.

    Only the levels implied by the requested code are keys of ``divisions``;
    a level whose record was not found maps to None.
    """

    divisions: Dict[GeoLevel, Optional[AdministrativeDivision]]
    text: FullText

    def get(self, level: GeoLevel) -> Optional[AdministrativeDivision]:
        return self.divisions.get(level)

    @property
    def province(self) -> Optional[AdministrativeDivision]:
        return self.get(GeoLevel.PROVINCE)

    @property
    def district(self) -> Optional[AdministrativeDivision]:
        return self.get(GeoLevel.DISTRICT)

    @property
    def commune(self) -> Optional[AdministrativeDivision]:
        return self.get(GeoLevel.COMMUNE)

    @property
    def village(self) -> Optional[AdministrativeDivision]:
        return self.get(GeoLevel.VILLAGE)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            level.key: division.to_dict() if division is not None else None
            for level, division in self.divisions.items()
        }
        result['text'] = self.text.to_dict()
        return result


@dataclass(frozen=True)
class GroupDivision:
    """Children of every ancestor of a code, grouped by level."""

    divisions: Dict[GeoLevel, List[AdministrativeDivision]]

    def get(self, level: GeoLevel) -> Optional[List[AdministrativeDivision]]:
        return self.divisions.get(level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            level.key: [division.to_dict() for division in records]
            for level, records in self.divisions.items()
        }
