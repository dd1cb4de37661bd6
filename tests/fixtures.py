"""
Sample hierarchy shared by the test modules.

Two provinces, three districts, three communes and three villages, with
parent and ancestor codes as produced by the build pipeline.
"""

import json
from pathlib import Path

from pumi.gazetteer import Gazetteer
from pumi.hierarchy.levels import GeoLevel
from pumi.models import AdministrativeDivision

UNITS = {
    GeoLevel.PROVINCE: {'km': 'ខេត្ត', 'latin': 'Khaet', 'en': 'Province'},
    GeoLevel.DISTRICT: {'km': 'ស្រុក', 'latin': 'Srok', 'en': 'District'},
    GeoLevel.COMMUNE: {'km': 'ឃុំ', 'latin': 'Khum', 'en': 'Commune'},
    GeoLevel.VILLAGE: {'km': 'ភូមិ', 'latin': 'Phum', 'en': 'Village'},
}

NAMES = {
    GeoLevel.PROVINCE: [
        ('01', 'បន្ទាយមានជ័យ', 'Banteay Meanchey'),
        ('02', 'បាត់ដំបង', 'Battambang'),
    ],
    GeoLevel.DISTRICT: [
        ('0102', 'មង្គលបុរី', 'Mongkol Borei'),
        ('0103', 'ភ្នំស្រុក', 'Phnum Srok'),
        ('0201', 'បាណន់', 'Banan'),
    ],
    GeoLevel.COMMUNE: [
        ('010201', 'បន្ទាយនាង', 'Banteay Neang'),
        ('010203', 'ចំណោម', 'Chamnaom'),
        ('020101', 'កន្ទឺ ១', 'Kantueu Muoy'),
    ],
    GeoLevel.VILLAGE: [
        ('01020101', 'អូរធំ', 'Ou Thum'),
        ('01020301', 'ចំណោម', 'Chamnaom'),
        ('01020304', 'គោកព្រីង', 'Kouk Pring'),
    ],
}


def record(level: GeoLevel, code: str, km: str, latin: str) -> dict:
    """Build a JSON-shaped record with parent and ancestor for non-province levels."""
    item = {'code': code}
    if level is not GeoLevel.PROVINCE:
        item['parent'] = code[:-2]
        item['ancestor'] = [code[:end] for end in range(2, len(code), 2)]
    item['name'] = {'km': km, 'latin': latin}
    item['administrative_unit'] = dict(UNITS[level])
    return item


def division_records() -> dict:
    """Sample JSON records keyed by level."""
    return {
        level: [record(level, *entry) for entry in entries]
        for level, entries in NAMES.items()
    }


def build_gazetteer() -> Gazetteer:
    return Gazetteer.from_records({
        level: [AdministrativeDivision.from_dict(item) for item in items]
        for level, items in division_records().items()
    })


def write_json_tables(directory, records=None) -> Path:
    """Write the sample records as <level>.json files into directory."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    for level, items in (records or division_records()).items():
        (directory / f"{level.key}.json").write_text(
            json.dumps(items, ensure_ascii=False), encoding='utf-8'
        )
    return directory
