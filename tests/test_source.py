"""
Tests for the YAML source pipeline and JSON output.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

from pumi.config import GazetteerConfig
from pumi.data_loader import DivisionLoader
from pumi.exceptions import DataLoadError, FileAccessError, SourceFetchError
from pumi.hierarchy.levels import GeoLevel
from pumi.output.json_writer import write_all_divisions, write_division_json
from pumi.source.builder import add_ancestor, generate_all_divisions
from pumi.source.yaml_source import parse_division_yaml, sync_sources
from pumi.utils.error_handler import RetryConfig

SOURCES = {
    GeoLevel.PROVINCE: """
provinces:
  01:
    name:
      km: បន្ទាយមានជ័យ
      latin: Banteay Meanchey
      en: Banteay Meanchey
    administrative_unit:
      km: ខេត្ត
      latin: Khaet
      en: Province
""",
    GeoLevel.DISTRICT: """
districts:
  "0102":
    name:
      km: មង្គលបុរី
      latin: Mongkol Borei
    administrative_unit:
      km: ស្រុក
      latin: Srok
      en: District
  0103:
    name:
      km: ភ្នំស្រុក
      latin: Phnum Srok
    administrative_unit:
      km: ស្រុក
      latin: Srok
      en: District
""",
    GeoLevel.COMMUNE: """
communes:
  "010203":
    name:
      km: ចំណោម
      latin: Chamnaom
    administrative_unit:
      km: ឃុំ
      latin: Khum
      en: Commune
""",
    GeoLevel.VILLAGE: """
villages:
  "01020304":
    name:
      km: គោកព្រីង
      latin: Kouk Pring
    administrative_unit:
      km: ភូមិ
      latin: Phum
      en: Village
    geodata:
      lat: 13.65
      long: 102.98
""",
}


def write_sources(directory) -> Path:
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    for level, text in SOURCES.items():
        (directory / f"{level.key}.yml").write_text(text, encoding='utf-8')
    return directory


class TestParseDivisionYaml(unittest.TestCase):
    """Test cases for parse_division_yaml."""

    def test_codes_keep_zero_padding(self):
        records = parse_division_yaml(SOURCES[GeoLevel.DISTRICT], GeoLevel.DISTRICT)

        self.assertEqual([item['code'] for item in records], ['0102', '0103'])
        self.assertEqual(records[1]['name']['latin'], 'Phnum Srok')

    def test_unquoted_province_code(self):
        records = parse_division_yaml(SOURCES[GeoLevel.PROVINCE], GeoLevel.PROVINCE)

        self.assertEqual(records[0]['code'], '01')

    def test_coordinates_stay_text(self):
        records = parse_division_yaml(SOURCES[GeoLevel.VILLAGE], GeoLevel.VILLAGE)

        self.assertEqual(records[0]['geodata'], {'lat': '13.65', 'long': '102.98'})

    def test_missing_level_key(self):
        with self.assertRaises(DataLoadError):
            parse_division_yaml(SOURCES[GeoLevel.DISTRICT], GeoLevel.COMMUNE)

    def test_invalid_yaml(self):
        with self.assertRaises(DataLoadError):
            parse_division_yaml("provinces: [unclosed", GeoLevel.PROVINCE)


class TestAddAncestor(unittest.TestCase):
    """Test cases for add_ancestor."""

    def test_chains_ancestors_from_parent_level(self):
        provinces = [{'code': '01'}]
        districts = add_ancestor([{'code': '0102', 'name': 'x'}], provinces)
        communes = add_ancestor([{'code': '010203'}], districts)
        villages = add_ancestor([{'code': '01020304'}], communes)

        self.assertEqual(districts[0], {'code': '0102', 'parent': '01', 'ancestor': ['01'], 'name': 'x'})
        self.assertEqual(communes[0]['ancestor'], ['01', '0102'])
        self.assertEqual(villages[0]['parent'], '010203')
        self.assertEqual(villages[0]['ancestor'], ['01', '0102', '010203'])

    def test_missing_parent_gets_full_prefix_chain(self):
        villages = add_ancestor([{'code': '01020304'}], [])

        self.assertEqual(villages[0]['parent'], '010203')
        self.assertEqual(villages[0]['ancestor'], ['01', '0102', '010203'])

    def test_does_not_modify_input(self):
        data = [{'code': '0102'}]

        add_ancestor(data, [{'code': '01'}])

        self.assertEqual(data, [{'code': '0102'}])


class TestBuildPipeline(unittest.TestCase):
    """YAML sources to JSON tables to a loaded gazetteer."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.root = Path(self.temp_dir.name)

    def test_generate_write_and_load(self):
        source_dir = write_sources(self.root / 'yaml')

        data = generate_all_divisions(source_dir)
        written = write_all_divisions(data, self.root / 'json')
        records = DivisionLoader(self.root / 'json').load_all()

        self.assertEqual(set(written), set(GeoLevel.ordered()))
        self.assertNotIn('parent', data[GeoLevel.PROVINCE][0])
        village = records[GeoLevel.VILLAGE][0]
        self.assertEqual(village.ancestor, ('01', '0102', '010203'))
        self.assertEqual(village.geodata.lat, '13.65')

    def test_missing_source_file(self):
        with self.assertRaises(FileAccessError):
            generate_all_divisions(self.root)

    def test_json_keeps_khmer_unescaped(self):
        path = write_division_json(
            GeoLevel.PROVINCE,
            [{'code': '01', 'name': {'km': 'បន្ទាយមានជ័យ', 'latin': 'Banteay Meanchey'}}],
            self.root / 'out'
        )

        text = path.read_text(encoding='utf-8')
        self.assertEqual(path.name, 'provinces.json')
        self.assertIn('បន្ទាយមានជ័យ', text)
        self.assertEqual(json.loads(text)[0]['code'], '01')


class TestSyncSources(unittest.TestCase):
    """Test cases for sync_sources with a mocked HTTP session."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.config = GazetteerConfig(
            source_directory=str(Path(self.temp_dir.name) / 'yaml'),
            source_url='https://example.org/data/',
            request_timeout=5,
            show_progress=False
        )
        self.retry = RetryConfig(max_attempts=2, base_delay=0)

    def _response(self, status_code=200, text=''):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        return response

    def test_downloads_every_level(self):
        session = MagicMock()
        session.get.side_effect = lambda url, timeout: self._response(text=f"# {url}\n")

        written = sync_sources(self.config, session=session, retry_config=self.retry)

        self.assertEqual(list(written), GeoLevel.ordered())
        session.get.assert_any_call('https://example.org/data/villages.yml', timeout=5.0)
        self.assertEqual(
            written[GeoLevel.COMMUNE].read_text(encoding='utf-8'),
            "# https://example.org/data/communes.yml\n"
        )

    def test_retries_transient_failures(self):
        session = MagicMock()
        responses = [requests.ConnectionError("reset")] + [self._response(text='x') for _ in range(4)]
        session.get.side_effect = responses

        written = sync_sources(self.config, session=session, retry_config=self.retry)

        self.assertEqual(len(written), 4)
        self.assertEqual(session.get.call_count, 5)

    def test_http_error_is_raised_after_retries(self):
        session = MagicMock()
        session.get.return_value = self._response(status_code=404)

        with self.assertRaises(SourceFetchError) as cm:
            sync_sources(self.config, session=session, retry_config=self.retry)

        self.assertEqual(cm.exception.status_code, 404)
        self.assertEqual(session.get.call_count, 2)


if __name__ == '__main__':
    unittest.main()
