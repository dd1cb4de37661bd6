"""
Upstream YAML sources of the gazetteer.

The upstream project publishes one YAML document per level, keyed by level
name and then by division code. This module downloads those documents and
parses them into plain record dictionaries.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import requests
import yaml
from tqdm import tqdm

from ..config import GazetteerConfig
from ..exceptions import DataLoadError, SourceFetchError
from ..hierarchy.levels import GeoLevel
from ..utils.error_handler import RetryConfig, with_retry, safe_file_operation

_NUMERIC_TAGS = ('tag:yaml.org,2002:int', 'tag:yaml.org,2002:float')


class _CodeLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars as strings.

    Codes such as ``0102`` would otherwise be read as integers (or octal),
    losing their zero padding.
    """


_CodeLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def source_file_name(level: GeoLevel) -> str:
    return f"{level.key}.yml"


def parse_division_yaml(text: str, level: GeoLevel) -> List[Dict[str, Any]]:
    """
    Parse one level's YAML document into records.

    Args:
        text: YAML document of the form ``{<level key>: {<code>: {...}}}``
        level: Level the document describes

    Returns:
        Record dictionaries in document order, each with ``code`` set from its key

    Raises:
        DataLoadError: If the document is not valid YAML of the expected shape
    """
    try:
        doc = yaml.load(text, Loader=_CodeLoader)
    except yaml.YAMLError as e:
        raise DataLoadError(
            f"Error parsing {level.key} YAML: {e}",
            level=level.key,
            original_error=e
        )

    if not isinstance(doc, dict) or not isinstance(doc.get(level.key), dict):
        raise DataLoadError(
            f"YAML document has no '{level.key}' mapping",
            level=level.key
        )

    records = []
    for code, values in doc[level.key].items():
        if not isinstance(values, dict):
            raise DataLoadError(
                f"Entry '{code}' of {level.key} is not a mapping",
                level=level.key
            )
        records.append({**values, 'code': str(code)})
    return records


def read_division_yaml(source_directory: Union[str, Path], level: GeoLevel,
                       logger: Optional[logging.Logger] = None) -> List[Dict[str, Any]]:
    """Read and parse ``<level>.yml`` from the source directory."""
    logger = logger or logging.getLogger(__name__)
    file_path = Path(source_directory) / source_file_name(level)

    text = safe_file_operation(
        operation=lambda: file_path.read_text(encoding='utf-8'),
        file_path=file_path,
        operation_name="read YAML",
        logger=logger
    )

    try:
        records = parse_division_yaml(text, level)
    except DataLoadError as e:
        e.file_path = str(file_path)
        e.context['file_path'] = str(file_path)
        raise

    logger.info(f"Read {len(records)} {level.key} from {file_path}")
    return records


def fetch_source(url: str, timeout: float, session: Optional[requests.Session] = None) -> str:
    """
    Download one source document.

    Raises:
        SourceFetchError: On connection failures and non-2xx responses
    """
    http = session or requests
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise SourceFetchError(f"Failed to download {url}: {e}", url=url, original_error=e)

    if response.status_code >= 400:
        raise SourceFetchError(
            f"Failed to download {url}: HTTP {response.status_code}",
            url=url,
            status_code=response.status_code
        )

    response.encoding = 'utf-8'
    return response.text


def sync_sources(config: GazetteerConfig, session: Optional[requests.Session] = None,
                 retry_config: Optional[RetryConfig] = None,
                 logger: Optional[logging.Logger] = None) -> Dict[GeoLevel, Path]:
    """
    Download the YAML document of every level into the source directory.

    Args:
        config: Configuration with source URL, source directory and timeout
        session: Optional requests session
        retry_config: Retry policy for downloads
        logger: Optional logger instance

    Returns:
        Written file path per level
    """
    logger = logger or logging.getLogger(__name__)
    source_directory = Path(config.source_directory)
    source_directory.mkdir(parents=True, exist_ok=True)

    fetch = with_retry(retry_config, logger)(fetch_source)

    written = {}
    levels = tqdm(GeoLevel.ordered(), desc="Downloading sources", disable=not config.show_progress)
    for level in levels:
        url = f"{config.source_url}/{source_file_name(level)}"
        logger.info(f"Downloading {url}")
        text = fetch(url, config.request_timeout, session=session)

        file_path = source_directory / source_file_name(level)
        safe_file_operation(
            operation=lambda: file_path.write_text(text, encoding='utf-8'),
            file_path=file_path,
            operation_name="write YAML",
            logger=logger
        )
        written[level] = file_path

    return written
