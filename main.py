"""
Main entry point for the pumi gazetteer.

This script provides the command-line interface for downloading the upstream
sources, building the JSON tables and querying the gazetteer.
"""

import argparse
import json
import sys
import time
from typing import List, Optional

from pumi.config import GazetteerConfig
from pumi.exceptions import (
    GazetteerError, ValidationError, DataLoadError, FileAccessError, SourceFetchError
)
from pumi.gazetteer import load_gazetteer
from pumi.hierarchy.levels import GeoLevel
from pumi.logging_config import setup_logging
from pumi.output.json_writer import write_all_divisions
from pumi.source.builder import generate_all_divisions
from pumi.source.yaml_source import sync_sources


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pumi",
        description="Gazetteer of Cambodian provinces, districts, communes and villages"
    )

    parser.add_argument(
        "--data-dir",
        help="Directory holding the JSON tables (default: PUMI_DATA_DIR or the package data)"
    )

    parser.add_argument(
        "--source-dir",
        help="Directory holding the YAML sources (default: PUMI_SOURCE_DIR or the package data)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: PUMI_LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--log-file",
        help="Also write log messages to this file"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide progress bars"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser("sync", help="Download the upstream YAML sources")
    sync_parser.add_argument(
        "--source-url",
        help="Base URL of the upstream data directory"
    )

    subparsers.add_parser("build", help="Build the JSON tables from the YAML sources")

    lookup_parser = subparsers.add_parser("lookup", help="Show a division with all of its ancestors")
    lookup_parser.add_argument("code", help="Division code (2 to 8 digits)")

    children_parser = subparsers.add_parser("children", help="List the direct children of a division")
    children_parser.add_argument("code", help="Division code (2 to 8 digits)")

    group_parser = subparsers.add_parser("group", help="List the children of every ancestor of a code")
    group_parser.add_argument("code", help="Division code (2 to 8 digits)")
    group_parser.add_argument(
        "--include-provinces",
        action="store_true",
        help="Also list every province"
    )

    search_parser = subparsers.add_parser("search", help="Search divisions by name fragment")
    search_parser.add_argument("keyword", help="Case-sensitive fragment of the Khmer or latin name")
    search_parser.add_argument(
        "--level",
        choices=[level.key for level in GeoLevel.ordered()],
        help="Only search this level"
    )

    return parser.parse_args(argv)


def build_config(args) -> GazetteerConfig:
    """Environment configuration overridden by command line options."""
    config = GazetteerConfig.from_env()
    overrides = {
        'data_directory': args.data_dir,
        'source_directory': args.source_dir,
        'log_level': args.log_level,
        'log_file': args.log_file,
        'source_url': getattr(args, 'source_url', None),
    }
    values = config.to_dict()
    values.update({key: value for key, value in overrides.items() if value})
    if args.no_progress:
        values['show_progress'] = False
    return GazetteerConfig.from_dict(values)


def print_json(data):
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_sync(config: GazetteerConfig, logger) -> None:
    logger.log_phase_start("source download")
    start_time = time.time()
    written = sync_sources(config, logger=logger.logger)
    for level, file_path in written.items():
        logger.info(f"Saved {level.key}: {file_path}")
    logger.log_phase_complete("source download", len(written), time.time() - start_time)


def run_build(config: GazetteerConfig, logger) -> None:
    logger.log_phase_start("table build")
    start_time = time.time()
    data = generate_all_divisions(
        config.source_directory, show_progress=config.show_progress, logger=logger.logger
    )
    write_all_divisions(data, config.data_directory, logger=logger.logger)
    total = sum(len(records) for records in data.values())
    logger.log_phase_complete("table build", total, time.time() - start_time)


def run_query(args, config: GazetteerConfig, logger) -> None:
    gazetteer = load_gazetteer(config, logger=logger.logger)

    if args.command == "lookup":
        print_json(gazetteer.get_full_division(args.code).to_dict())
    elif args.command == "children":
        print_json([item.to_dict() for item in gazetteer.get_child_division(args.code)])
    elif args.command == "group":
        print_json(gazetteer.get_full_group_division(args.code, args.include_provinces).to_dict())
    elif args.command == "search":
        level = GeoLevel.from_key(args.level) if args.level else None
        print_json([item.to_dict() for item in gazetteer.search(args.keyword, level)])


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = build_config(args)
        logger = setup_logging(config)
        logger.debug(f"Configuration: {config.to_dict()}")

        if args.command == "sync":
            run_sync(config, logger)
        elif args.command == "build":
            run_build(config, logger)
        else:
            run_query(args, config, logger)
        return 0

    except ValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    except SourceFetchError as e:
        print(f"Download Error: {e}", file=sys.stderr)
        return 3

    except (FileAccessError, DataLoadError) as e:
        print(f"Data Error: {e}", file=sys.stderr)
        print("Run 'pumi sync' and 'pumi build' to create the data files.", file=sys.stderr)
        return 4

    except GazetteerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
