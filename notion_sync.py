#!/usr/bin/env python3
"""
Notion to Jekyll Exporter - Main CLI Entry Point

Exports every published page of a Notion database as a Jekyll post:
one ``<date>-<slug>.md`` file with generated front matter per page.

Required environment:
    NOTION_TOKEN   Notion integration token
    DATABASE_ID    ID of the database holding the posts
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from config_loader import ConfigLoader, get_nested
from converters import BlockConverter, ImageProxyTransformer
from exporters import FrontMatterBuilder, PostExporter
from fetchers import ApiFetcher
from logger import log_config, log_section, setup_logging
from notion_api import NotionClient
from orchestrator import ExportOrchestrator

__version__ = "1.0.0"

DEFAULT_CONFIG_FILE = 'config.yaml'


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="Export published Notion database pages as Jekyll markdown posts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export to ./_posts using NOTION_TOKEN and DATABASE_ID from the environment
  python notion_sync.py

  # Use a configuration file and a different output directory
  python notion_sync.py --config config.yaml --output-dir site/_posts

  # Preview file names without writing anything
  python notion_sync.py --dry-run -v
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help=f'Path to configuration YAML file (default: {DEFAULT_CONFIG_FILE} if present)'
    )

    parser.add_argument(
        '--output-dir',
        type=str,
        help='Directory to write posts to (default: _posts)'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Convert posts and report file names without writing'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v for INFO, -vv for DEBUG)'
    )

    return parser


def load_configuration(args: argparse.Namespace) -> dict:
    """Load, merge and validate configuration. No network access happens here."""
    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG_FILE).exists():
        config_path = DEFAULT_CONFIG_FILE

    config = ConfigLoader.load(config_path)
    config = ConfigLoader.merge_with_args(config, args)
    ConfigLoader.validate(config)
    return config


def run_export(config: dict, args: argparse.Namespace, logger: logging.Logger) -> int:
    """Build the pipeline collaborators and export every published page."""
    client = NotionClient.from_config(config)
    try:
        fetcher = ApiFetcher(config, client)

        converter = BlockConverter(fetcher)
        converter.set_custom_transformer(
            'image',
            ImageProxyTransformer(get_nested(config, 'export.image_proxy_url'))
        )

        orchestrator = ExportOrchestrator(
            fetcher=fetcher,
            converter=converter,
            front_matter_builder=FrontMatterBuilder(
                permalink_prefix=get_nested(config, 'export.permalink_prefix', '/posts/')
            ),
            exporter=PostExporter(get_nested(config, 'export.output_directory')),
        )

        results = orchestrator.run(dry_run=args.dry_run)
    finally:
        client.close()

    if args.dry_run:
        logger.info(f"Dry-run complete. {len(results)} post(s) rendered, nothing written.")
    else:
        logger.info(f"Export complete. {len(results)} post(s) written.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration(args)
        logger = setup_logging(
            level=get_nested(config, 'logging.level'),
            log_file=get_nested(config, 'logging.file')
        )
    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}", file=sys.stderr)
        return 2
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Configuration error: {e}", file=sys.stderr)
        return 2

    log_section("Notion to Jekyll Export")
    logger.debug(f"Version: {__version__}")
    log_config(config)

    try:
        return run_export(config, args, logger)
    except KeyboardInterrupt:
        logger.error("Export interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
