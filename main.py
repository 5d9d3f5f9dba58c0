#!/usr/bin/env python3
"""
Slide Import - Main Entry Point
Converts raw slide-deck JSON (or binary presentations through an external
parser) into editor slide JSON.
"""

import sys
import json
import asyncio
import argparse
import importlib
import logging
from pathlib import Path
import yaml
from typing import Dict, Any, Callable

from slideimport.importer import DeckImporter, MergeStrategy, SlideStore


def setup_logging(level: str = "INFO"):
    """
    Setup logging configuration.

    Args:
        level: Logging level
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler('slideimport.log')
        ]
    )


def load_config(config_path: str = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    if config_path and Path(config_path).exists():
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)

    # Default config path
    default_config = Path(__file__).parent / 'config' / 'config.yaml'
    if default_config.exists():
        with open(default_config, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)

    # Fallback to minimal config
    return {
        'importer': {'target_viewport_width': 1000, 'dpi_ratio': 96 / 72,
                     'fixed_viewport': False, 'merge': 'replace_if_empty'},
        'theme': {'font_name': '', 'font_color': '#333'},
        'shapes': {'extra': []},
        'logging': {'level': 'INFO'}
    }


def load_callable(reference: str) -> Callable:
    """
    Load a callable from a 'module:attribute' reference.

    Args:
        reference: Reference such as 'mypkg.parser:parse'

    Returns:
        The referenced callable
    """
    module_name, _, attr = reference.partition(':')
    if not module_name or not attr:
        raise ValueError(f"Expected 'module:function', got '{reference}'")
    return getattr(importlib.import_module(module_name), attr)


async def convert_file(input_path: str, output_path: str, config: Dict[str, Any],
                       fixed_viewport: bool = None, variant: str = None,
                       parser: Callable = None, transcoder: Callable = None) -> bool:
    """
    Convert an input document into editor slide JSON.

    Args:
        input_path: JSON export or binary presentation
        output_path: Output JSON file path
        config: Configuration dictionary
        fixed_viewport: Scale into the fixed viewport width
        variant: Declared JSON variant ('raw' or 'slides')
        parser: bytes -> raw tree callable for binary input
        transcoder: base64 -> base64 legacy image transcoder

    Returns:
        True if successful
    """
    logger = logging.getLogger(__name__)

    store = SlideStore(config.get('importer', {}).get('target_viewport_width', 1000))
    importer = DeckImporter(config, store=store, parse_raw_document=parser,
                            transcode_legacy_image=transcoder)

    report = await importer.import_file(input_path, MergeStrategy.REPLACE, fixed_viewport, variant)
    if not report:
        logger.error(f"Import failed: {report.error}")
        return False

    output = {
        'viewportSize': store.viewport_size,
        'theme': store.theme,
        'slides': store.slides,
    }
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(output, f, ensure_ascii=False, indent=2)

    logger.info("=" * 60)
    logger.info(f"Conversion complete: {report.slide_count} slides")
    logger.info(f"Input:  {input_path}")
    logger.info(f"Output: {output_path}")
    if report.dropped:
        logger.info(f"Dropped elements: {len(report.dropped)}")
        for dropped in report.dropped:
            logger.info(f"  - {dropped.kind} '{dropped.vendor_type}': {dropped.reason}")
    logger.info("=" * 60)

    return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Convert raw slide decks into editor slide JSON',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py deck.json slides.json
  python main.py deck.json slides.json --fixed-viewport
  python main.py deck.pptx slides.json --parser mypkg.pptx_reader:parse
        """
    )

    parser.add_argument('input', help='Input JSON export or presentation file')
    parser.add_argument('output', help='Output slide JSON path')
    parser.add_argument('--config', help='Path to configuration file')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: from config, else INFO)')
    parser.add_argument('--fixed-viewport', action='store_true', default=None,
                        help='Scale slides into the fixed viewport width')
    parser.add_argument('--variant', choices=['raw', 'slides'],
                        help='Declare the JSON document variant instead of detecting it')
    parser.add_argument('--parser', dest='raw_parser',
                        help="Raw-tree parser for binary input, as 'module:function'")
    parser.add_argument('--transcoder',
                        help="Legacy image transcoder, as 'module:function'")

    args = parser.parse_args()

    # Load configuration
    config = load_config(args.config)

    # Setup logging
    setup_logging(args.log_level or config.get('logging', {}).get('level', 'INFO'))
    logger = logging.getLogger(__name__)

    # Validate input file
    if not Path(args.input).exists():
        logger.error(f"Input file not found: {args.input}")
        return 1

    try:
        raw_parser = load_callable(args.raw_parser) if args.raw_parser else None
        transcoder = load_callable(args.transcoder) if args.transcoder else None
    except (ImportError, AttributeError, ValueError) as e:
        logger.error(f"Cannot load plugin: {e}")
        return 1

    success = asyncio.run(convert_file(args.input, args.output, config,
                                       args.fixed_viewport, args.variant,
                                       raw_parser, transcoder))

    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
