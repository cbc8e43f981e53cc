"""Collection Registry command line.

Usage::

    collection-registry
    collection-registry --collections-path ./cms/collections --output-path ./web/lib
    collection-registry --config registry.yaml --format
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from collection_registry.config import RegistryConfig
from collection_registry.errors import RegistryError
from collection_registry.logging_config import configure_logging
from collection_registry.registry import CollectionRegistry
from collection_registry.utils import console, print_error, print_success, print_warning


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="collection-registry",
        description="Generate TypeScript types, API clients and routes from Payload collections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  collection-registry\n"
            "  collection-registry --collections-path ./cms/collections --output-path ./web/lib\n"
            "  collection-registry --config registry.yaml --format\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="YAML or JSON configuration file (CLI flags take precedence)",
    )
    parser.add_argument(
        "--collections-path",
        default=None,
        help="Path to Payload collections directory (default: ./src/collections)",
    )
    parser.add_argument(
        "--output-path",
        default=None,
        help="Path to output generated files (default: ./generated)",
    )
    parser.add_argument(
        "--types-path",
        default=None,
        help="Path to Payload generated types (default: ./payload-types.ts)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="TypeScript expression for the CMS API base URL",
    )
    parser.add_argument(
        "--format",
        action="store_true",
        default=None,
        help="Format generated files with Prettier",
    )
    parser.add_argument(
        "--include-examples",
        action="store_true",
        help="Also generate code for the 'examples' demonstration collection",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit log events as JSON lines")
    return parser


def resolve_config(args) -> RegistryConfig:
    """Merge the config file (or environment) with command-line overrides."""
    config = RegistryConfig.load(Path(args.config)) if args.config else RegistryConfig.from_env()

    overrides: dict[str, object] = {}
    if args.collections_path:
        overrides["collections_path"] = Path(args.collections_path)
    if args.output_path:
        overrides["output_path"] = Path(args.output_path)
    if args.types_path:
        overrides["types_path"] = Path(args.types_path)
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.format:
        overrides["format"] = True
    if args.include_examples:
        overrides["skip_examples"] = False
    if args.debug:
        overrides["debug"] = True

    return config.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``collection-registry`` / ``python -m collection_registry``."""
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(args)
    except RegistryError as exc:
        print_error(f"Error: {exc}")
        return 1

    configure_logging(debug=config.debug, json_output=args.json_logs)

    if not config.collections_path.is_dir():
        print_error(f"Error: Collections directory not found: {config.collections_path}")
        console.print("Please provide the correct path with --collections-path")
        return 1

    if not config.types_path.is_file():
        print_warning(
            f"Payload types file not found: {config.types_path} "
            '(run "payload generate:types" or pass --types-path)'
        )

    registry = CollectionRegistry(config)
    try:
        asyncio.run(registry.generate())
    except (RegistryError, OSError) as exc:
        print_error(f"Error running collection registry: {exc}")
        return 1

    registry.report()
    print_success("Collection Registry generation complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
