"""Collection Registry orchestrator.

Drives one generation run:

1. SCAN     -- read every collection file and extract its schema.
2. TYPES    -- check for the Payload-generated types file (warning only).
3. GENERATE -- write types, validation rules, clients and routes.
4. FORMAT   -- optionally run Prettier over the output.
5. REPORT   -- print a summary table.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import structlog

from collection_registry.config import RegistryConfig
from collection_registry.parser.extractor import scan_documents
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.scaffolder.generator import ArtifactGenerator, GenerationResult
from collection_registry.scanner import discover_schema_documents, read_schema_document
from collection_registry.utils import (
    check_mark,
    console,
    format_duration,
    print_header,
    print_success,
    print_table,
    print_warning,
    run_command,
)

logger = structlog.get_logger(__name__)

EXAMPLES_IDENTIFIER = "examples"

DocumentReader = Callable[[Path], tuple[str, str]]


class CollectionRegistry:
    """Scans Payload collections and generates web-app code from them.

    Attributes:
        config: Run configuration.
        collections: Schemas found by the last :meth:`scan_collections`,
            keyed by identifier in discovery order.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        reader: DocumentReader = read_schema_document,
        log: Any | None = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self.reader = reader
        self.log = log if log is not None else logger
        self.collections: dict[str, SchemaDescriptor] = {}

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _read_documents(self, paths: list[Path]) -> Iterator[tuple[str, str]]:
        for path in paths:
            try:
                yield self.reader(path)
            except Exception as exc:
                # A custom reader may fail in any way; only this document is lost.
                self.log.error(
                    "schema_read_failed",
                    source_name=path.name,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )

    def scan_collections(self) -> dict[str, SchemaDescriptor]:
        """Extract every collection file under ``config.collections_path``.

        Unreadable or unparsable files are logged and skipped; the scan
        never aborts part-way.
        """
        collections_path = self.config.collections_path
        self.log.debug("scanning_collections", path=str(collections_path))

        if not collections_path.is_dir():
            self.log.error("collections_directory_missing", path=str(collections_path))
            self.collections = {}
            return self.collections

        paths = discover_schema_documents(
            collections_path, self.config.extensions, self.config.exclude
        )
        skip = {EXAMPLES_IDENTIFIER} if self.config.skip_examples else set()
        self.collections = scan_documents(
            self._read_documents(paths),
            settings=self.config.extraction_settings(),
            log=self.log,
            skip=skip,
        )
        return self.collections

    def check_payload_types(self) -> bool:
        """Check that the Payload-generated types file exists.

        Its absence is only a warning; generation never reads it.
        """
        types_path = self.config.types_path
        if not types_path.is_file():
            self.log.warning(
                "payload_types_missing",
                path=str(types_path),
                hint='run "payload generate:types" first',
            )
            return False
        self.log.info("payload_types_found", path=str(types_path))
        return True

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    async def format_generated_files(self) -> bool:
        """Run Prettier over the generated ``.ts``/``.tsx`` files.

        Failures are reported as warnings; the unformatted files stay.
        """
        if not self.config.format:
            return False

        output = self.config.output_path
        try:
            returncode, _, stderr = await run_command(
                [
                    "npx", "prettier", "--write",
                    f"{output}/**/*.ts", f"{output}/**/*.tsx",
                ],
                timeout=120,
            )
        except FileNotFoundError as exc:
            self.log.warning("format_failed", error=str(exc))
            return False
        if returncode != 0:
            self.log.warning("format_failed", returncode=returncode, error=stderr)
            return False
        self.log.info("format_complete", path=str(output))
        return True

    # ------------------------------------------------------------------
    # Main entry
    # ------------------------------------------------------------------

    async def generate(self) -> GenerationResult:
        """Run scan, generation, formatting and reporting."""
        start = time.monotonic()
        self.log.info(
            "generation_started",
            collections_path=str(self.config.collections_path),
            output_path=str(self.config.output_path),
            types_path=str(self.config.types_path),
            format=self.config.format,
        )

        self.scan_collections()
        self.check_payload_types()

        generator = ArtifactGenerator(self.config, log=self.log)
        result = await generator.generate(self.collections)
        await self.format_generated_files()

        self.log.info(
            "generation_complete",
            collections=len(self.collections),
            written=len(result.written),
            removed=len(result.removed),
            elapsed=format_duration(time.monotonic() - start),
        )
        return result

    def report(self) -> None:
        """Print a per-collection summary table to the console."""
        print_header("Collection Registry Report")
        if not self.collections:
            print_warning("No collections found.")
            return

        rows = [
            [
                f"{schema.display_name} ({schema.identifier})",
                str(len(schema.fields)),
                check_mark(schema.has_slug),
                check_mark(schema.has_status),
                check_mark(schema.has_seo),
                check_mark(schema.has_navigation),
                check_mark(schema.is_public),
            ]
            for schema in self.collections.values()
        ]
        print_table(
            ["Collection", "Fields", "Slug", "Status", "SEO", "Navigation", "Public"],
            rows,
            title="Collections",
        )
        print_success(f"Generated {len(self.collections)} collection(s)")
        console.print(f"[dim]Output: {self.config.output_path}[/dim]")
