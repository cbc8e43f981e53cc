"""Artifact writer.

Takes the schemas found by a scan and writes the generated TypeScript tree::

    <output>/
        types.ts                 barrel of all types
        types/base.ts            shared types
        types/<slug>.ts          one interface per collection
        types/site-settings.ts
        validation/<slug>.ts     form validation rules
        clients/base.ts          BasePayloadClient
        clients/<slug>.ts        one client per collection
        clients/site-settings.ts
        clients/index.ts
        payloadClient.ts         aggregated legacy client
        routes/<slug>._index.tsx
        routes/<slug>.$slug.tsx

Files left over from collections that no longer exist are removed from
``types/``, ``validation/`` and ``clients/``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field

from collection_registry.config import RegistryConfig
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.parser.type_mapper import TypeMapper
from collection_registry.scaffolder.client_gen import (
    render_base_client,
    render_client_index,
    render_collection_client,
    render_main_client,
    render_site_settings_client,
)
from collection_registry.scaffolder.route_gen import ROUTE_KINDS, render_route, route_filename
from collection_registry.scaffolder.templates import TemplateRenderer
from collection_registry.scaffolder.types_gen import (
    render_base_types,
    render_collection_type,
    render_site_settings_type,
    render_types_index,
    render_validation_schema,
)

logger = structlog.get_logger(__name__)

SITE_SETTINGS = "site-settings"


class GenerationResult(BaseModel):
    """Files touched by one generation run."""
    written: list[Path] = Field(default_factory=list)
    removed: list[Path] = Field(default_factory=list)


class ArtifactGenerator:
    """Writes every generated artifact for a set of schemas.

    Rendering happens in-process; each file write runs in a worker thread
    via ``asyncio.to_thread``.
    """

    def __init__(
        self,
        config: RegistryConfig,
        renderer: TemplateRenderer | None = None,
        log: Any | None = None,
    ) -> None:
        self.config = config
        self.settings = config.extraction_settings()
        self.mapper = TypeMapper.from_settings(self.settings)
        self.renderer = renderer or TemplateRenderer()
        self.log = log if log is not None else logger

    # -- Public API --------------------------------------------------------

    async def generate(self, schemas: Mapping[str, SchemaDescriptor]) -> GenerationResult:
        """Write types, validation rules, clients and routes for *schemas*."""
        result = GenerationResult()
        ordered = list(schemas.values())

        result.written += await self.generate_types(ordered)
        result.written += await self.generate_validation(ordered)
        result.written += await self.generate_clients(ordered)
        result.written += await self.generate_routes(ordered)

        keep = set(schemas)
        result.removed += await self.cleanup_stale(
            self.config.types_dir, keep, protected={"base", SITE_SETTINGS}
        )
        result.removed += await self.cleanup_stale(self.config.validation_dir, keep)
        result.removed += await self.cleanup_stale(
            self.config.clients_dir, keep, protected={"base", "index", SITE_SETTINGS}
        )
        return result

    async def generate_types(self, schemas: list[SchemaDescriptor]) -> list[Path]:
        types_dir = self.config.types_dir
        template = self.config.templates.collection_type
        files: dict[Path, str] = {
            types_dir / "base.ts": render_base_types(self.settings, self.renderer),
            types_dir / f"{SITE_SETTINGS}.ts": render_site_settings_type(self.renderer),
            self.config.output_path / "types.ts": render_types_index(schemas, self.renderer),
        }
        for schema in schemas:
            files[types_dir / f"{schema.identifier}.ts"] = render_collection_type(
                schema, self.mapper, self.renderer, template_path=template
            )
        return await self._write_all(files)

    async def generate_validation(self, schemas: list[SchemaDescriptor]) -> list[Path]:
        files = {
            self.config.validation_dir / f"{schema.identifier}.ts": render_validation_schema(
                schema, self.renderer
            )
            for schema in schemas
        }
        return await self._write_all(files)

    async def generate_clients(self, schemas: list[SchemaDescriptor]) -> list[Path]:
        clients_dir = self.config.clients_dir
        template = self.config.templates.api_client
        files: dict[Path, str] = {
            clients_dir / "base.ts": render_base_client(self.config.base_url, self.renderer),
            clients_dir / f"{SITE_SETTINGS}.ts": render_site_settings_client(self.renderer),
            clients_dir / "index.ts": render_client_index(schemas, self.renderer),
            self.config.output_path / "payloadClient.ts": render_main_client(schemas, self.renderer),
        }
        for schema in schemas:
            files[clients_dir / f"{schema.identifier}.ts"] = render_collection_client(
                schema, self.settings, self.renderer, template_path=template
            )
        return await self._write_all(files)

    async def generate_routes(self, schemas: list[SchemaDescriptor]) -> list[Path]:
        template = self.config.templates.routes
        files: dict[Path, str] = {}
        for schema in schemas:
            if not schema.has_slug:
                continue
            for kind in ROUTE_KINDS:
                files[self.config.routes_dir / route_filename(schema, kind)] = render_route(
                    schema, kind, self.settings, self.renderer, template_path=template
                )
        return await self._write_all(files)

    async def cleanup_stale(
        self,
        directory: Path,
        keep: Iterable[str],
        protected: Iterable[str] = (),
    ) -> list[Path]:
        """Delete ``<slug>.ts`` files in *directory* whose slug is not in *keep*."""
        if not directory.is_dir():
            return []

        allowed = set(keep) | set(protected)
        removed: list[Path] = []
        for path in sorted(directory.glob("*.ts")):
            if path.stem in allowed:
                continue
            await asyncio.to_thread(path.unlink)
            self.log.info("stale_artifact_removed", path=str(path), identifier=path.stem)
            removed.append(path)
        return removed

    # -- Internal helpers --------------------------------------------------

    async def _write_all(self, files: dict[Path, str]) -> list[Path]:
        written = await asyncio.gather(
            *(self.renderer.write(path, content) for path, content in files.items())
        )
        return list(written)
