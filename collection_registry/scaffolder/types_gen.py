"""Type-declaration emitter.

Renders TypeScript interfaces and helper types from schema descriptors.
Every function returns a string; writing files is the generator's job.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from collection_registry.config import ExtractionSettings
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.parser.type_mapper import TypeMapper, literal_union
from collection_registry.scaffolder.context import default_renderer, schema_names
from collection_registry.scaffolder.templates import TemplateRenderer

MEDIA_IDENTIFIER = "media"


def field_lines(schema: SchemaDescriptor, mapper: TypeMapper | None = None) -> list[dict[str, Any]]:
    """Per-field template context: name, required flag and mapped type."""
    mapper = mapper or TypeMapper()
    return [
        {
            "name": field.name,
            "required": field.required,
            "ts_type": mapper.map_type(field.primitive_type, field.name),
        }
        for field in schema.fields
    ]


def render_base_types(
    settings: ExtractionSettings | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Shared response, media, query and navigation types."""
    settings = settings or ExtractionSettings()
    status = settings.status_values
    renderer = renderer or default_renderer()
    return renderer.render(
        "types/base.ts.j2",
        {
            "status_union": literal_union(
                [status.draft, status.published, status.scheduled, status.archived]
            ),
        },
    )


def render_collection_type(
    schema: SchemaDescriptor,
    mapper: TypeMapper | None = None,
    renderer: TemplateRenderer | None = None,
    template_path: Path | None = None,
) -> str:
    """Interface plus ``Input``/``Update``/``Create`` helpers for one schema.

    The ``media`` collection re-exports the base ``Media`` type instead.
    """
    renderer = renderer or default_renderer()
    if schema.identifier == MEDIA_IDENTIFIER:
        return renderer.render("types/media.ts.j2", {})

    context = {
        "schema": schema,
        "type_name": schema_names(schema).type_name,
        "fields": field_lines(schema, mapper),
    }
    if template_path is not None:
        return renderer.render_file(template_path, context)
    return renderer.render("types/collection.ts.j2", context)


def render_types_index(
    schemas: Sequence[SchemaDescriptor],
    renderer: TemplateRenderer | None = None,
) -> str:
    """``types.ts`` barrel re-exporting base, collection and global types.

    Each collection's main type is also re-exported by name, since ``Media``
    is exported by both ``types/base`` and ``types/media``.
    """
    renderer = renderer or default_renderer()
    exports = [
        {"identifier": schema.identifier, "type_name": schema_names(schema).type_name}
        for schema in schemas
    ]
    return renderer.render("types/index.ts.j2", {"exports": exports})


def render_site_settings_type(renderer: TemplateRenderer | None = None) -> str:
    renderer = renderer or default_renderer()
    return renderer.render("types/site-settings.ts.j2", {})


def validation_rules(field_type: str, required: bool) -> list[str]:
    """Form validation rules implied by a field's type and required flag."""
    rules: list[str] = []
    if required:
        rules.append("required: true")
    if field_type == "email":
        rules.append("email: true")
    if field_type == "number":
        rules.append('type: "number"')
    return rules


def render_validation_schema(
    schema: SchemaDescriptor,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Validation-rule object for form libraries."""
    renderer = renderer or default_renderer()
    fields = [
        {"name": f.name, "rules": validation_rules(f.primitive_type, f.required)}
        for f in schema.fields
    ]
    return renderer.render(
        "types/validation.ts.j2",
        {"schema": schema, "type_name": schema_names(schema).type_name, "fields": fields},
    )
