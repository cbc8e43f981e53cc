"""Data-access client emitter.

Each collection gets a ``BasePayloadClient`` subclass whose methods depend on
the schema's capability flags:

* ``get<Plural>`` -- always;
* ``get<Singular>`` -- iff the schema has a slug field;
* ``getPublished<Plural>`` -- iff it has a status field;
* ``get<Plural>ForNavigation`` -- iff it has a navigation field.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from collection_registry.config import ExtractionSettings
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.scaffolder.context import (
    ClientMethod,
    default_renderer,
    enabled_methods,
    schema_names,
)
from collection_registry.scaffolder.templates import TemplateRenderer

_METHOD_TEMPLATES: dict[ClientMethod, str] = {
    ClientMethod.LIST: "clients/methods/list.ts.j2",
    ClientMethod.GET_BY_SLUG: "clients/methods/get_by_slug.ts.j2",
    ClientMethod.LIST_PUBLISHED: "clients/methods/list_published.ts.j2",
    ClientMethod.LIST_FOR_NAVIGATION: "clients/methods/list_for_navigation.ts.j2",
}


def _method_context(schema: SchemaDescriptor, settings: ExtractionSettings) -> dict[str, Any]:
    names = schema_names(schema)
    mappings = settings.field_mappings
    return {
        "identifier": schema.identifier,
        "type_name": names.type_name,
        "plural_name": names.plural_name,
        "list_method": names.list_method,
        "slug_field": mappings.slug_field,
        "status_field": mappings.status_field,
        "navigation_field": mappings.navigation_field,
        "published_value": settings.status_values.published,
        "has_status": schema.has_status,
    }


def client_methods(
    schema: SchemaDescriptor,
    settings: ExtractionSettings | None = None,
    renderer: TemplateRenderer | None = None,
) -> dict[ClientMethod, str]:
    """Render the method bodies *schema* supports, keyed by method kind."""
    settings = settings or ExtractionSettings()
    renderer = renderer or default_renderer()
    names = schema_names(schema)
    base_context = _method_context(schema, settings)

    methods: dict[ClientMethod, str] = {}
    for method in enabled_methods(schema):
        context = {**base_context, "method_name": names.method_name(method)}
        methods[method] = renderer.render(_METHOD_TEMPLATES[method], context).rstrip("\n")
    return methods


def render_base_client(base_url: str, renderer: TemplateRenderer | None = None) -> str:
    """Abstract base class wrapping ``fetch`` and query-string building.

    *base_url* is emitted verbatim as a TypeScript expression, e.g.
    ``process.env.CMS_API_URL`` or ``"https://cms.example.com/api"``.
    """
    renderer = renderer or default_renderer()
    return renderer.render("clients/base.ts.j2", {"base_url": base_url})


def render_collection_client(
    schema: SchemaDescriptor,
    settings: ExtractionSettings | None = None,
    renderer: TemplateRenderer | None = None,
    template_path: Path | None = None,
) -> str:
    renderer = renderer or default_renderer()
    names = schema_names(schema)
    context = {
        "schema": schema,
        "type_name": names.type_name,
        "class_name": names.class_name,
        "client_var": names.client_var,
        "methods": list(client_methods(schema, settings, renderer).values()),
    }
    if template_path is not None:
        return renderer.render_file(template_path, context)
    return renderer.render("clients/collection.ts.j2", context)


def _client_entries(schemas: Sequence[SchemaDescriptor]) -> list[dict[str, Any]]:
    entries = []
    for schema in schemas:
        names = schema_names(schema)
        entries.append({
            "identifier": schema.identifier,
            "type_name": names.type_name,
            "class_name": names.class_name,
            "client_var": names.client_var,
            "method_names": [names.method_name(m) for m in enabled_methods(schema)],
        })
    return entries


def render_client_index(
    schemas: Sequence[SchemaDescriptor],
    renderer: TemplateRenderer | None = None,
) -> str:
    renderer = renderer or default_renderer()
    return renderer.render("clients/index.ts.j2", {"clients": _client_entries(schemas)})


def render_main_client(
    schemas: Sequence[SchemaDescriptor],
    renderer: TemplateRenderer | None = None,
) -> str:
    """``payloadClient.ts``: one object delegating to every collection client."""
    renderer = renderer or default_renderer()
    return renderer.render("payloadClient.ts.j2", {"clients": _client_entries(schemas)})


def render_site_settings_client(renderer: TemplateRenderer | None = None) -> str:
    renderer = renderer or default_renderer()
    return renderer.render("clients/site-settings.ts.j2", {})
