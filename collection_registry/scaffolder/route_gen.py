"""React Router route emitter.

Only schemas with a slug field get routes: an index listing
(``<slug>._index.tsx``) and a detail page (``<slug>.$slug.tsx``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from collection_registry.config import ExtractionSettings
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.scaffolder.context import default_renderer, schema_names
from collection_registry.scaffolder.templates import TemplateRenderer

RouteKind = Literal["index", "detail"]

ROUTE_KINDS: tuple[RouteKind, ...] = ("index", "detail")

_ROUTE_TEMPLATES: dict[str, str] = {
    "index": "routes/index.tsx.j2",
    "detail": "routes/detail.tsx.j2",
}


def route_filename(schema: SchemaDescriptor, kind: RouteKind) -> str:
    if kind == "index":
        return f"{schema.identifier}._index.tsx"
    return f"{schema.identifier}.$slug.tsx"


def _description_expr(schema: SchemaDescriptor, item_var: str, settings: ExtractionSettings) -> str:
    parts = []
    if schema.has_excerpt:
        parts.append(f"{item_var}.{settings.field_mappings.excerpt_field}")
    if schema.has_seo:
        parts.append(f"{item_var}.{settings.field_mappings.seo_field}?.description")
    parts.append("'Read more'")
    return " || ".join(parts)


def _route_context(
    schema: SchemaDescriptor, settings: ExtractionSettings, site_name: str
) -> dict[str, Any]:
    names = schema_names(schema)
    mappings = settings.field_mappings
    return {
        "schema": schema,
        "identifier": schema.identifier,
        "type_name": names.type_name,
        "plural_name": names.plural_name,
        "collection_var": names.collection_var,
        "item_var": names.item_var,
        "list_method": names.list_method,
        "get_method": names.get_method,
        "published_method": names.published_method,
        "has_status": schema.has_status,
        "has_excerpt": schema.has_excerpt,
        "has_featured_image": schema.has_featured_image,
        "slug_field": mappings.slug_field,
        "excerpt_field": mappings.excerpt_field,
        "featured_image_field": mappings.featured_image_field,
        "description_expr": _description_expr(schema, names.item_var, settings),
        "site_name": site_name,
    }


def render_route(
    schema: SchemaDescriptor,
    kind: RouteKind,
    settings: ExtractionSettings | None = None,
    renderer: TemplateRenderer | None = None,
    template_path: Path | None = None,
    site_name: str = "My App",
) -> str:
    """Render the *kind* route for *schema*.

    A custom *template_path* receives the same context plus ``kind``.

    Raises:
        ValueError: If *kind* is not ``"index"`` or ``"detail"``.
    """
    if kind not in _ROUTE_TEMPLATES:
        raise ValueError(f"Unknown route kind: {kind!r}")
    settings = settings or ExtractionSettings()
    renderer = renderer or default_renderer()
    context = {**_route_context(schema, settings, site_name), "kind": kind}
    if template_path is not None:
        return renderer.render_file(template_path, context)
    return renderer.render(_ROUTE_TEMPLATES[kind], context)
