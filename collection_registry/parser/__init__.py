"""Collection Registry metadata parser.

Extracts structured schema descriptions from Payload collection files and
maps their field types to TypeScript signatures.

Usage::

    from collection_registry.parser import extract_schema, map_type

    schema = extract_schema(text, "Posts.ts")
    if schema is not None:
        print(schema.identifier, schema.has_slug)
        print(map_type("select", "status"))
"""

from collection_registry.parser.models import (
    Capability,
    FieldDescriptor,
    SchemaDescriptor,
    dedupe_fields,
)
from collection_registry.parser.extractor import (
    analyze_fields,
    extract_document,
    extract_schema,
    scan_documents,
)
from collection_registry.parser.inflection import (
    capitalize,
    display_name_from,
    pluralize,
    singularize,
)
from collection_registry.parser.type_mapper import NameOverride, TypeMapper, map_type

__all__ = [
    "Capability",
    "FieldDescriptor",
    "SchemaDescriptor",
    "dedupe_fields",
    "analyze_fields",
    "extract_document",
    "extract_schema",
    "scan_documents",
    "capitalize",
    "display_name_from",
    "pluralize",
    "singularize",
    "NameOverride",
    "TypeMapper",
    "map_type",
]
