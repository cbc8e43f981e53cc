"""Heuristic metadata extractor for Payload collection files.

Recovers a collection's slug, display name and field list from raw
configuration text. This is deliberately *not* a parser: it uses pure regex
substring matching with bounded look-ahead windows -- no AST, no grammar.

Known limitation: ``required: true`` is searched in a fixed window after each
``name: '...'`` match. When field declarations are very short, a marker that
belongs to the next field can fall inside the window and be attributed to
the current one.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable
from typing import Any

import structlog

from collection_registry.config import ExtractionSettings
from collection_registry.errors import ExtractionError
from collection_registry.parser.inflection import display_name_from
from collection_registry.parser.models import FieldDescriptor, SchemaDescriptor, dedupe_fields

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_QUOTED = r"""['"`]([^'"`]+)['"`]"""

_IDENTIFIER_PATTERN = re.compile(r"slug:\s*" + _QUOTED)
_TITLE_PATTERN = re.compile(r"useAsTitle:\s*" + _QUOTED)
_NAME_PATTERN = re.compile(r"name:\s*" + _QUOTED)
_TYPE_PATTERN = re.compile(r"type:\s*" + _QUOTED)
_REQUIRED_PATTERN = re.compile(r"required:\s*true\b")

_TITLE_LITERAL = "title"


# ---------------------------------------------------------------------------
# Field extraction
# ---------------------------------------------------------------------------

def analyze_fields(text: str, settings: ExtractionSettings | None = None) -> list[FieldDescriptor]:
    """Extract every ``name: '...'`` declaration in *text* as a field.

    The type is the first ``type: '...'`` within ``settings.type_window``
    chars of the name (``settings.default_type`` if none). The field is
    required iff ``required: true`` occurs within ``settings.required_window``
    chars. Duplicates are kept; see :func:`dedupe_fields`.
    """
    settings = settings or ExtractionSettings()
    fields: list[FieldDescriptor] = []

    for match in _NAME_PATTERN.finditer(text):
        start = match.start()

        type_window = text[start:start + settings.type_window]
        type_match = _TYPE_PATTERN.search(type_window)
        primitive_type = type_match.group(1) if type_match else settings.default_type

        required_window = text[start:start + settings.required_window]
        required = _REQUIRED_PATTERN.search(required_window) is not None

        fields.append(
            FieldDescriptor(name=match.group(1), primitive_type=primitive_type, required=required)
        )

    return fields


def _derive_display_name(identifier: str, title_ref: str | None) -> str:
    """Display name from the title reference, or from the slug.

    ``useAsTitle: 'title'`` is the common case and would name every
    collection "Title", so it falls back to the slug as well.
    """
    if title_ref and title_ref != _TITLE_LITERAL:
        return display_name_from(title_ref)
    return display_name_from(identifier)


# ---------------------------------------------------------------------------
# Schema extraction
# ---------------------------------------------------------------------------

def extract_schema(
    text: str,
    source_name: str,
    settings: ExtractionSettings | None = None,
) -> SchemaDescriptor | None:
    """Extract a :class:`SchemaDescriptor` from one collection document.

    Args:
        text: Raw document text; no well-formedness is assumed.
        source_name: File or document name, kept for diagnostics.
        settings: Windows, markers and field-name mappings. Defaults apply
            when omitted.

    Returns:
        The descriptor, or ``None`` when the document declares no
        ``slug: '...'`` (e.g. an index/barrel file). ``None`` is a normal
        skip, not an error.

    Raises:
        ExtractionError: If scanning fails unexpectedly.
    """
    settings = settings or ExtractionSettings()

    identifier_match = _IDENTIFIER_PATTERN.search(text)
    if identifier_match is None:
        return None
    identifier = identifier_match.group(1)

    title_match = _TITLE_PATTERN.search(text)
    display_name = _derive_display_name(identifier, title_match.group(1) if title_match else None)

    try:
        fields = dedupe_fields(analyze_fields(text, settings))
        return SchemaDescriptor(
            identifier=identifier,
            display_name=display_name,
            source_name=source_name,
            fields=tuple(fields),
            is_public=settings.public_marker in text,
            field_mappings=settings.field_mappings,
        )
    except Exception as exc:
        raise ExtractionError(source_name, str(exc)) from exc


def extract_document(
    text: str,
    source_name: str,
    settings: ExtractionSettings | None = None,
    log: Any | None = None,
) -> SchemaDescriptor | None:
    """Document-boundary wrapper around :func:`extract_schema`.

    Never raises: an extraction failure is logged with the source name and
    reported as ``None`` so a batch run can continue.
    """
    log = log if log is not None else logger
    try:
        schema = extract_schema(text, source_name, settings)
    except Exception as exc:
        log.error("schema_extraction_failed", source_name=source_name, error=str(exc))
        return None

    if schema is None:
        log.debug("schema_skipped", source_name=source_name, reason="no slug declaration")
        return None

    log.info(
        "schema_found",
        source_name=source_name,
        identifier=schema.identifier,
        display_name=schema.display_name,
        fields=len(schema.fields),
    )
    return schema


def scan_documents(
    documents: Iterable[tuple[str, str]],
    settings: ExtractionSettings | None = None,
    log: Any | None = None,
    skip: Collection[str] = (),
) -> dict[str, SchemaDescriptor]:
    """Extract every document and collect the schemas by identifier.

    Args:
        documents: ``(raw_text, source_name)`` pairs.
        settings: Extraction settings shared by every document.
        log: structlog-compatible logger; the module logger by default.
        skip: Identifiers to leave out (e.g. demonstration collections).

    Returns:
        Insertion-ordered mapping of identifier to descriptor. When two
        documents declare the same identifier the first one is kept.
    """
    log = log if log is not None else logger
    schemas: dict[str, SchemaDescriptor] = {}

    for text, source_name in documents:
        schema = extract_document(text, source_name, settings, log)
        if schema is None:
            continue
        if schema.identifier in skip:
            log.info(
                "schema_skipped",
                source_name=source_name,
                identifier=schema.identifier,
                reason="excluded by configuration",
            )
            continue
        if schema.identifier in schemas:
            log.warning(
                "duplicate_schema_identifier",
                source_name=source_name,
                identifier=schema.identifier,
                kept=schemas[schema.identifier].source_name,
            )
            continue
        schemas[schema.identifier] = schema

    return schemas
