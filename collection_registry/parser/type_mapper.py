"""Mapping from Payload field types to TypeScript type signatures.

The mapping is data-driven: a general lookup table keyed by the primitive
type tag, preceded by an ordered list of name-based overrides. The first
override whose predicate matches wins; otherwise the table is consulted, and
unknown tags fall back to ``any``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from collection_registry.config import ExtractionSettings, FieldMappings, StatusValues

FALLBACK_SIGNATURE = "any"

TYPE_TABLE: dict[str, str] = {
    "text": "string",
    "textarea": "string",
    "email": "string",
    "code": "string",
    "date": "string",
    "select": "string",
    "radio": "string",
    "number": "number",
    "checkbox": "boolean",
    "upload": "Media",
    "richText": "any",
    "relationship": "any",
    "group": "any",
    "json": "any",
    "collapsible": "any",
    "row": "any",
    "tabs": "any",
    "array": "any[]",
    "blocks": "any[]",
    "point": "[number, number]",
}

TEMPLATE_VARIANTS: tuple[str, ...] = ("default", "full-width", "sidebar", "landing")


@dataclass(frozen=True)
class NameOverride:
    """A ``(predicate, signature)`` pair checked before the general table."""

    label: str
    predicate: Callable[[str, str], bool]
    signature: str

    def matches(self, primitive_type: str, field_name: str) -> bool:
        return self.predicate(primitive_type, field_name)


def literal_union(values: Sequence[str]) -> str:
    """Render a closed union of string literals, e.g. ``"a" | "b"``."""
    return " | ".join(f'"{v}"' for v in values)


def default_overrides(
    mappings: FieldMappings | None = None,
    status_values: StatusValues | None = None,
) -> list[NameOverride]:
    """Build the built-in name overrides.

    Order matters: status and template selects are checked before the
    generic ``*slug*`` rule.
    """
    mappings = mappings or FieldMappings()
    status_values = status_values or StatusValues()
    status_field = mappings.status_field

    return [
        NameOverride(
            label="status-select",
            predicate=lambda t, n: n == status_field and t == "select",
            signature=literal_union([status_values.draft, status_values.published]),
        ),
        NameOverride(
            label="template-select",
            predicate=lambda t, n: n == "template" and t == "select",
            signature=literal_union(TEMPLATE_VARIANTS),
        ),
        NameOverride(
            label="slug-name",
            predicate=lambda t, n: "slug" in n.lower(),
            signature="string",
        ),
    ]


class TypeMapper:
    """Turns ``(primitive_type, field_name)`` into a TypeScript signature.

    ``map_type`` is total: it always returns a non-empty string and never
    raises.
    """

    def __init__(
        self,
        table: Mapping[str, str] | None = None,
        overrides: Sequence[NameOverride] | None = None,
        fallback: str = FALLBACK_SIGNATURE,
    ) -> None:
        self.table: dict[str, str] = dict(TYPE_TABLE if table is None else table)
        self.overrides: tuple[NameOverride, ...] = tuple(
            default_overrides() if overrides is None else overrides
        )
        self.fallback = fallback or FALLBACK_SIGNATURE

    @classmethod
    def from_settings(cls, settings: ExtractionSettings) -> "TypeMapper":
        """Build a mapper honouring the configured status field and values."""
        return cls(
            overrides=default_overrides(settings.field_mappings, settings.status_values)
        )

    def with_override(self, override: NameOverride, *, first: bool = False) -> "TypeMapper":
        """Return a copy with *override* appended (or prepended if *first*)."""
        overrides = (override, *self.overrides) if first else (*self.overrides, override)
        return TypeMapper(table=self.table, overrides=overrides, fallback=self.fallback)

    def with_types(self, extra: Mapping[str, str]) -> "TypeMapper":
        """Return a copy whose general table also contains *extra*."""
        return TypeMapper(
            table={**self.table, **extra}, overrides=self.overrides, fallback=self.fallback
        )

    def map_type(self, primitive_type: str, field_name: str = "") -> str:
        for override in self.overrides:
            if override.matches(primitive_type, field_name):
                return override.signature or self.fallback
        return self.table.get(primitive_type) or self.fallback


_DEFAULT_MAPPER = TypeMapper()


def map_type(primitive_type: str, field_name: str = "") -> str:
    """Map with the default table and overrides.

    Examples::

        map_type("text")              -> 'string'
        map_type("select", "status")  -> '"draft" | "published"'
        map_type("upload")            -> 'Media'
        map_type("unknown")           -> 'any'
    """
    return _DEFAULT_MAPPER.map_type(primitive_type, field_name)
