"""Pydantic v2 models for the Collection Registry metadata parser.

Defines the structured description recovered from a collection file: its
fields, its identity and the capability flags derived from well-known field
names.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from collection_registry.config import FieldMappings
from collection_registry.parser.inflection import pluralize


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Capability(str, Enum):
    """A well-known field role. A schema has a capability iff it declares
    the field mapped to that role."""
    SLUG = "slug"
    STATUS = "status"
    SEO = "seo"
    NAVIGATION = "navigation"
    FEATURED_IMAGE = "featured_image"
    EXCERPT = "excerpt"
    TAGS = "tags"
    AUTHOR = "author"


_CAPABILITY_FIELDS: dict[Capability, str] = {
    Capability.SLUG: "slug_field",
    Capability.STATUS: "status_field",
    Capability.SEO: "seo_field",
    Capability.NAVIGATION: "navigation_field",
    Capability.FEATURED_IMAGE: "featured_image_field",
    Capability.EXCERPT: "excerpt_field",
    Capability.TAGS: "tags_field",
    Capability.AUTHOR: "author_field",
}


def field_name_for(capability: Capability, mappings: FieldMappings) -> str:
    """Return the field name that marks *capability* under *mappings*."""
    return getattr(mappings, _CAPABILITY_FIELDS[capability])


# ---------------------------------------------------------------------------
# Field Model
# ---------------------------------------------------------------------------

class FieldDescriptor(BaseModel):
    """A single declared field of a collection."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Field name, e.g. 'title'")
    primitive_type: str = Field(
        default="text", description="Declared field kind, e.g. 'text', 'select', 'upload'"
    )
    required: bool = Field(default=False, description="Whether 'required: true' was found")


def dedupe_fields(fields: list[FieldDescriptor] | tuple[FieldDescriptor, ...]) -> list[FieldDescriptor]:
    """Drop repeated field names, keeping the first occurrence of each."""
    seen: set[str] = set()
    unique: list[FieldDescriptor] = []
    for field in fields:
        if field.name in seen:
            continue
        seen.add(field.name)
        unique.append(field)
    return unique


# ---------------------------------------------------------------------------
# Schema Model
# ---------------------------------------------------------------------------

class SchemaDescriptor(BaseModel):
    """One extracted collection definition.

    Capability flags are computed from ``fields`` and ``field_mappings`` on
    every access, so they can never drift from the field list.
    """
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Collection slug, e.g. 'posts'")
    display_name: str = Field(..., min_length=1, description="Capitalized label, e.g. 'Posts'")
    source_name: str = Field(default="", description="Originating file name")
    fields: tuple[FieldDescriptor, ...] = Field(default_factory=tuple)
    is_public: bool = Field(default=False, description="Whether public read access is granted")
    field_mappings: FieldMappings = Field(default_factory=FieldMappings, exclude=True, repr=False)

    @field_validator("fields")
    @classmethod
    def _dedupe(cls, value: tuple[FieldDescriptor, ...]) -> tuple[FieldDescriptor, ...]:
        return tuple(dedupe_fields(value))

    def model_copy(
        self, *, update: Mapping[str, Any] | None = None, deep: bool = False
    ) -> SchemaDescriptor:
        """Copy with *update* applied; a replacement ``fields`` is deduplicated.

        Pydantic skips validators on copy, so the field invariant is
        re-applied here.
        """
        if update and "fields" in update:
            update = {**update, "fields": tuple(dedupe_fields(tuple(update["fields"])))}
        return super().model_copy(update=update, deep=deep)

    # -- Derived values ------------------------------------------------------

    @computed_field
    @property
    def plural_display_name(self) -> str:
        return pluralize(self.display_name)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self.fields)

    def has_capability(self, capability: Capability) -> bool:
        return self.has_field(field_name_for(capability, self.field_mappings))

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Every capability this schema's fields provide."""
        return frozenset(c for c in Capability if self.has_capability(c))

    @computed_field
    @property
    def has_slug(self) -> bool:
        return self.has_capability(Capability.SLUG)

    @computed_field
    @property
    def has_status(self) -> bool:
        return self.has_capability(Capability.STATUS)

    @computed_field
    @property
    def has_seo(self) -> bool:
        return self.has_capability(Capability.SEO)

    @computed_field
    @property
    def has_navigation(self) -> bool:
        return self.has_capability(Capability.NAVIGATION)

    @computed_field
    @property
    def has_featured_image(self) -> bool:
        return self.has_capability(Capability.FEATURED_IMAGE)

    @computed_field
    @property
    def has_excerpt(self) -> bool:
        return self.has_capability(Capability.EXCERPT)

    @computed_field
    @property
    def has_tags(self) -> bool:
        return self.has_capability(Capability.TAGS)

    @computed_field
    @property
    def has_author(self) -> bool:
        return self.has_capability(Capability.AUTHOR)
