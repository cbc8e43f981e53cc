"""Collection Registry configuration.

Centralised, typed configuration for a generation run. All settings use
Pydantic v2 models so they can be validated at construction time and loaded
from YAML, JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from collection_registry.errors import ConfigError


class FieldMappings(BaseModel):
    """Field names that mark a well-known role in a collection.

    Capability flags (``has_slug``, ``has_status``, ...) are computed by
    looking these names up in a schema's field list, so projects with their
    own naming conventions only need to override the names here.
    """

    model_config = ConfigDict(frozen=True)

    slug_field: str = Field(default="slug")
    status_field: str = Field(default="status")
    seo_field: str = Field(default="seo")
    navigation_field: str = Field(default="showInNavigation")
    featured_image_field: str = Field(default="featuredImage")
    excerpt_field: str = Field(default="excerpt")
    tags_field: str = Field(default="tags")
    author_field: str = Field(default="author")


class StatusValues(BaseModel):
    """Literal values used for the lifecycle states of a ``status`` field."""

    model_config = ConfigDict(frozen=True)

    draft: str = Field(default="draft")
    published: str = Field(default="published")
    scheduled: str = Field(default="scheduled")
    archived: str = Field(default="archived")


class ExtractionSettings(BaseModel):
    """Knobs for the heuristic metadata extractor.

    The windows are measured in characters from the start of each
    ``name: '...'`` match.
    """

    model_config = ConfigDict(frozen=True)

    required_window: int = Field(
        default=200, ge=1, description="Chars after a field name searched for 'required: true'"
    )
    type_window: int = Field(
        default=1000, ge=1, description="Chars after a field name searched for 'type: ...'"
    )
    default_type: str = Field(default="text", min_length=1)
    public_marker: str = Field(default="read: () => true", min_length=1)
    field_mappings: FieldMappings = Field(default_factory=FieldMappings)
    status_values: StatusValues = Field(default_factory=StatusValues)


class TemplateOverrides(BaseModel):
    """Optional paths to Jinja2 files replacing the built-in templates."""

    collection_type: Path | None = Field(default=None)
    api_client: Path | None = Field(default=None)
    routes: Path | None = Field(default=None)


class RegistryConfig(BaseModel):
    """Global Collection Registry configuration.

    Instances are typically created once by the CLI entry point (or by
    :meth:`load`) and then passed to ``CollectionRegistry``.
    """

    collections_path: Path = Field(default=Path("./src/collections"))
    output_path: Path = Field(default=Path("./generated"))
    types_path: Path = Field(default=Path("./payload-types.ts"))
    format: bool = Field(default=False, description="Run Prettier over generated files")
    base_url: str = Field(default="process.env.CMS_API_URL")
    skip_examples: bool = Field(
        default=True, description="Skip the demonstration 'examples' collection"
    )
    debug: bool = Field(default=False)

    field_mappings: FieldMappings = Field(default_factory=FieldMappings)
    status_values: StatusValues = Field(default_factory=StatusValues)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    templates: TemplateOverrides = Field(default_factory=TemplateOverrides)

    # Document discovery
    extensions: list[str] = Field(default=[".ts"])
    exclude: list[str] = Field(default=["index.ts"])

    def extraction_settings(self) -> ExtractionSettings:
        """Return the extraction settings with this config's mappings applied."""
        return self.extraction.model_copy(
            update={
                "field_mappings": self.field_mappings,
                "status_values": self.status_values,
            }
        )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def types_dir(self) -> Path:
        return self.output_path / "types"

    @property
    def clients_dir(self) -> Path:
        return self.output_path / "clients"

    @property
    def routes_dir(self) -> Path:
        return self.output_path / "routes"

    @property
    def validation_dir(self) -> Path:
        return self.output_path / "validation"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration as JSON or YAML (chosen by suffix).

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.suffix in (".yaml", ".yml"):
            data = self.model_dump(mode="json")
            target.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "RegistryConfig":
        """Load a configuration file.

        ``.yaml``/``.yml`` files are read with PyYAML, everything else as
        JSON.

        Raises:
            ConfigError: If the file is missing, unparsable or fails
                validation.
        """
        file_path = Path(path)
        try:
            raw = file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {file_path}: {exc}") from exc

        try:
            if file_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(raw) or {}
            else:
                data = json.loads(raw)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Invalid config file {file_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {file_path} must contain a mapping")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {file_path}: {exc}") from exc

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Build a ``RegistryConfig`` from environment variables.

        Recognised variables (all optional):
            COLLECTION_REGISTRY_COLLECTIONS_PATH, COLLECTION_REGISTRY_OUTPUT_PATH,
            COLLECTION_REGISTRY_TYPES_PATH, COLLECTION_REGISTRY_BASE_URL,
            COLLECTION_REGISTRY_FORMAT, COLLECTION_REGISTRY_SKIP_EXAMPLES,
            COLLECTION_REGISTRY_DEBUG.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("COLLECTION_REGISTRY_COLLECTIONS_PATH"):
            kwargs["collections_path"] = Path(os.environ["COLLECTION_REGISTRY_COLLECTIONS_PATH"])
        if os.environ.get("COLLECTION_REGISTRY_OUTPUT_PATH"):
            kwargs["output_path"] = Path(os.environ["COLLECTION_REGISTRY_OUTPUT_PATH"])
        if os.environ.get("COLLECTION_REGISTRY_TYPES_PATH"):
            kwargs["types_path"] = Path(os.environ["COLLECTION_REGISTRY_TYPES_PATH"])
        if os.environ.get("COLLECTION_REGISTRY_BASE_URL"):
            kwargs["base_url"] = os.environ["COLLECTION_REGISTRY_BASE_URL"]

        for flag in ("format", "skip_examples", "debug"):
            value = os.environ.get(f"COLLECTION_REGISTRY_{flag.upper()}")
            if value:
                kwargs[flag] = value.strip().lower() in ("1", "true", "yes", "on")

        return cls(**kwargs)
