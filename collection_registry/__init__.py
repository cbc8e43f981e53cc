"""Collection Registry.

Detects Payload CMS collections and generates web-app code from them:
TypeScript types, API client classes and React Router routes.

Usage::

    import asyncio
    from collection_registry import CollectionRegistry, RegistryConfig

    registry = CollectionRegistry(RegistryConfig(collections_path="./cms/collections"))
    asyncio.run(registry.generate())
    registry.report()
"""

from collection_registry.config import (
    ExtractionSettings,
    FieldMappings,
    RegistryConfig,
    StatusValues,
    TemplateOverrides,
)
from collection_registry.errors import ConfigError, ExtractionError, RegistryError
from collection_registry.registry import CollectionRegistry

__version__ = "0.1.0"

__all__ = [
    "CollectionRegistry",
    "RegistryConfig",
    "ExtractionSettings",
    "FieldMappings",
    "StatusValues",
    "TemplateOverrides",
    "RegistryError",
    "ConfigError",
    "ExtractionError",
]
