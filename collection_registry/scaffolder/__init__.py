"""Collection Registry scaffolder -- renders TypeScript artifacts.

Emitters are pure functions from schema descriptors to source strings;
``ArtifactGenerator`` writes them to disk.

Quick usage::

    from collection_registry.scaffolder import ArtifactGenerator

    generator = ArtifactGenerator(config)
    result = await generator.generate(schemas)
"""

from collection_registry.scaffolder.client_gen import client_methods, render_collection_client
from collection_registry.scaffolder.context import ClientMethod
from collection_registry.scaffolder.generator import ArtifactGenerator, GenerationResult
from collection_registry.scaffolder.route_gen import render_route
from collection_registry.scaffolder.templates import TemplateRenderer
from collection_registry.scaffolder.types_gen import render_collection_type

__all__ = [
    "ArtifactGenerator",
    "ClientMethod",
    "GenerationResult",
    "TemplateRenderer",
    "client_methods",
    "render_collection_client",
    "render_collection_type",
    "render_route",
]
