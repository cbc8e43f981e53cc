"""Shared pytest fixtures for the Collection Registry test suite.

Provides reusable fixtures for:
- Sample Payload collection documents (posts, articles, media, barrel file)
- A temporary collections directory populated with those documents
- A RegistryConfig pointing at temporary input/output paths
- Parsed schema descriptors
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
import structlog

from collection_registry.config import RegistryConfig
from collection_registry.parser.extractor import extract_schema
from collection_registry.parser.models import SchemaDescriptor


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any ``configure_logging`` call made by a test (e.g. via the CLI)."""
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

@pytest.fixture
def posts_document() -> str:
    """A small public collection with title, slug and status fields."""
    return textwrap.dedent("""\
        import type { CollectionConfig } from 'payload';

        export const Posts: CollectionConfig = {
          slug: 'posts',
          admin: {
            useAsTitle: 'title',
          },
          access: {
            read: () => true,
          },
          fields: [
            {
              name: 'title',
              type: 'text',
              required: true,
            },
            {
              name: 'slug',
              type: 'text',
            },
            {
              name: 'status',
              type: 'select',
              options: [
                { label: 'Draft', value: 'draft' },
                { label: 'Published', value: 'published' },
              ],
            },
          ],
        };
    """)


@pytest.fixture
def articles_document() -> str:
    """A feature-rich collection exercising every capability but tags."""
    return textwrap.dedent("""\
        import type { CollectionConfig } from 'payload';

        export const Articles: CollectionConfig = {
          slug: 'articles',
          admin: {
            useAsTitle: 'title',
          },
          access: {
            read: () => true,
          },
          fields: [
            {
              name: 'title',
              type: 'text',
              required: true,
            },
            {
              name: 'slug',
              type: 'text',
              required: true,
              unique: true,
            },
            {
              name: 'excerpt',
              type: 'textarea',
            },
            {
              name: 'featuredImage',
              type: 'upload',
              relationTo: 'media',
            },
            {
              name: 'status',
              type: 'select',
              defaultValue: 'draft',
              options: ['draft', 'published'],
            },
            {
              name: 'showInNavigation',
              type: 'checkbox',
              defaultValue: false,
            },
            {
              name: 'author',
              type: 'relationship',
              relationTo: 'users',
            },
            {
              name: 'seo',
              type: 'group',
              fields: [
                {
                  name: 'description',
                  type: 'textarea',
                },
              ],
            },
          ],
        };
    """)


@pytest.fixture
def media_document() -> str:
    """Upload collection without a slug field."""
    return textwrap.dedent("""\
        import type { CollectionConfig } from 'payload';

        export const Media: CollectionConfig = {
          slug: 'media',
          access: {
            read: () => true,
          },
          upload: true,
          fields: [
            {
              name: 'alt',
              type: 'text',
              required: true,
            },
          ],
        };
    """)


@pytest.fixture
def index_document() -> str:
    """Barrel file: contains no ``slug:`` declaration."""
    return textwrap.dedent("""\
        export { Posts } from './Posts';
        export { Media } from './Media';
    """)


# ---------------------------------------------------------------------------
# Parsed schemas
# ---------------------------------------------------------------------------

@pytest.fixture
def posts_schema(posts_document: str) -> SchemaDescriptor:
    schema = extract_schema(posts_document, "Posts.ts")
    assert schema is not None
    return schema


@pytest.fixture
def articles_schema(articles_document: str) -> SchemaDescriptor:
    schema = extract_schema(articles_document, "Articles.ts")
    assert schema is not None
    return schema


@pytest.fixture
def media_schema(media_document: str) -> SchemaDescriptor:
    schema = extract_schema(media_document, "Media.ts")
    assert schema is not None
    return schema


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def collections_dir(
    tmp_path: Path,
    posts_document: str,
    articles_document: str,
    media_document: str,
    index_document: str,
) -> Path:
    """Temporary collections directory with four files (one barrel)."""
    directory = tmp_path / "collections"
    directory.mkdir()
    (directory / "Posts.ts").write_text(posts_document, encoding="utf-8")
    (directory / "Articles.ts").write_text(articles_document, encoding="utf-8")
    (directory / "Media.ts").write_text(media_document, encoding="utf-8")
    (directory / "index.ts").write_text(index_document, encoding="utf-8")
    return directory


@pytest.fixture
def registry_config(tmp_path: Path, collections_dir: Path) -> RegistryConfig:
    """Configuration reading ``collections_dir`` and writing under tmp_path."""
    return RegistryConfig(
        collections_path=collections_dir,
        output_path=tmp_path / "generated",
        types_path=tmp_path / "payload-types.ts",
    )
