"""Tests for the data-access client emitter.

Covers:
- Method set following capability flags
- Published / navigation filters using configured field names and values
- By-slug lookup using the configured slug field
- Collection client class, base client, index and aggregated client
- Custom client templates
"""

from __future__ import annotations

from pathlib import Path

import pytest

from collection_registry.config import ExtractionSettings, FieldMappings, StatusValues
from collection_registry.parser.models import FieldDescriptor, SchemaDescriptor
from collection_registry.scaffolder.client_gen import (
    client_methods,
    render_base_client,
    render_client_index,
    render_collection_client,
    render_main_client,
)
from collection_registry.scaffolder.context import ClientMethod


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _schema(identifier: str, display_name: str, *field_names: str, **kwargs) -> SchemaDescriptor:
    return SchemaDescriptor(
        identifier=identifier,
        display_name=display_name,
        fields=tuple(FieldDescriptor(name=n) for n in field_names),
        **kwargs,
    )


@pytest.fixture
def pages_schema() -> SchemaDescriptor:
    """Every method enabled."""
    return _schema("pages", "Pages", "title", "slug", "status", "showInNavigation")


# ---------------------------------------------------------------------------
# Method selection
# ---------------------------------------------------------------------------


class TestClientMethods:
    def test_posts_methods(self, posts_schema):
        methods = client_methods(posts_schema)

        assert list(methods) == [
            ClientMethod.LIST,
            ClientMethod.GET_BY_SLUG,
            ClientMethod.LIST_PUBLISHED,
        ]

    def test_list_only_without_capabilities(self, media_schema):
        assert list(client_methods(media_schema)) == [ClientMethod.LIST]

    def test_list_method(self, posts_schema):
        body = client_methods(posts_schema)[ClientMethod.LIST]

        assert "async getPosts(options?: QueryOptions): Promise<PayloadResponse<Posts>> {" in body
        assert "`/posts?${params.toString()}`" in body
        assert not body.endswith("\n")

    def test_get_by_slug(self, posts_schema):
        body = client_methods(posts_schema)[ClientMethod.GET_BY_SLUG]

        assert "async getPost(slug: string, draft = false): Promise<Posts> {" in body
        assert "`/posts?where[slug][equals]=${encodeURIComponent(slug)}&${params.toString()}`" in body
        assert 'throw new Error(`Posts with slug "${slug}" not found`);' in body

    def test_published_filter(self, posts_schema):
        body = client_methods(posts_schema)[ClientMethod.LIST_PUBLISHED]

        assert "async getPublishedPosts(" in body
        assert "const response = await this.getPosts({" in body
        assert "status: { equals: 'published' }," in body

    def test_navigation_with_status(self, pages_schema):
        body = client_methods(pages_schema)[ClientMethod.LIST_FOR_NAVIGATION]

        assert "async getPagesForNavigation(): Promise<Pages[]> {" in body
        assert "showInNavigation: { equals: true }," in body
        assert "status: { equals: 'published' }," in body
        assert "sort: 'navigationOrder'," in body

    def test_navigation_without_status(self):
        schema = _schema("links", "Link", "showInNavigation")
        body = client_methods(schema)[ClientMethod.LIST_FOR_NAVIGATION]

        assert "showInNavigation: { equals: true }," in body
        assert "status:" not in body

    def test_configured_names_and_values(self):
        mappings = FieldMappings(slug_field="handle", status_field="state", navigation_field="inMenu")
        settings = ExtractionSettings(
            field_mappings=mappings,
            status_values=StatusValues(published="live"),
        )
        schema = _schema("pages", "Pages", "handle", "state", "inMenu", field_mappings=mappings)
        methods = client_methods(schema, settings)

        assert len(methods) == 4
        assert "where[handle][equals]" in methods[ClientMethod.GET_BY_SLUG]
        assert "state: { equals: 'live' }," in methods[ClientMethod.LIST_PUBLISHED]
        navigation = methods[ClientMethod.LIST_FOR_NAVIGATION]
        assert "inMenu: { equals: true }," in navigation
        assert "state: { equals: 'live' }," in navigation

    def test_media_getter_does_not_collide(self):
        schema = _schema("media", "Media", "slug")
        methods = client_methods(schema)

        assert "async getMedia(options?" in methods[ClientMethod.LIST]
        assert "async getMediaBySlug(slug: string" in methods[ClientMethod.GET_BY_SLUG]


# ---------------------------------------------------------------------------
# Client files
# ---------------------------------------------------------------------------


class TestClientFiles:
    def test_collection_client(self, posts_schema):
        out = render_collection_client(posts_schema)

        assert "import type { Posts, PayloadResponse, QueryOptions } from '../types';" in out
        assert "export class PostsClient extends BasePayloadClient {" in out
        assert "export const postsClient = new PostsClient();" in out
        assert out.index("async getPosts(") < out.index("async getPost(")
        assert out.index("async getPost(") < out.index("async getPublishedPosts(")

    def test_base_client_url_expression(self):
        out = render_base_client("process.env.CMS_API_URL")
        assert "this.baseUrl = process.env.CMS_API_URL;" in out
        assert "export abstract class BasePayloadClient {" in out

    def test_base_client_literal_url(self):
        out = render_base_client('"https://cms.example.com/api"')
        assert 'this.baseUrl = "https://cms.example.com/api";' in out

    def test_client_index(self, posts_schema, media_schema):
        out = render_client_index([posts_schema, media_schema])

        assert "export { postsClient, PostsClient } from './posts';" in out
        assert "export { mediaClient, MediaClient } from './media';" in out
        assert "export { siteSettingsClient, SiteSettingsClient } from './site-settings';" in out
        assert "export { BasePayloadClient } from './base';" in out

    def test_main_client_delegates_enabled_methods(self, posts_schema, media_schema):
        out = render_main_client([posts_schema, media_schema])

        assert (
            "  getPosts: (...args: Parameters<typeof postsClient.getPosts>) =>\n"
            "    postsClient.getPosts(...args),\n"
        ) in out
        assert "postsClient.getPublishedPosts(...args)" in out
        assert "mediaClient.getMedia(...args)" in out
        assert "getMediaBySlug" not in out
        assert "getSiteSettings: () => siteSettingsClient.getSiteSettings()," in out

    def test_main_client_reexports_types(self, posts_schema):
        out = render_main_client([posts_schema])
        assert "export type {\n  Posts,\n  PayloadResponse," in out

    def test_custom_template(self, posts_schema, tmp_path: Path):
        template = tmp_path / "client.ts.j2"
        template.write_text(
            "// {{ class_name }} via {{ client_var }}\n{{ methods | length }}\n", encoding="utf-8"
        )
        out = render_collection_client(posts_schema, template_path=template)
        assert out == "// PostsClient via postsClient\n3\n"
