"""Template context shared by the type, client and route emitters.

Every generated identifier for a schema (interface name, client class,
client variable, method names) is derived here once so the emitters can
never disagree about what a method is called.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from collection_registry.parser.inflection import singularize
from collection_registry.parser.models import SchemaDescriptor
from collection_registry.scaffolder.templates import TemplateRenderer, camel_case, pascal_case


class ClientMethod(str, Enum):
    """Data-access methods a collection client can expose."""
    LIST = "list"
    GET_BY_SLUG = "get_by_slug"
    LIST_PUBLISHED = "list_published"
    LIST_FOR_NAVIGATION = "list_for_navigation"


@dataclass(frozen=True)
class SchemaNames:
    """Generated TypeScript names for one schema."""
    identifier: str
    type_name: str
    plural_name: str
    class_name: str
    client_var: str
    collection_var: str
    item_var: str
    list_method: str
    get_method: str
    published_method: str
    navigation_method: str

    def method_name(self, method: ClientMethod) -> str:
        return {
            ClientMethod.LIST: self.list_method,
            ClientMethod.GET_BY_SLUG: self.get_method,
            ClientMethod.LIST_PUBLISHED: self.published_method,
            ClientMethod.LIST_FOR_NAVIGATION: self.navigation_method,
        }[method]


def schema_names(schema: SchemaDescriptor) -> SchemaNames:
    """Derive every generated name for *schema*.

    When the singular and plural display names coincide (``Media``) the
    by-slug getter is suffixed with ``BySlug`` so it cannot shadow the list
    method.
    """
    type_name = pascal_case(schema.display_name)
    plural_name = pascal_case(schema.plural_display_name)
    singular_name = pascal_case(singularize(schema.display_name))

    list_method = f"get{plural_name}"
    get_method = f"get{singular_name}"
    if get_method == list_method:
        get_method = f"get{singular_name}BySlug"

    collection_var = camel_case(schema.identifier) or "items"
    item_var = camel_case(singularize(schema.identifier)) or "item"
    if item_var == collection_var:
        item_var = f"{item_var}Item"

    return SchemaNames(
        identifier=schema.identifier,
        type_name=type_name,
        plural_name=plural_name,
        class_name=f"{type_name}Client",
        client_var=f"{camel_case(schema.identifier)}Client",
        collection_var=collection_var,
        item_var=item_var,
        list_method=list_method,
        get_method=get_method,
        published_method=f"getPublished{plural_name}",
        navigation_method=f"get{plural_name}ForNavigation",
    )


def enabled_methods(schema: SchemaDescriptor) -> list[ClientMethod]:
    """Client methods *schema* supports, in emission order.

    The list method is always present; the others follow the schema's
    capability flags.
    """
    methods = [ClientMethod.LIST]
    if schema.has_slug:
        methods.append(ClientMethod.GET_BY_SLUG)
    if schema.has_status:
        methods.append(ClientMethod.LIST_PUBLISHED)
    if schema.has_navigation:
        methods.append(ClientMethod.LIST_FOR_NAVIGATION)
    return methods


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Process-wide renderer over the built-in templates."""
    return TemplateRenderer()
