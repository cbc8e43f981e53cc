"""Naming helpers: pluralize, singularize and display-name derivation.

The rules are a closed heuristic, not an English inflector. Inputs are
matched against a small table of irregular display names first, then a
handful of suffix rules. Output is deterministic but not always correct
English (``pluralize("Day") == "Daies"``).
"""

from __future__ import annotations

import re

# Display names that are already plural (or invariant) and their singular form.
IRREGULAR_NAMES: dict[str, str] = {
    "Media": "Media",
    "Pages": "Page",
    "Users": "User",
    "Posts": "Post",
    "Examples": "Example",
}

_SEGMENT_SPLIT = re.compile(r"[-_\s]+")


def pluralize(word: str) -> str:
    """Return the plural form of *word*.

    Examples::

        pluralize("Post")      -> "Posts"
        pluralize("Category")  -> "Categories"
        pluralize("Class")     -> "Classes"
        pluralize("Posts")     -> "Posts"
    """
    if word in IRREGULAR_NAMES:
        return word
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch")):
        return word + "es"
    return word + "s"


def singularize(word: str) -> str:
    """Return the singular form of *word*.

    Examples::

        singularize("Posts")       -> "Post"
        singularize("Categories")  -> "Category"
        singularize("Classes")     -> "Class"
    """
    if word in IRREGULAR_NAMES:
        return IRREGULAR_NAMES[word]
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("es"):
        return word[:-2]
    if word.endswith("s"):
        return word[:-1]
    return word


def capitalize(word: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def display_name_from(value: str) -> str:
    """Derive a type-safe display name from a slug or title reference.

    Each ``-``/``_``/space separated segment is capitalized and the segments
    are joined, so ``"blog-posts"`` becomes ``"BlogPosts"``. A value without
    separators is simply capitalized (``"featuredTitle"`` -> ``"FeaturedTitle"``).
    """
    segments = [s for s in _SEGMENT_SPLIT.split(value.strip()) if s]
    if not segments:
        return capitalize(value)
    return "".join(capitalize(s) for s in segments)
