"""
Naming convention utilities for the Supabase API generator.

This module converts raw snake_case table identifiers into the lexical forms
used by generated method names: camelCase, PascalCase, and singular/plural
PascalCase variants.
"""

import logging
import re
from typing import Dict, Mapping, Optional, Tuple

import inflect

from ..constants import PLURAL_OVERRIDES, SINGULAR_S_ENDINGS
from .models import NameForms


logger = logging.getLogger(__name__)

# Initialize inflect engine for the optional dictionary-based pluralizer
p = inflect.engine()


def _capitalize_segment(segment: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    return segment[:1].upper() + segment[1:].lower()


def to_camel_case(name: str) -> str:
    """
    Convert a snake_case table name to a lowerCamelCase method name.

    Example:
        >>> to_camel_case("user_type")
        'userType'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    segments = name.split("_")
    return segments[0].lower() + "".join(
        _capitalize_segment(segment) for segment in segments[1:]
    )


def to_pascal_case(name: str) -> str:
    """
    Convert a snake_case table name to a PascalCase type name.

    Example:
        >>> to_pascal_case("user_type")
        'UserType'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    return "".join(_capitalize_segment(segment) for segment in name.split("_"))


def to_snake_case(name: str) -> str:
    """
    Convert CamelCase or PascalCase to snake_case.

    Example:
        >>> to_snake_case("UserTypes")
        'user_types'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    name = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub("__([A-Z])", r"_\1", name)
    name = re.sub("([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.lower()


def suffix_singular_plural(pascal: str) -> Tuple[str, str]:
    """
    Apply the trailing-``s`` rule to a PascalCase name.

    A name ending in ``s`` (but not ``ss``, ``us`` or ``is``) is taken to be
    plural already; anything else is singular and gets an ``s`` appended.

    Returns:
        A ``(singular, plural)`` tuple.
    """
    if pascal.endswith("s") and not pascal.endswith(SINGULAR_S_ENDINGS):
        return pascal[:-1], pascal
    return pascal, f"{pascal}s"


def inflect_singular_plural(name: str) -> Tuple[str, str]:
    """
    Singularize and pluralize the last word of a table name with inflect.

    Only the final underscore-delimited segment is inflected, so
    ``user_category`` becomes ``("UserCategory", "UserCategories")``.
    Falls back to the suffix rule when the last segment is empty.
    """
    segments = name.split("_")
    head, last = segments[:-1], segments[-1].lower()
    if not last:
        return suffix_singular_plural(to_pascal_case(name))

    # inflect returns False when the word is already singular
    singular_word = p.singular_noun(last) or last
    plural_word = p.plural_noun(singular_word) or f"{singular_word}s"

    prefix = "".join(_capitalize_segment(segment) for segment in head)
    return (
        prefix + _capitalize_segment(singular_word),
        prefix + _capitalize_segment(plural_word),
    )


def build_override_table(
    extra: Optional[Mapping[str, Tuple[str, str]]] = None,
) -> Dict[str, Tuple[str, str]]:
    """Merge user supplied plural overrides over the built-in table."""
    table = dict(PLURAL_OVERRIDES)
    if extra:
        table.update(extra)
    return table


def derive_names(
    raw: str,
    overrides: Optional[Mapping[str, Tuple[str, str]]] = None,
    pluralizer: str = "suffix",
) -> NameForms:
    """
    Derive every name form for a raw table identifier.

    Args:
        raw: The snake_case table name as declared in the schema
        overrides: Override table keyed by raw name; defaults to the built-in
            ``PLURAL_OVERRIDES``. Entries here always win.
        pluralizer: ``"suffix"`` for the trailing-``s`` rule or ``"inflect"``
            for dictionary based inflection of the last word

    Returns:
        The derived NameForms
    """
    if not raw:
        raise ValueError("Table name must be a non-empty string")

    if overrides is None:
        overrides = PLURAL_OVERRIDES

    pascal = to_pascal_case(raw)
    if pluralizer == "inflect":
        singular, plural = inflect_singular_plural(raw)
    elif pluralizer == "suffix":
        singular, plural = suffix_singular_plural(pascal)
    else:
        raise ValueError(f"Unknown pluralizer: {pluralizer!r}")

    if raw in overrides:
        singular, plural = overrides[raw]
        logger.debug(f"Using plural override for '{raw}': {singular}/{plural}")

    return NameForms(
        raw=raw,
        camel=to_camel_case(raw),
        pascal=pascal,
        singular=singular,
        plural=plural,
        snake_singular=to_snake_case(singular),
        snake_plural=to_snake_case(plural),
    )
