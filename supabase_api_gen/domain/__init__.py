"""
Domain module for the Supabase API generator.

Value objects and pure naming rules, separated from parsing, templating and
filesystem concerns.
"""

from .models import (
    NameForms,
    MethodNames,
    MethodBlock,
    GenerationResult,
)

from .naming import (
    to_camel_case,
    to_pascal_case,
    to_snake_case,
    suffix_singular_plural,
    inflect_singular_plural,
    build_override_table,
    derive_names,
)

__all__ = [
    # Core models
    'NameForms',
    'MethodNames',
    'MethodBlock',
    'GenerationResult',

    # Naming
    'to_camel_case',
    'to_pascal_case',
    'to_snake_case',
    'suffix_singular_plural',
    'inflect_singular_plural',
    'build_override_table',
    'derive_names',
]
