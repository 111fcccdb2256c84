"""
Centralized constants for the Supabase API generator.

Default configuration values, tree-sitter node kinds the schema extractor
matches on, and the irregular plural override table live here so they can be
changed in one place.
"""

from typing import Dict, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    CLASS_NAME = "SupabaseApi"
    TEMPLATE_FILENAME = "supabase_api_template.py"
    PLACEHOLDER = "# [TABLE_METHODS]"

    # Naming options
    METHOD_STYLE = "camel"
    PLURALIZER = "suffix"

    # Output options
    DELETE_WAIT_TIMEOUT = 1.0
    DELETE_POLL_INTERVAL = 0.01
    FORMAT_CODE = False


# =============================================================================
# SCHEMA EXTRACTION
# =============================================================================

class SchemaNodeTypes:
    """tree-sitter-typescript node kinds used by the schema extractor."""

    PROPERTY = "property_signature"
    OBJECT_TYPE = "object_type"
    TYPE_ANNOTATION = "type_annotation"
    IDENTIFIER = "property_identifier"

    # tree-sitter nodes between a property and its value type
    WRAPPERS = (TYPE_ANNOTATION,)

    TABLES_PROPERTY = "Tables"


# =============================================================================
# NAMING
# =============================================================================

# raw table name -> (singular PascalCase, plural PascalCase)
PLURAL_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "user_type": ("UserType", "UserTypes"),
}

# Endings that look plural but are usually singular (class, status, analysis)
SINGULAR_S_ENDINGS = ("ss", "us", "is")


# =============================================================================
# GENERATED CODE
# =============================================================================

class GenericPrimitives:
    """Names of the generic CRUD methods defined in the base template."""

    GET_ALL = "get_all"
    GET_BY_ID = "get_by_id"
    CREATE = "create"
    CREATE_MANY = "create_many"
    UPDATE = "update"
    UPDATE_MANY = "update_many"
    DELETE = "delete"

    ALL = [GET_ALL, GET_BY_ID, CREATE, CREATE_MANY, UPDATE, UPDATE_MANY, DELETE]


# PostgREST error code for "JSON object requested, multiple (or no) rows returned"
NOT_FOUND_ERROR_CODE = "PGRST116"
