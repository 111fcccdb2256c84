"""
Table name extraction from a Supabase TypeScript ``Database`` type file.

The file is parsed with tree-sitter and walked with a small pattern matching
visitor. A table is any simply-named property declared directly inside the
object type that is the value of a property named ``Tables``::

    export type Database = {
      public: {
        Tables: {
          post: { Row: {...}; Insert: {...}; Update: {...} }
          user_type: { ... }
        }
      }
    }
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from supabase_api_gen.constants import SchemaNodeTypes
from supabase_api_gen.exceptions import SchemaParseError


logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())


# --- Parsing ---

def create_parser() -> Parser:
    """Create a tree-sitter parser for TypeScript sources."""
    return Parser(language=TS_LANGUAGE)


def parse_schema_source(source: bytes) -> Tree:
    """Parse TypeScript source bytes into a tree-sitter tree."""
    tree = create_parser().parse(source)
    if tree.root_node.has_error:
        # tree-sitter recovers from syntax errors; extraction still runs
        logger.warning("Schema source contains syntax errors; extracted tables may be incomplete.")
    return tree


def node_text(node: Node, source: bytes) -> str:
    """Return the source text spanned by a node."""
    return source[node.start_byte:node.end_byte].decode("utf-8")


# --- Pattern predicates ---

def is_property(node: Optional[Node]) -> bool:
    return node is not None and node.type == SchemaNodeTypes.PROPERTY


def is_object_type(node: Optional[Node]) -> bool:
    return node is not None and node.type == SchemaNodeTypes.OBJECT_TYPE


def simple_property_name(node: Node, source: bytes) -> Optional[str]:
    """
    Return the name of a property declaration if it is a plain identifier.

    String literal, numeric and computed keys yield None.
    """
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.type != SchemaNodeTypes.IDENTIFIER:
        return None
    return node_text(name_node, source)


def owning_property(object_node: Node) -> Optional[Node]:
    """Find the property whose declared type is the given object type."""
    parent = object_node.parent
    while parent is not None and parent.type in SchemaNodeTypes.WRAPPERS:
        parent = parent.parent
    return parent if is_property(parent) else None


def is_table_declaration(node: Node, source: bytes) -> bool:
    """
    Check whether a node declares a table.

    The node must be a simply-named property whose parent is an anonymous
    object type, and that object type must be the value of a property named
    ``Tables``.
    """
    if not is_property(node):
        return False

    parent = node.parent
    if not is_object_type(parent):
        return False

    owner = owning_property(parent)
    if owner is None:
        return False
    if simple_property_name(owner, source) != SchemaNodeTypes.TABLES_PROPERTY:
        return False

    return simple_property_name(node, source) is not None


# --- Traversal ---

def iter_table_names(node: Node, source: bytes) -> Iterator[str]:
    """Yield table names in pre-order, siblings left to right."""
    if is_table_declaration(node, source):
        yield simple_property_name(node, source)

    for child in node.children:
        yield from iter_table_names(child, source)


def extract_table_names(tree: Tree, source: bytes) -> List[str]:
    """Return table names in schema declaration order."""
    return list(iter_table_names(tree.root_node, source))


def read_schema_source(schema_path: Union[str, Path]) -> bytes:
    """Read the schema file, raising SchemaParseError if it is unavailable."""
    path = Path(schema_path)
    try:
        return path.read_bytes()
    except OSError as e:
        raise SchemaParseError(
            f"Could not read schema file: {e}", schema_file=str(path)
        ) from e


def introspect_schema_typescript(
    schema_path: Union[str, Path],
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> List[str]:
    """
    Read and parse a schema file and return its table names.

    Args:
        schema_path: Path to the TypeScript type definition file
        include_tables: Optional whitelist of table names
        exclude_tables: Optional blacklist of table names

    Returns:
        Table names in declaration order, after filtering
    """
    source = read_schema_source(schema_path)
    logger.debug(f"Read {len(source)} bytes from {schema_path}")

    tree = parse_schema_source(source)
    table_names = extract_table_names(tree, source)
    logger.info(f"Found {len(table_names)} tables in {schema_path}")

    return filter_tables(table_names, include_tables, exclude_tables)


def filter_tables(
    table_names: List[str],
    include_tables: Optional[List[str]] = None,
    exclude_tables: Optional[List[str]] = None,
) -> List[str]:
    """Apply include/exclude lists while keeping the original order."""
    filtered = list(table_names)

    if include_tables:
        include = set(include_tables)
        missing = include.difference(filtered)
        if missing:
            logger.warning(f"Included tables not found in schema: {', '.join(sorted(missing))}")
        filtered = [name for name in filtered if name in include]

    if exclude_tables:
        exclude = set(exclude_tables)
        excluded = [name for name in filtered if name in exclude]
        if excluded:
            logger.info(f"Excluded tables: {', '.join(excluded)}")
        filtered = [name for name in filtered if name not in exclude]

    return filtered
