import logging
import keyword
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
)

from supabase_api_gen.constants import (
    NOT_FOUND_ERROR_CODE,
    DefaultConfig,
    GenericPrimitives,
)
from supabase_api_gen.domain import MethodBlock, MethodNames, NameForms, derive_names
from supabase_api_gen.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"

BASE_TEMPLATE_NAME = "supabase_api.py.j2"
TABLE_METHODS_TEMPLATE_NAME = "table_methods.py.j2"


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        # Templates emit Python source, never markup
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["repr"] = repr
    return env


def generate_method_names(names: NameForms, method_style: str = "camel") -> MethodNames:
    """
    Build the generated method name for every generic primitive.

    ``camel`` yields ``getPosts``/``getPost``/..., ``snake`` yields
    ``get_posts``/``get_post``/...
    """
    if method_style == "camel":
        singular, plural = names.singular, names.plural
        return MethodNames(
            get_all=f"get{plural}",
            get_by_id=f"get{singular}",
            create=f"create{singular}",
            create_many=f"createMany{plural}",
            update=f"update{singular}",
            update_many=f"updateMany{plural}",
            delete=f"delete{singular}",
        )
    if method_style == "snake":
        singular, plural = names.snake_singular, names.snake_plural
        return MethodNames(
            get_all=f"get_{plural}",
            get_by_id=f"get_{singular}",
            create=f"create_{singular}",
            create_many=f"create_many_{plural}",
            update=f"update_{singular}",
            update_many=f"update_many_{plural}",
            delete=f"delete_{singular}",
        )
    raise ValueError(f"Unknown method style: {method_style!r}")


def validate_method_names(table_name: str, methods: MethodNames) -> None:
    """Reject names that are not identifiers or that shadow a generic primitive."""
    for method_name in methods:
        if not method_name.isidentifier() or keyword.iskeyword(method_name):
            raise CodeGenerationError(
                f"Table '{table_name}' produces invalid method name '{method_name}'",
                table=table_name,
            )
        if method_name in GenericPrimitives.ALL:
            raise CodeGenerationError(
                f"Table '{table_name}' produces method '{method_name}' which shadows a generic primitive",
                table=table_name,
                suggestions=[
                    "Add a plural_overrides entry for this table",
                    "Switch method_style to 'camel'",
                ],
            )


def synthesize_table_methods(
    table_name: str,
    names: NameForms,
    env: Environment,
    method_style: str = "camel",
) -> MethodBlock:
    """
    Render the delegating CRUD methods for one table.

    The returned code starts with a newline and carries no trailing newline,
    so blocks joined with ``"\\n"`` are separated by a blank line.
    """
    methods = generate_method_names(names, method_style)
    validate_method_names(table_name, methods)

    template = env.get_template(TABLE_METHODS_TEMPLATE_NAME)
    rendered = template.render(table_name=table_name, names=names, methods=methods)
    logger.debug(f"Synthesized {len(methods)} methods for table '{table_name}'")

    return MethodBlock(
        table_name=table_name,
        names=names,
        methods=methods,
        code="\n" + rendered.rstrip("\n"),
    )


def generate_method_blocks(
    table_names: List[str],
    env: Optional[Environment] = None,
    method_style: str = DefaultConfig.METHOD_STYLE,
    overrides: Optional[Mapping[str, Tuple[str, str]]] = None,
    pluralizer: str = DefaultConfig.PLURALIZER,
) -> List[MethodBlock]:
    """
    Derive names and synthesize a method block per table, keeping input order.

    Two different tables that derive the same method name (``post`` and
    ``posts`` both give ``getPosts``) raise CodeGenerationError. A repeated
    raw table name passes through unchanged.
    """
    env = env or setup_jinja_env()
    blocks = []
    seen: Dict[str, str] = {}
    for table_name in table_names:
        names = derive_names(table_name, overrides=overrides, pluralizer=pluralizer)
        block = synthesize_table_methods(table_name, names, env, method_style)
        for method_name in block.methods:
            owner = seen.setdefault(method_name, table_name)
            if owner != table_name:
                raise CodeGenerationError(
                    f"Tables '{owner}' and '{table_name}' both produce method '{method_name}'",
                    table=table_name,
                    suggestions=[
                        f"Add a plural_overrides entry for '{table_name}' or '{owner}'",
                        "Exclude one of the tables with exclude_tables",
                    ],
                )
        blocks.append(block)
    return blocks


def render_base_template(
    env: Optional[Environment] = None,
    class_name: str = DefaultConfig.CLASS_NAME,
    placeholder: str = DefaultConfig.PLACEHOLDER,
) -> str:
    """Render the canonical template holding the generic CRUD primitives."""
    env = env or setup_jinja_env()
    template = env.get_template(BASE_TEMPLATE_NAME)
    return template.render(
        class_name=class_name,
        placeholder=placeholder,
        not_found_error_code=NOT_FOUND_ERROR_CODE,
    )
