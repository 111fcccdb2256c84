"""
Assembly of the generated data-access module.

Runs the whole pipeline: make sure the template exists, extract tables from
the schema, synthesize method blocks, substitute them into the template and
replace the output file.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Union

from supabase_api_gen.codegen import generate_method_blocks, setup_jinja_env
from supabase_api_gen.codegen_utils import format_python_code_using_black
from supabase_api_gen.config_validation import GeneratorConfig
from supabase_api_gen.constants import DefaultConfig
from supabase_api_gen.domain import GenerationResult, MethodBlock
from supabase_api_gen.exceptions import ConfigurationError, OutputWriteError
from supabase_api_gen.introspection_typescript import introspect_schema_typescript
from supabase_api_gen.template_manager import ensure_template, read_template


logger = logging.getLogger(__name__)


def template_path_for(
    output_path: Path, template_filename: str = DefaultConfig.TEMPLATE_FILENAME
) -> Path:
    """The template always sits next to the output file."""
    return output_path.parent / template_filename


def join_method_blocks(blocks: List[MethodBlock]) -> str:
    return "\n".join(block.code for block in blocks)


def substitute_placeholder(template_content: str, placeholder: str, methods_code: str) -> str:
    """Replace the first placeholder occurrence; later ones are left intact."""
    return template_content.replace(placeholder, methods_code, 1)


def wait_for_removal(
    path: Path,
    timeout: float = DefaultConfig.DELETE_WAIT_TIMEOUT,
    interval: float = DefaultConfig.DELETE_POLL_INTERVAL,
) -> bool:
    """
    Poll until ``path`` is no longer visible or ``timeout`` seconds pass.

    Returns:
        True if the path is gone
    """
    deadline = time.monotonic() + timeout
    while path.exists():
        if time.monotonic() >= deadline:
            return False
        time.sleep(interval)
    return True


def remove_existing_output(path: Path, timeout: float = DefaultConfig.DELETE_WAIT_TIMEOUT) -> None:
    """
    Delete a previous output file.

    A failed delete is logged and otherwise ignored; the following write
    then tries to overwrite the file.
    """
    if not path.exists():
        return

    try:
        path.unlink()
    except OSError as e:
        logger.error(f"Error deleting file at {path}: {e}")
        return

    if wait_for_removal(path, timeout):
        logger.info(f"Successfully deleted existing file at {path}")
    else:
        logger.warning(f"{path} still visible {timeout}s after delete; writing anyway.")


def write_output(
    output_path: Path, content: str, timeout: float = DefaultConfig.DELETE_WAIT_TIMEOUT
) -> None:
    """Create the output directory if needed and replace the output file."""
    output_dir = output_path.parent
    if not output_dir.exists():
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(
                f"Could not create output directory: {e}", output_file=str(output_path)
            ) from e
        logger.info(f"Created output directory at {output_dir}")

    remove_existing_output(output_path, timeout)

    try:
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(
            f"Could not write output file: {e}", output_file=str(output_path)
        ) from e


def generate_api_class(
    schema_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """
    Generate the data-access module for every table in the schema.

    Args:
        schema_path: TypeScript file declaring the Supabase ``Database`` type
        output_path: Destination of the generated Python module
        config: Generator options; defaults are used when omitted

    Returns:
        GenerationResult describing what was written
    """
    config = config or GeneratorConfig()
    schema_path = Path(schema_path).resolve()
    output_path = Path(output_path).resolve()
    template_path = template_path_for(output_path, config.template_filename)

    if template_path == output_path:
        raise ConfigurationError(
            "Output file would overwrite the template file",
            context={"output_file": str(output_path), "template_file": str(template_path)},
            suggestions=["Choose a different output file name or template_filename"],
        )

    env = setup_jinja_env()
    template_created = ensure_template(
        template_path, env, class_name=config.class_name, placeholder=config.placeholder
    )

    table_names = introspect_schema_typescript(
        schema_path,
        include_tables=config.include_tables,
        exclude_tables=config.exclude_tables,
    )
    if not table_names:
        logger.warning("No tables found under 'Tables'; generating the template without table methods.")

    blocks = generate_method_blocks(
        table_names,
        env=env,
        method_style=config.method_style,
        overrides=config.override_table(),
        pluralizer=config.pluralizer,
    )

    template_content = read_template(template_path, config.placeholder)
    output_content = substitute_placeholder(
        template_content, config.placeholder, join_method_blocks(blocks)
    )

    is_formatted = False
    if config.format_code:
        output_content, is_formatted = format_python_code_using_black(output_path, output_content)

    write_output(output_path, output_content, config.delete_wait_timeout)
    logger.info(
        f"Successfully generated {output_path.name} with methods for {len(table_names)} tables!"
    )
    if table_names:
        logger.info(f"Tables: {', '.join(table_names)}")

    return GenerationResult(
        table_names=table_names,
        output_path=output_path,
        template_path=template_path,
        template_created=template_created,
        is_formatted=is_formatted,
        code_lines=len(output_content.splitlines()),
        method_count=sum(len(block.methods) for block in blocks),
    )
