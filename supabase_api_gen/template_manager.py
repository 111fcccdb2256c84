"""
Lifecycle of the hand-editable base template.

The template is created once from the packaged Jinja2 source and is never
touched again, so edits to the generic primitives survive regeneration.
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment

from supabase_api_gen.codegen import render_base_template
from supabase_api_gen.constants import DefaultConfig
from supabase_api_gen.exceptions import TemplateError


logger = logging.getLogger(__name__)


def ensure_template(
    template_path: Path,
    env: Optional[Environment] = None,
    class_name: str = DefaultConfig.CLASS_NAME,
    placeholder: str = DefaultConfig.PLACEHOLDER,
) -> bool:
    """
    Write the canonical template if nothing exists at ``template_path``.

    Returns:
        True if the template was created, False if an existing one was kept
    """
    if template_path.exists():
        logger.debug(f"Keeping existing template at {template_path}")
        return False

    content = render_base_template(env, class_name=class_name, placeholder=placeholder)
    try:
        template_path.parent.mkdir(parents=True, exist_ok=True)
        template_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"Could not write template: {e}", template_file=str(template_path)
        ) from e

    logger.info(f"Created template file at {template_path}")
    return True


def read_template(template_path: Path, placeholder: str = DefaultConfig.PLACEHOLDER) -> str:
    """Read the template, warning when the placeholder is missing or repeated."""
    try:
        content = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"Could not read template: {e}", template_file=str(template_path)
        ) from e

    occurrences = content.count(placeholder)
    if occurrences == 0:
        logger.warning(
            f"Placeholder '{placeholder}' not found in {template_path}; no table methods will be inserted."
        )
    elif occurrences > 1:
        logger.warning(
            f"Placeholder '{placeholder}' appears {occurrences} times in {template_path}; only the first is replaced."
        )
    return content
