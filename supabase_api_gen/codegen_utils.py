import logging
from pathlib import Path
from typing import Tuple

import black


logger = logging.getLogger(__name__)

BLACK_FORMATTER_MODE = black.Mode(line_length=120)


def format_python_code_using_black(filepath: Path, code_string: str) -> Tuple[str, bool]:
    """
    Formats the given Python code using Black.

    Returns the (possibly unchanged) code and whether formatting succeeded.
    """
    try:
        formatted_code = black.format_str(code_string, mode=BLACK_FORMATTER_MODE)
        logger.debug(f"Formatted code using Black: {filepath}")
        return formatted_code, True
    except black.InvalidInput as e:
        # Hand-edited templates can contain code Black refuses to parse
        logger.error(f"Could not format Python code using Black: {e}")
        logger.warning("Writing unformatted Python code due to Black error.")
        return code_string, False
