"""
Colored logging formatter for the Supabase API generator.

Console output is colored by level and, for INFO/DEBUG, by message prefix so
progress, success and section lines stand out during generation.
"""

import logging
import sys
from typing import Optional


SUCCESS_PREFIX = "✓ "
PROGRESS_PREFIX = "→ "
HIGHLIGHT_PREFIX = "• "
SECTION_SEPARATOR = "=" * 60


class ColoredFormatter(logging.Formatter):
    """
    Logging formatter that adds ANSI color codes to log messages.

    WARNING and above are always colored by level. INFO and DEBUG messages
    written through the ``log_*`` helpers get the color of their prefix.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses default if None)
            use_colors: Whether to use colors; ignored when stderr is not a TTY
        """
        if fmt is None:
            fmt = "%(levelname)s: %(message)s"
        super().__init__(fmt)

        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def _color_for(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return self.COLORS.get(record.levelname, '')

        message = record.getMessage()
        if message.startswith(SUCCESS_PREFIX):
            return self.SPECIAL_COLORS['success'] + self.BOLD
        if message.startswith(PROGRESS_PREFIX):
            return self.SPECIAL_COLORS['progress']
        if message.startswith(HIGHLIGHT_PREFIX):
            return self.SPECIAL_COLORS['highlight']
        if SECTION_SEPARATOR in message:
            return self.BOLD + self.SPECIAL_COLORS['highlight']
        if record.levelno == logging.DEBUG:
            return self.COLORS['DEBUG']
        return ''

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        color = self._color_for(record)
        if color:
            formatted_message = f"{color}{formatted_message}{self.RESET}"
        return formatted_message


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging on the root logger.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors)

    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)


# Convenience functions for special message types
def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message with special formatting."""
    logger.info(f"{SUCCESS_PREFIX}{message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message with special formatting."""
    logger.info(f"{PROGRESS_PREFIX}{message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message with special formatting."""
    logger.info(f"{HIGHLIGHT_PREFIX}{message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header with special formatting."""
    logger.info(SECTION_SEPARATOR)
    logger.info(f"  {section_name.upper()}")
    logger.info(SECTION_SEPARATOR)
