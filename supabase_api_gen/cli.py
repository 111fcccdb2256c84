import argparse
import logging
import sys
from typing import List, Optional

from supabase_api_gen.assembler import generate_api_class
from supabase_api_gen.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_highlight,
    log_section,
)
from supabase_api_gen.config_validation import load_config
from supabase_api_gen.exceptions import SupabaseApiGenError

# Note: Colored logging will be configured after parsing args
logger = logging.getLogger(__name__)


class GeneratorArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> GeneratorArgumentParser:
    parser = GeneratorArgumentParser(
        prog="supabase-api-gen",
        description="Generate a Python data-access class with CRUD methods for every table in a Supabase TypeScript type file.",
    )
    parser.add_argument(
        "type_file",
        help="Path to the TypeScript file declaring the Supabase Database type.",
    )
    parser.add_argument(
        "output_file",
        help="Path of the Python module to generate. The template is created next to it.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to an optional YAML configuration file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    # --- Argument Parsing ---
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config)
        logger.debug(f"Effective configuration: {config.model_dump()}")

        log_section(logger, "API Class Generation")
        log_progress(logger, f"Generating data-access class from {args.type_file}...")
        result = generate_api_class(args.type_file, args.output_file, config)

        if result.template_created:
            log_highlight(logger, f"New template created at {result.template_path}")
        log_success(
            logger,
            f"Wrote {result.method_count} methods for {result.table_count} tables "
            f"({result.code_lines} lines) to {result.output_path}",
        )

    # --- Error Handling ---
    except SupabaseApiGenError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.verbose)
        sys.exit(1)
    except OSError as e:
        logger.error(f"File Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except Exception as e:
        # Catch any other unexpected exceptions
        logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
