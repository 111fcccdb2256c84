"""
Custom exception hierarchy for the Supabase API generator.

Every error raised by the generator carries optional context and recovery
suggestions so the CLI can print something actionable.
"""

from typing import Dict, Any, Optional, List


class SupabaseApiGenError(Exception):
    """
    Base exception for all generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(SupabaseApiGenError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify option names and value types",
                "Make sure the output path is not the template path",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaParseError(SupabaseApiGenError):
    """Raised when the schema type file cannot be read or parsed."""

    def __init__(self, message: str, schema_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if schema_file:
            context['schema_file'] = schema_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the schema file exists and is readable",
                "Regenerate it with 'supabase gen types typescript'",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="SCHEMA_PARSE_ERROR"
        )


class TemplateError(SupabaseApiGenError):
    """Raised when the base template cannot be created or read."""

    def __init__(self, message: str, template_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if template_file:
            context['template_file'] = template_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check write permissions on the output directory",
                "Delete a corrupted template file to have it recreated",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="TEMPLATE_ERROR"
        )


class CodeGenerationError(SupabaseApiGenError):
    """Raised when method synthesis for a table fails."""

    def __init__(self, message: str, table: str = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the table name for characters that are not valid in Python names",
                "Exclude the table with 'exclude_tables' in the configuration",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CODE_GENERATION_ERROR"
        )


class OutputWriteError(SupabaseApiGenError):
    """Raised when the generated module cannot be written."""

    def __init__(self, message: str, output_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if output_file:
            context['output_file'] = output_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check write permissions on the output directory",
                "Make sure no other process holds the output file open",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="OUTPUT_WRITE_ERROR"
        )
