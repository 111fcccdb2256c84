import logging
import keyword
from pathlib import Path
from typing import List, Optional, Dict, Any, Literal, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
    ConfigDict,
)

from supabase_api_gen.constants import DefaultConfig
from supabase_api_gen.domain.naming import build_override_table
from supabase_api_gen.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


# --- Helper Functions for Validation ---


def is_valid_python_identifier(name: str) -> bool:
    """Check if a string is a valid Python identifier and not a keyword."""
    return name.isidentifier() and not keyword.iskeyword(name)


# --- Pydantic Models for Configuration Schema ---
class PluralOverride(BaseModel):
    """Explicit singular/plural PascalCase names for one table."""

    singular: str = Field(..., min_length=1)
    plural: str = Field(..., min_length=1)

    @field_validator("singular", "plural")
    @classmethod
    def check_identifier_fragment(cls, v: str) -> str:
        """Names are spliced into method names, so they must be identifier-safe."""
        if not v.isidentifier():
            raise ValueError(f"'{v}' cannot be used inside a Python method name.")
        return v


class GeneratorConfig(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    class_name: str = Field(
        default=DefaultConfig.CLASS_NAME,
        min_length=1,
        description="Name of the data-access class in a newly created template.",
    )
    template_filename: str = Field(
        default=DefaultConfig.TEMPLATE_FILENAME,
        min_length=1,
        description="File name of the base template, placed next to the output file.",
    )
    placeholder: str = Field(
        default=DefaultConfig.PLACEHOLDER,
        min_length=1,
        description="Marker in the template replaced by the generated methods.",
    )
    method_style: Literal["camel", "snake"] = Field(
        default=DefaultConfig.METHOD_STYLE,
        description="Naming style for generated methods ('getPosts' or 'get_posts').",
    )
    pluralizer: Literal["suffix", "inflect"] = Field(
        default=DefaultConfig.PLURALIZER,
        description="Rule used to derive singular/plural names.",
    )
    plural_overrides: Dict[str, PluralOverride] = Field(
        default_factory=dict,
        description="Per-table singular/plural names that take precedence over the pluralizer.",
    )
    include_tables: Optional[List[str]] = Field(
        default=None,
        description="Optional list of specific table names (strings) to include.",
    )
    exclude_tables: Optional[List[str]] = Field(
        default=None, description="Optional list of table names (strings) to exclude."
    )
    delete_wait_timeout: float = Field(
        default=DefaultConfig.DELETE_WAIT_TIMEOUT,
        ge=0,
        description="Seconds to wait for a deleted output file to disappear before writing.",
    )
    format_code: bool = Field(
        default=DefaultConfig.FORMAT_CODE,
        description="Format the generated module with Black.",
    )

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Allow dict.get() style access."""
        return getattr(self, key, default)

    def override_table(self) -> Dict[str, Tuple[str, str]]:
        """Built-in plural overrides merged with the configured ones."""
        return build_override_table(
            {
                table: (override.singular, override.plural)
                for table, override in self.plural_overrides.items()
            }
        )

    # --- Custom Field Validators ---

    @field_validator("class_name")
    @classmethod
    def check_valid_identifier(cls, v: str) -> str:
        """Validate class_name is a valid Python identifier."""
        if not is_valid_python_identifier(v):
            raise ValueError(
                f"'{v}' is not a valid Python identifier or is a reserved keyword."
            )
        return v

    @field_validator("template_filename")
    @classmethod
    def check_bare_filename(cls, v: str) -> str:
        """The template always lives in the output directory."""
        if Path(v).name != v:
            raise ValueError(f"'{v}' must be a file name without directory components.")
        return v

    @field_validator("placeholder")
    @classmethod
    def check_single_line(cls, v: str) -> str:
        if "\n" in v or not v.strip():
            raise ValueError("placeholder must be a single non-blank line.")
        return v

    @field_validator(
        "include_tables", "exclude_tables", mode="before", check_fields=False
    )
    @classmethod
    def check_table_names_list(cls, v: Optional[List[Any]]) -> Optional[List[str]]:
        """Ensure items in table lists are non-empty strings."""
        if v is None:
            return None
        if not isinstance(v, list):
            raise TypeError("include_tables/exclude_tables must be a list.")
        processed_list = []
        for index, item in enumerate(v):
            if not isinstance(item, str):
                raise TypeError(
                    f"Item at index {index} must be a string, found: {type(item).__name__}"
                )
            stripped_item = item.strip()
            if not stripped_item:
                raise ValueError(
                    f"Item at index {index} cannot be empty or just whitespace."
                )
            processed_list.append(stripped_item)
        return processed_list

    @model_validator(mode="after")
    def check_table_filters(self) -> "GeneratorConfig":
        """Perform cross-field validation checks."""
        if self.include_tables and self.exclude_tables:
            overlap = set(self.include_tables) & set(self.exclude_tables)
            if overlap:
                logger.warning(
                    f"Tables listed in both include_tables and exclude_tables will be excluded: {', '.join(sorted(overlap))}"
                )
        return self

    model_config = ConfigDict(
        extra="ignore",  # Allow and ignore extra fields from input dict
    )


# --- Validation Function ---
def validate_and_parse_config(
    config_dict: Dict[str, Any], config_file: Optional[str] = None
) -> GeneratorConfig:
    """
    Validates a raw configuration dictionary against the GeneratorConfig schema.
    Raises ConfigurationError listing every failing location.
    """
    try:
        validated_config = GeneratorConfig.model_validate(config_dict)
        logger.debug(
            "Configuration dictionary parsed and validated successfully against schema."
        )
        return validated_config
    except ValidationError as e:
        errors = {}
        for error in e.errors():
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Model Level"
            errors[loc_str] = error.get("msg", "Unknown validation error")
        raise ConfigurationError(
            "Configuration validation failed.",
            config_file=config_file,
            context=errors,
        ) from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Loads configuration from a YAML file (if given), validates it and
    returns a GeneratorConfig. Without a path the defaults are used.
    """
    raw_config: Dict[str, Any] = {}

    if config_path:
        config_file = Path(config_path)
        if not config_file.is_file():
            raise ConfigurationError(
                f"Config file not found at {config_path}", config_file=str(config_path)
            )
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Error parsing YAML file: {e}", config_file=str(config_path)
            ) from e

        if yaml_config is None:
            logger.warning(f"Config file {config_path} is empty. Using defaults.")
        elif isinstance(yaml_config, dict):
            raw_config.update(yaml_config)
            logger.debug(f"Loaded configuration from {config_path}")
        else:
            raise ConfigurationError(
                "Config file content must be a mapping.", config_file=str(config_path)
            )

    return validate_and_parse_config(raw_config, str(config_path) if config_path else None)
