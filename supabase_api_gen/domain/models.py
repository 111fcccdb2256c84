"""
Core domain models for the Supabase API generator.

These value objects are independent of the parser, the templating engine and
the filesystem. They carry data between the pipeline stages.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, NamedTuple, Optional


@dataclass(frozen=True)
class NameForms:
    """
    Lexical variants derived from one raw table identifier.

    ``pascal`` capitalizes every underscore-delimited segment of ``raw``.
    ``singular`` and ``plural`` only differ from ``pascal`` when the
    pluralization rule or an override applies.
    """

    raw: str
    camel: str
    pascal: str
    singular: str
    plural: str
    snake_singular: str = ""
    snake_plural: str = ""


class MethodNames(NamedTuple):
    """Generated method name for each generic primitive, keyed by primitive."""

    get_all: str
    get_by_id: str
    create: str
    create_many: str
    update: str
    update_many: str
    delete: str


@dataclass
class MethodBlock:
    """Generated method declarations for a single table."""

    table_name: str
    names: NameForms
    methods: MethodNames
    code: str


@dataclass
class GenerationResult:
    """
    Result of one generator run.

    Holds the tables that were processed and where the artifacts ended up.
    """

    table_names: List[str]
    output_path: Path
    template_path: Path
    template_created: bool = False
    is_formatted: bool = False
    code_lines: Optional[int] = None
    method_count: int = 0

    @property
    def table_count(self) -> int:
        return len(self.table_names)
