"""
Supabase API generator.

Reads the ``Database`` type emitted by ``supabase gen types typescript`` and
writes a Python data-access class with CRUD methods for every table.
"""

from .assembler import generate_api_class
from .config_validation import GeneratorConfig, load_config
from .domain import NameForms, derive_names

__version__ = "0.1.0"

__all__ = [
    'generate_api_class',
    'GeneratorConfig',
    'load_config',
    'NameForms',
    'derive_names',
]
