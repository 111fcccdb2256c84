# File: tests/conftest.py
# Shared fixtures: sample Supabase type files, output locations and a
# stand-in Supabase client for exercising generated code.

import importlib.util
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest

from supabase_api_gen.assembler import generate_api_class
from supabase_api_gen.config_validation import GeneratorConfig


# --- Schema sources ---

TEST_SCHEMAS_DIR = Path(__file__).parent / "schemas"
SAMPLE_SCHEMA_PATH = TEST_SCHEMAS_DIR / "supabase.ts"
EMPTY_TABLES_SCHEMA_PATH = TEST_SCHEMAS_DIR / "empty_tables.ts"


def _copy_schema(source: Path, tmp_path: Path) -> Path:
    path = tmp_path / "types" / source.name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(source.read_bytes())
    return path


@pytest.fixture
def sample_schema_source() -> str:
    return SAMPLE_SCHEMA_PATH.read_text(encoding="utf-8")


@pytest.fixture
def empty_schema_source() -> str:
    return EMPTY_TABLES_SCHEMA_PATH.read_text(encoding="utf-8")


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    return _copy_schema(SAMPLE_SCHEMA_PATH, tmp_path)


@pytest.fixture
def empty_schema_file(tmp_path: Path) -> Path:
    return _copy_schema(EMPTY_TABLES_SCHEMA_PATH, tmp_path)


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "lib" / "generated_api.py"


@pytest.fixture
def fast_config() -> GeneratorConfig:
    """Default configuration without the delete wait."""
    return GeneratorConfig(delete_wait_timeout=0)


# --- Stand-in Supabase client ---

class FakeResponse:
    def __init__(self, data: Any):
        self.data = data


class FakeQuery:
    """Records every builder call; ``execute`` defers to the client's responder."""

    def __init__(self, client: "FakeClient", table_name: str):
        self.client = client
        self.table_name = table_name
        self.calls: List[tuple] = []

    def __getattr__(self, name: str) -> Callable[..., "FakeQuery"]:
        def builder_method(*args):
            self.calls.append((name, args))
            return self
        return builder_method

    def execute(self) -> FakeResponse:
        self.client.executed.append(self)
        return self.client.responder(self)

    def call_args(self, name: str) -> Optional[tuple]:
        for call_name, args in self.calls:
            if call_name == name:
                return args
        return None


class FakeClient:
    def __init__(self, responder: Optional[Callable[[FakeQuery], FakeResponse]] = None):
        self.queries: List[FakeQuery] = []
        self.executed: List[FakeQuery] = []
        self.responder = responder or (lambda query: FakeResponse([]))

    def table(self, table_name: str) -> FakeQuery:
        query = FakeQuery(self, table_name)
        self.queries.append(query)
        return query


@pytest.fixture
def fake_client_factory():
    return FakeClient


@pytest.fixture
def generated_module(schema_file: Path, output_file: Path, fast_config: GeneratorConfig):
    """Generate the API module for the sample schema and import it."""
    generate_api_class(schema_file, output_file, fast_config)
    spec = importlib.util.spec_from_file_location("generated_api", output_file)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
