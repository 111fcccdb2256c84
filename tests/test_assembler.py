"""
End-to-end tests for assembling and writing the generated module.
"""

import ast
import logging
from pathlib import Path

import pytest

from supabase_api_gen.assembler import (
    generate_api_class,
    remove_existing_output,
    substitute_placeholder,
    template_path_for,
    wait_for_removal,
    write_output,
)
from supabase_api_gen.config_validation import GeneratorConfig
from supabase_api_gen.constants import DefaultConfig
from supabase_api_gen.exceptions import CodeGenerationError, ConfigurationError, SchemaParseError


SCENARIO_METHODS = [
    "getPosts",
    "getPost",
    "createPost",
    "createManyPosts",
    "updatePost",
    "updateManyPosts",
    "deletePost",
    "getUserTypes",
    "getUserType",
    "createUserType",
    "createManyUserTypes",
    "updateUserType",
    "updateManyUserTypes",
    "deleteUserType",
]


def class_methods(source: str, class_name: str = "SupabaseApi"):
    tree = ast.parse(source)
    api_class = next(
        node for node in tree.body if isinstance(node, ast.ClassDef) and node.name == class_name
    )
    return [node.name for node in api_class.body if isinstance(node, ast.FunctionDef)]


class TestGenerateApiClass:
    """Full pipeline on the sample schema"""

    def test_generates_methods_for_every_table(self, schema_file, output_file, fast_config):
        result = generate_api_class(schema_file, output_file, fast_config)

        assert result.table_names == ["post", "user_type"]
        assert result.method_count == 14
        assert result.template_created is True
        assert result.code_lines == len(output_file.read_text(encoding="utf-8").splitlines())

        methods = class_methods(output_file.read_text(encoding="utf-8"))
        generated = [name for name in methods if name in SCENARIO_METHODS]
        assert generated == SCENARIO_METHODS

    def test_template_created_next_to_output(self, schema_file, output_file, fast_config):
        result = generate_api_class(schema_file, output_file, fast_config)

        expected = output_file.parent / DefaultConfig.TEMPLATE_FILENAME
        assert result.template_path == expected.resolve()
        assert expected.is_file()
        assert DefaultConfig.PLACEHOLDER in expected.read_text(encoding="utf-8")

    def test_output_directory_created(self, schema_file, tmp_path, fast_config):
        output_file = tmp_path / "a" / "b" / "c" / "api.py"
        generate_api_class(schema_file, output_file, fast_config)
        assert output_file.is_file()

    def test_blocks_follow_schema_order(self, tmp_path, output_file, fast_config):
        schema = tmp_path / "ordered.ts"
        schema.write_text(
            "type Database = { public: { Tables: { zebra: {}; apple: {}; mango: {} } } }\n",
            encoding="utf-8",
        )
        generate_api_class(schema, output_file, fast_config)
        content = output_file.read_text(encoding="utf-8")

        positions = [content.index(f"    # {name}\n") for name in ("Zebra", "Apple", "Mango")]
        assert positions == sorted(positions)

    def test_blocks_separated_by_blank_line(self, schema_file, output_file, fast_config):
        generate_api_class(schema_file, output_file, fast_config)
        content = output_file.read_text(encoding="utf-8")
        assert "\n\n    # UserType\n" in content

    def test_regeneration_is_byte_identical(self, schema_file, output_file, fast_config):
        generate_api_class(schema_file, output_file, fast_config)
        first = output_file.read_bytes()

        result = generate_api_class(schema_file, output_file, fast_config)
        assert result.template_created is False
        assert output_file.read_bytes() == first

    def test_existing_template_is_not_modified(self, schema_file, output_file, fast_config):
        output_file.parent.mkdir(parents=True)
        template = output_file.parent / DefaultConfig.TEMPLATE_FILENAME
        custom = "class CustomApi:\n    # [TABLE_METHODS]\n    pass\n"
        template.write_text(custom, encoding="utf-8")

        generate_api_class(schema_file, output_file, fast_config)

        assert template.read_text(encoding="utf-8") == custom
        output = output_file.read_text(encoding="utf-8")
        assert output.startswith("class CustomApi:\n    \n    # Post\n")
        assert "def getPosts(" in output

    def test_manual_edits_to_output_are_replaced(self, schema_file, output_file, fast_config):
        generate_api_class(schema_file, output_file, fast_config)
        expected = output_file.read_bytes()

        output_file.write_text("# my local changes\n", encoding="utf-8")
        generate_api_class(schema_file, output_file, fast_config)
        assert output_file.read_bytes() == expected

    def test_empty_tables_outputs_template_without_placeholder(
        self, empty_schema_file, output_file, fast_config
    ):
        result = generate_api_class(empty_schema_file, output_file, fast_config)

        template = result.template_path.read_text(encoding="utf-8")
        assert result.table_names == []
        assert output_file.read_text(encoding="utf-8") == template.replace(
            DefaultConfig.PLACEHOLDER, "", 1
        )

    def test_snake_style_and_custom_class(self, schema_file, output_file):
        config = GeneratorConfig(method_style="snake", class_name="BlogApi", delete_wait_timeout=0)
        generate_api_class(schema_file, output_file, config)

        methods = class_methods(output_file.read_text(encoding="utf-8"), "BlogApi")
        assert "get_posts" in methods
        assert "update_many_user_types" in methods

    def test_include_tables_filter(self, schema_file, output_file):
        config = GeneratorConfig(include_tables=["user_type"], delete_wait_timeout=0)
        result = generate_api_class(schema_file, output_file, config)

        assert result.table_names == ["user_type"]
        assert "def getPosts(" not in output_file.read_text(encoding="utf-8")

    def test_format_code_runs_black(self, schema_file, output_file):
        config = GeneratorConfig(format_code=True, delete_wait_timeout=0)
        result = generate_api_class(schema_file, output_file, config)

        assert result.is_formatted is True
        compile(output_file.read_text(encoding="utf-8"), str(output_file), "exec")

    def test_output_path_equal_to_template_path_rejected(self, schema_file, tmp_path, fast_config):
        output_file = tmp_path / DefaultConfig.TEMPLATE_FILENAME
        with pytest.raises(ConfigurationError):
            generate_api_class(schema_file, output_file, fast_config)
        assert not output_file.exists()

    def test_clashing_table_names_are_fatal(self, tmp_path, output_file, fast_config):
        schema = tmp_path / "clash.ts"
        schema.write_text(
            "type Database = { public: { Tables: { post: {}; posts: {} } } }\n",
            encoding="utf-8",
        )
        with pytest.raises(CodeGenerationError):
            generate_api_class(schema, output_file, fast_config)
        assert not output_file.exists()

    def test_missing_schema_is_fatal(self, tmp_path, output_file, fast_config):
        with pytest.raises(SchemaParseError):
            generate_api_class(tmp_path / "missing.ts", output_file, fast_config)
        assert not output_file.exists()


def test_substitute_replaces_first_occurrence_only():
    template = "a\n# [TABLE_METHODS]\nb\n# [TABLE_METHODS]\n"
    result = substitute_placeholder(template, "# [TABLE_METHODS]", "METHODS")
    assert result == "a\nMETHODS\nb\n# [TABLE_METHODS]\n"


def test_template_path_for():
    assert template_path_for(Path("/x/y/api.py")) == Path("/x/y") / DefaultConfig.TEMPLATE_FILENAME
    assert template_path_for(Path("/x/api.py"), "base.py") == Path("/x/base.py")


def test_wait_for_removal(tmp_path: Path):
    gone = tmp_path / "gone.py"
    assert wait_for_removal(gone, timeout=0) is True

    present = tmp_path / "present.py"
    present.write_text("x", encoding="utf-8")
    assert wait_for_removal(present, timeout=0, interval=0) is False


def test_write_output_replaces_file(tmp_path: Path):
    output = tmp_path / "out" / "api.py"
    write_output(output, "first\n", timeout=0)
    write_output(output, "second\n", timeout=0)
    assert output.read_text(encoding="utf-8") == "second\n"


def test_delete_failure_is_not_fatal(tmp_path: Path, monkeypatch, caplog):
    output = tmp_path / "api.py"
    output.write_text("old\n", encoding="utf-8")

    def refuse(self, *args, **kwargs):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", refuse)
    with caplog.at_level(logging.ERROR):
        write_output(output, "new\n", timeout=0)

    assert "Error deleting file" in caplog.text
    assert output.read_text(encoding="utf-8") == "new\n"


def test_remove_existing_output_missing_file(tmp_path: Path):
    remove_existing_output(tmp_path / "missing.py", timeout=0)
