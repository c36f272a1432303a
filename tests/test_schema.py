"""
Tests for config_singleton.schema module.

Tests schema declaration and default filename derivation including:
- Module base computation from dotted class names
- Environment variable override of the derived filename
- Reserved key validation
"""

from __future__ import annotations

import pytest

from config_singleton.exceptions import ReservedKeyConflictError
from config_singleton.schema import (
    Schema,
    class_name_for,
    derive_default_filename,
    is_sequence_default,
    module_base,
)


class TestDeriveDefaultFilename:
    """Tests for derive_default_filename."""

    def test_drops_final_segment(self):
        """Test that the trailing class name is removed."""
        assert derive_default_filename("MyApp.Config", environ={}) == "myapp.yaml"

    def test_joins_remaining_segments_with_underscores(self):
        """Test that nested names become underscore-joined basenames."""
        assert (
            derive_default_filename("Your.Thing.Config", environ={})
            == "your_thing.yaml"
        )

    def test_single_segment_name_is_kept(self):
        """Test that a name without dots is used whole."""
        assert derive_default_filename("Config", environ={}) == "config.yaml"

    def test_custom_extension(self):
        """Test that the schema's extension is appended."""
        assert derive_default_filename("MyApp.Config", ".yml", environ={}) == "myapp.yml"

    def test_environment_variable_wins(self):
        """Test that <BASE>_CONFIG_FILE overrides the derived name."""
        environ = {"YOUR_THING_CONFIG_FILE": "/etc/thing/custom.yaml"}

        assert (
            derive_default_filename("Your.Thing.Config", environ=environ)
            == "/etc/thing/custom.yaml"
        )

    def test_empty_environment_variable_is_ignored(self):
        """Test that an empty variable falls back to the derived name."""
        environ = {"MYAPP_CONFIG_FILE": ""}

        assert derive_default_filename("MyApp.Config", environ=environ) == "myapp.yaml"

    def test_reads_os_environ_by_default(self, monkeypatch):
        """Test that the process environment is consulted when none is given."""
        monkeypatch.setenv("MYAPP_CONFIG_FILE", "from-env.yaml")

        assert derive_default_filename("MyApp.Config") == "from-env.yaml"

    def test_module_base(self):
        """Test the module base used for the environment variable name."""
        assert module_base("your.thing.Config") == "your_thing"
        assert module_base("Config") == "Config"


class TestSchema:
    """Tests for the Schema dataclass."""

    def test_declared_filename_wins(self):
        """Test that an explicit filename is used without derivation."""
        schema = Schema(template={"a": 1}, filename="declared.yaml", name="MyApp.Config")

        assert schema.default_filename(environ={"MYAPP_CONFIG_FILE": "x"}) == "declared.yaml"

    def test_derives_from_name(self):
        """Test that the schema derives a filename from its class name."""
        schema = Schema(template={"a": 1}, extension=".yml", name="MyApp.Config")

        assert schema.default_filename(environ={}) == "myapp.yml"

    def test_template_is_read_only_copy(self):
        """Test that later edits to the caller's dict don't change the schema."""
        template = {"a": 1}
        schema = Schema(template=template)
        template["b"] = 2

        assert dict(schema.template) == {"a": 1}
        with pytest.raises(TypeError):
            schema.template["c"] = 3  # type: ignore[index]

    def test_validate_rejects_reserved_key(self):
        """Test that reserved names are refused."""
        schema = Schema(template={"hostname": None, "new": None})

        with pytest.raises(ReservedKeyConflictError, match="new"):
            schema.validate(frozenset({"new", "use"}))

    def test_validate_rejects_non_string_key(self):
        """Test that non-string keys can't become settings."""
        schema = Schema(template={1: "x"})

        with pytest.raises(ReservedKeyConflictError):
            schema.validate(frozenset())

    def test_validate_accepts_plain_keys(self, myapp_template):
        """Test that ordinary keys pass validation."""
        Schema(template=myapp_template).validate(frozenset({"new", "use"}))

    def test_is_sequence_default(self):
        """Test which defaults declare sequence-valued keys."""
        assert is_sequence_default([1, 2])
        assert is_sequence_default(())
        assert not is_sequence_default("abc")
        assert not is_sequence_default(None)

    def test_single_path_is_one_directory(self, tmp_test_dir):
        """Test that a lone str or Path is not split into characters."""
        assert Schema(template={"a": 1}, path="/etc/app").path == ("/etc/app",)
        assert Schema(template={"a": 1}, path=tmp_test_dir).path == (tmp_test_dir,)
        assert Schema(template={"a": 1}, path=["/etc", "/opt"]).path == ("/etc", "/opt")
        assert Schema(template={"a": 1}).path is None


class TestClassNameFor:
    """Tests for class_name_for."""

    def test_module_and_qualname(self):
        """Test that a top-level class keeps its dotted name."""
        assert class_name_for(Schema) == "config_singleton.schema.Schema"

    def test_drops_locals_segments(self):
        """Test that classes defined in functions lose the <locals> marker."""

        def build():
            class Inner:
                pass

            return Inner

        name = class_name_for(build())

        assert "<locals>" not in name
        assert name == (
            f"{__name__}.TestClassNameFor.test_drops_locals_segments.build.Inner"
        )
