"""
Tests for config_singleton.locator module.

Tests file lookup including:
- First match wins along a search path
- Absolute filenames
- Not-found errors listing every directory tried
- Default search path order
"""

from __future__ import annotations

import os
from pathlib import Path
import sys

import pytest

from config_singleton.exceptions import ConfigError, ConfigNotFoundError
from config_singleton.locator import default_search_path, find_file_in_path


class TestFindFileInPath:
    """Tests for find_file_in_path."""

    def test_returns_first_existing_candidate(self, tmp_test_dir):
        """Test that the earliest directory holding the file wins."""
        first = tmp_test_dir / "first"
        second = tmp_test_dir / "second"
        first.mkdir()
        second.mkdir()
        (first / "myapp.yaml").write_text("hostname: one\n")
        (second / "myapp.yaml").write_text("hostname: two\n")

        found = find_file_in_path("myapp.yaml", [first, second])

        assert found == first / "myapp.yaml"

    def test_skips_directories_without_the_file(self, tmp_test_dir):
        """Test that missing candidates are skipped in order."""
        empty = tmp_test_dir / "empty"
        full = tmp_test_dir / "full"
        empty.mkdir()
        full.mkdir()
        (full / "myapp.yaml").write_text("hostname: two\n")

        found = find_file_in_path("myapp.yaml", [str(empty), str(full)])

        assert found == full / "myapp.yaml"

    def test_relative_directories_resolve_against_cwd(self, tmp_test_dir, monkeypatch):
        """Test that relative path entries are returned as absolute paths."""
        (tmp_test_dir / "etc").mkdir()
        (tmp_test_dir / "etc" / "myapp.yaml").write_text("hostname: x\n")
        monkeypatch.chdir(tmp_test_dir)

        found = find_file_in_path("myapp.yaml", ["etc"])

        assert found.is_absolute()
        assert found == Path.cwd() / "etc" / "myapp.yaml"

    def test_absolute_filename_is_returned_as_is(self, tmp_test_dir):
        """Test that an existing absolute filename ignores the search path."""
        config_file = tmp_test_dir / "anywhere.yaml"
        config_file.write_text("hostname: x\n")

        found = find_file_in_path(str(config_file), ["/nonexistent"])

        assert found == config_file

    def test_missing_absolute_filename_raises(self, tmp_test_dir):
        """Test that a missing absolute file raises without searching."""
        missing = tmp_test_dir / "missing.yaml"

        with pytest.raises(ConfigNotFoundError) as exc_info:
            find_file_in_path(str(missing))

        assert exc_info.value.filename == str(missing)
        assert exc_info.value.search_path == []

    def test_not_found_lists_every_directory(self, tmp_test_dir):
        """Test that the error names the file and the full path tried."""
        dirs = [tmp_test_dir / "a", tmp_test_dir / "b"]

        with pytest.raises(ConfigNotFoundError) as exc_info:
            find_file_in_path("myapp.yaml", dirs)

        err = exc_info.value
        assert err.filename == "myapp.yaml"
        assert err.search_path == [str(d) for d in dirs]
        assert "myapp.yaml" in str(err)
        assert str(dirs[1]) in str(err)

    def test_not_found_is_a_file_not_found_error(self, tmp_test_dir):
        """Test that generic handlers still catch the error."""
        with pytest.raises(FileNotFoundError):
            find_file_in_path("myapp.yaml", [tmp_test_dir])
        with pytest.raises(ConfigError):
            find_file_in_path("myapp.yaml", [tmp_test_dir])

    def test_single_directory_path(self, tmp_test_dir):
        """Test that a lone directory string is searched as one directory."""
        with pytest.raises(ConfigNotFoundError) as exc_info:
            find_file_in_path("myapp.yaml", str(tmp_test_dir))

        assert exc_info.value.search_path == [str(tmp_test_dir)]

        (tmp_test_dir / "myapp.yaml").write_text("hostname: one\n")

        assert find_file_in_path("myapp.yaml", tmp_test_dir) == tmp_test_dir / "myapp.yaml"

    def test_empty_filename_raises(self):
        """Test that an empty filename is rejected."""
        with pytest.raises(ValueError):
            find_file_in_path("", [])


class TestDefaultSearchPath:
    """Tests for the default search path."""

    def test_order(self, tmp_test_dir, monkeypatch):
        """Test that local locations come before global ones."""
        program_dir = tmp_test_dir / "app" / "bin"
        program_dir.mkdir(parents=True)
        program = program_dir / "myapp"
        program.write_text("")
        home = tmp_test_dir / "home"
        home.mkdir()
        work = tmp_test_dir / "work"
        work.mkdir()

        monkeypatch.setattr(sys, "argv", [str(program)])
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.chdir(work)

        path = default_search_path()
        real_program_dir = Path(os.path.realpath(program_dir))

        assert path == [
            Path.cwd(),
            Path.cwd().parent,
            real_program_dir,
            real_program_dir.parent / "etc",
            home,
            Path("/usr/local/etc"),
            Path("/etc"),
        ]

    def test_program_dir_follows_symlinks(self, tmp_test_dir, monkeypatch):
        """Test that the program directory is the symlink target's directory."""
        real_dir = tmp_test_dir / "real"
        real_dir.mkdir()
        program = real_dir / "myapp"
        program.write_text("")
        link = tmp_test_dir / "myapp-link"
        link.symlink_to(program)

        monkeypatch.setattr(sys, "argv", [str(link)])

        assert default_search_path()[2] == Path(os.path.realpath(real_dir))

    def test_interactive_program_dir_is_cwd(self, tmp_test_dir, monkeypatch):
        """Test that `python -c` uses the working directory as program dir."""
        monkeypatch.setattr(sys, "argv", ["-c"])
        monkeypatch.chdir(tmp_test_dir)

        assert default_search_path()[2] == Path.cwd()

    def test_default_path_is_used_when_none_given(self, tmp_test_dir, monkeypatch):
        """Test that the current directory is searched by default."""
        monkeypatch.chdir(tmp_test_dir)
        (tmp_test_dir / "only-here-4f2a.yaml").write_text("hostname: x\n")

        found = find_file_in_path("only-here-4f2a.yaml")

        assert found == Path.cwd() / "only-here-4f2a.yaml"
