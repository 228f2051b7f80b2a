"""Tests for env file discovery and parsing."""

import os
import re

import pytest

from envault.exceptions import FilesystemError, ValidationError
from envault.services.env_scanner import (
    parse_env_content,
    scan_env_files,
    validate_env_name,
)


def _touch(root, *names):
    for name in names:
        (root / name).write_text(f"# {name}\n")


class TestScanEnvFiles:

    def test_only_env_prefixed_entries(self, tmp_path):
        _touch(tmp_path, ".env", ".env.local", "README.md", "env.txt", ".gitignore")
        names = [f.name for f in scan_env_files(tmp_path)]
        assert names == [".env", ".env.local"]

    def test_dot_env_first_then_lexicographic(self, tmp_path):
        _touch(tmp_path, ".env.production", ".env.development", ".env", ".env.local", ".envrc")
        names = [f.name for f in scan_env_files(tmp_path)]
        assert names == [".env", ".env.development", ".env.local", ".env.production", ".envrc"]

    def test_lexicographic_without_dot_env(self, tmp_path):
        _touch(tmp_path, ".env.test", ".env.b", ".env.a")
        names = [f.name for f in scan_env_files(tmp_path)]
        assert names == [".env.a", ".env.b", ".env.test"]

    def test_empty_directory(self, tmp_path):
        assert scan_env_files(tmp_path) == []

    def test_active_flag_exact_match(self, tmp_path):
        _touch(tmp_path, ".env", ".env.local")
        files = {f.name: f.is_active for f in scan_env_files(tmp_path, ".env.local")}
        assert files == {".env": False, ".env.local": True}

    def test_active_flag_is_case_sensitive(self, tmp_path):
        _touch(tmp_path, ".env", ".env.local")
        assert not any(f.is_active for f in scan_env_files(tmp_path, ".ENV.LOCAL"))

    def test_no_active_name_means_none_active(self, tmp_path):
        _touch(tmp_path, ".env", ".env.local")
        assert not any(f.is_active for f in scan_env_files(tmp_path))

    def test_absolute_path_and_modified_time(self, tmp_path):
        _touch(tmp_path, ".env")
        os.utime(tmp_path / ".env", (0, 86400 + 3661))

        [env_file] = scan_env_files(tmp_path)
        assert os.path.isabs(env_file.path)
        assert env_file.path == str(tmp_path.absolute() / ".env")
        assert env_file.modified_at == "1970-01-02 01:01:01"

    def test_modified_time_format(self, tmp_path):
        _touch(tmp_path, ".env")
        [env_file] = scan_env_files(tmp_path)
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", env_file.modified_at)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FilesystemError, match="Invalid project path"):
            scan_env_files(tmp_path / "missing")

    def test_path_is_a_file(self, tmp_path):
        _touch(tmp_path, ".env")
        with pytest.raises(FilesystemError):
            scan_env_files(tmp_path / ".env")

    def test_scenario_from_two_files(self, tmp_path):
        (tmp_path / ".env").write_text("PORT=1")
        (tmp_path / ".env.production").write_text("PORT=2")

        files = scan_env_files(tmp_path, ".env")
        assert [(f.name, f.is_active) for f in files] == [
            (".env", True),
            (".env.production", False),
        ]


class TestParseEnvContent:

    def test_classifies_lines(self):
        lines = parse_env_content("# comment\n\nPORT=3000\nnot a pair\n  # indented\n")
        assert [line.type for line in lines] == [
            "comment", "empty", "variable", "invalid", "comment", "empty",
        ]

    def test_variable_split_on_first_equals(self):
        [line] = parse_env_content("DATABASE_URL=postgres://u:p@h/db?x=1")
        assert line.key == "DATABASE_URL"
        assert line.value == "postgres://u:p@h/db?x=1"

    def test_empty_value(self):
        [line] = parse_env_content("EMPTY=")
        assert line.type == "variable"
        assert line.key == "EMPTY"
        assert line.value == ""

    def test_leading_equals_is_invalid(self):
        [line] = parse_env_content("=value")
        assert line.type == "invalid"

    def test_crlf_line_endings(self):
        lines = parse_env_content("A=1\r\nB=2")
        assert [(line.key, line.value) for line in lines] == [("A", "1"), ("B", "2")]


class TestValidateEnvName:

    @pytest.mark.parametrize("name", [".env", ".env.local", ".env.production.local"])
    def test_accepts_env_names(self, name):
        assert validate_env_name(name) == name

    @pytest.mark.parametrize("name", ["", ".", "..", "../.env", ".env/../../etc", "sub/.env", "a\\b"])
    def test_rejects_bad_names(self, name):
        with pytest.raises(ValidationError):
            validate_env_name(name)

    def test_any_plain_file_name_allowed_by_default(self):
        assert validate_env_name("prod.env") == "prod.env"

    def test_env_prefix_enforced_on_request(self):
        assert validate_env_name(".env.local", require_env_prefix=True) == ".env.local"
        with pytest.raises(ValidationError, match="Not an env file"):
            validate_env_name("prod.env", require_env_prefix=True)
