"""Tests for bf.core.config module."""

from __future__ import annotations

from pathlib import Path

from bf.core.config import (
    CONFIG_FILE_NAME,
    DEFAULT_ENTRY_POINT,
    DEFAULT_OUTPUT_DIR,
    Config,
    load_config,
    load_config_or_default,
)
from bf.core.result import Err, Ok

SAMPLE = """
[run]
entry_point = "make_release_flow"
print_context = true

[[products]]
name = "release"
build = ["python", "build.py"]
output = "out"

[[products]]
name = "debug"
"""


class TestLoadConfig:
    def test_parses_products_and_run(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text(SAMPLE, encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        config = result.value
        assert config.run.entry_point == "make_release_flow"
        assert config.run.print_context is True
        assert config.run.display_summary is True
        assert config.product_names == ("release", "debug")

        release = config.product("release")
        assert release is not None
        assert release.build == ("python", "build.py")
        assert release.output == "out"

        debug = config.product("debug")
        assert debug is not None
        assert debug.build == ()
        assert debug.output == DEFAULT_OUTPUT_DIR

    def test_unknown_product(self) -> None:
        assert Config().product("nope") is None

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / CONFIG_FILE_NAME)
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("[run\n", encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_product_without_name(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text('[[products]]\noutput = "out"\n', encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "needs a name" in result.error.message


class TestLoadConfigOrDefault:
    def test_absent_file_gives_defaults(self, tmp_path: Path) -> None:
        result = load_config_or_default(tmp_path)
        assert result == Ok(Config())
        assert result.value.run.entry_point == DEFAULT_ENTRY_POINT

    def test_broken_file_is_still_an_error(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("not = [valid", encoding="utf-8")
        assert isinstance(load_config_or_default(tmp_path), Err)
