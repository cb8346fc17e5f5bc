"""Tests for TOML config file loading."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from cscan.cli import build_parser, load_config, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_cscan_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text('[scanner]\nmalformed_numbers = "warn"\n')
        result = load_config(None, tmp_path)
        assert result["scanner"] == {"malformed_numbers": "warn"}

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text("[output\n")
        with pytest.raises(argparse.ArgumentTypeError):
            load_config(None, tmp_path)


class TestConfigMerge:
    def test_config_values_used(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text(
            '[output]\nformat = "json"\ndiagnostics = "stderr"\n'
            '[scanner]\nmalformed_numbers = "warn"\n'
        )
        src = tmp_path / "prog.c"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src)]))
        assert opts.format == "json"
        assert opts.diagnostics == "stderr"
        assert opts.malformed_numbers == "warn"

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text('[output]\nformat = "json"\n[scanner]\nmalformed_numbers = "warn"\n')
        src = tmp_path / "prog.c"
        src.write_text("")
        ns = build_parser().parse_args([str(src), "--format", "text", "--malformed-numbers", "drop"])
        opts = resolve_options(ns)
        assert opts.format == "text"
        assert opts.malformed_numbers == "drop"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[output]\ndiagnostics = "stderr"\n')
        src = tmp_path / "prog.c"
        src.write_text("")
        ns = build_parser().parse_args([str(src), "--config", str(cfg)])
        opts = resolve_options(ns)
        assert opts.diagnostics == "stderr"

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text('[scanner]\nmalformed_numbers = "explode"\n')
        src = tmp_path / "prog.c"
        src.write_text("")
        with pytest.raises(argparse.ArgumentTypeError, match="scanner.malformed_numbers"):
            resolve_options(build_parser().parse_args([str(src)]))

    def test_non_table_sections_ignored(self, tmp_path: Path) -> None:
        cfg = tmp_path / "cscan.toml"
        cfg.write_text('output = "json"\n')
        src = tmp_path / "prog.c"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src)]))
        assert opts.format == "text"
