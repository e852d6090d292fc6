"""Tests for plz.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from plz.core.config import (
    Config,
    DispatchConfig,
    ManifestFormat,
    load_config,
    load_config_or_default,
)
from plz.core.result import Err, Ok


class TestConfigDefaults:
    def test_defaults(self) -> None:
        config = Config()
        assert config.dispatch.workers is None
        assert config.manifest.format is ManifestFormat.JSON

    def test_frozen(self) -> None:
        config = DispatchConfig()
        with pytest.raises(AttributeError):
            config.workers = 3  # type: ignore[misc]


class TestFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_reads_values(self) -> None:
        config = Config.from_dict(
            {"dispatch": {"workers": 4}, "manifest": {"format": "lines"}}
        )
        assert config.dispatch.workers == 4
        assert config.manifest.format is ManifestFormat.LINES

    def test_rejects_zero_workers(self) -> None:
        with pytest.raises(ValueError, match="workers"):
            Config.from_dict({"dispatch": {"workers": 0}})

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            Config.from_dict({"manifest": {"format": "yaml"}})

    def test_ignores_wrong_types(self) -> None:
        config = Config.from_dict({"dispatch": {"workers": "eight"}, "manifest": []})
        assert config == Config()


class TestLoadConfig:
    def test_load_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[dispatch]\nworkers = 2\n\n[manifest]\nformat = "json"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.dispatch.workers == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[dispatch\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_structure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[dispatch]\nworkers = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_or_default_falls_back(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "missing.toml") == Config()
