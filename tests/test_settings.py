"""Tests for settings and logging configuration."""

import pytest
from pydantic import ValidationError

from typealgebra.config.settings import AlgebraSettings, load_settings
from typealgebra.core.environment import DeclEnvironment, EmptyEnvironment
from typealgebra.logging_utils import parse_log_filter


class TestAlgebraSettings:
    def test_defaults(self):
        settings = AlgebraSettings()
        assert settings.max_normalization_steps == 256
        assert settings.transitive_subtyping is True

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("TYPEALGEBRA_MAX_NORMALIZATION_STEPS", "12")
        monkeypatch.setenv("TYPEALGEBRA_TRANSITIVE_SUBTYPING", "false")
        settings = load_settings()
        assert settings.max_normalization_steps == 12
        assert settings.transitive_subtyping is False

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("TYPEALGEBRA_MAX_NORMALIZATION_STEPS", "12")
        assert load_settings(max_normalization_steps=3).max_normalization_steps == 3

    def test_step_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            AlgebraSettings(max_normalization_steps=0)

    def test_environments_load_settings(self, monkeypatch):
        monkeypatch.setenv("TYPEALGEBRA_TRANSITIVE_SUBTYPING", "false")
        assert DeclEnvironment().settings.transitive_subtyping is False
        assert EmptyEnvironment().settings.transitive_subtyping is False


class TestParseLogFilter:
    def test_global_level(self):
        assert parse_log_filter("debug") == ("debug", {})

    def test_default_is_info(self):
        assert parse_log_filter() == ("info", {})

    def test_module_levels(self):
        level, modules = parse_log_filter("info, typealgebra.core=debug, typealgebra.core.normalize=false")
        assert level == "info"
        assert modules == {"typealgebra.core": "DEBUG", "typealgebra.core.normalize": False}

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TYPEALGEBRA_LOG_FILTER", "WARNING,typealgebra.cli=info")
        assert parse_log_filter() == ("warning", {"typealgebra.cli": "INFO"})
