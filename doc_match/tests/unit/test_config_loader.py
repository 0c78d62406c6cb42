# Path: doc_match/tests/unit/test_config_loader.py
"""
Unit Tests for ConfigLoader

Tests the configuration loading functionality including:
- Environment variable parsing
- Type conversion methods
- Singleton pattern
- Default value handling
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from doc_match.config_loader import (
    ConfigLoader,
    DEFAULT_SEARCH_TOP_K,
    DEFAULT_SCORE_FLOOR,
    DEFAULT_CONTEXT_WINDOW,
)


class TestConfigLoaderBasics:
    """Test basic ConfigLoader functionality."""

    def test_singleton_pattern(self, mock_env_vars, reset_singletons):
        """ConfigLoader should return same instance."""
        config1 = ConfigLoader()
        config2 = ConfigLoader()

        assert config1 is config2

    def test_get_returns_value(self, mock_env_vars, reset_singletons):
        """get() should return configured value."""
        config = ConfigLoader()
        assert config.get('environment') == 'test'

    def test_get_returns_default_for_missing(self, mock_env_vars, reset_singletons):
        """get() should return default for missing keys."""
        config = ConfigLoader()
        assert config.get('nonexistent_key', 'default_value') == 'default_value'

    def test_get_returns_none_for_missing_no_default(self, mock_env_vars, reset_singletons):
        """get() should return None for missing keys without default."""
        config = ConfigLoader()
        assert config.get('nonexistent_key') is None


class TestConfigLoaderTypeConversion:
    """Test type conversion methods."""

    def test_get_path_returns_path_object(self, mock_env_vars, reset_singletons):
        """Path values should be converted to Path objects."""
        config = ConfigLoader()
        assert config.get('log_dir') == Path('/tmp/doc_match_test/logs')

    def test_get_int_converts_string(self, mock_env_vars, reset_singletons):
        """Integer values should be converted from string."""
        config = ConfigLoader()
        assert config.get('search_top_k') == 15
        assert config.get('history_cap') == 500

    def test_get_float_converts_string(self, mock_env_vars, reset_singletons):
        """Float values should be converted from string."""
        config = ConfigLoader()
        assert config.get('score_floor') == pytest.approx(0.1)

    def test_get_bool_accepts_yes_and_false(self, mock_env_vars, reset_singletons):
        """Boolean parsing accepts common spellings."""
        config = ConfigLoader()
        assert config.get('unlearn_on_remove') is True
        assert config.get('log_console') is False
        assert config.get('debug') is True


class TestConfigLoaderDefaults:
    """Test fallback to defaults."""

    def test_defaults_without_environment(self, reset_singletons):
        """Engine settings fall back to module defaults."""
        keys = [k for k in os.environ if k.startswith('DOC_MATCH_')]
        with patch.dict(os.environ, {}, clear=False):
            for key in keys:
                del os.environ[key]
            config = ConfigLoader()

            assert config.get('search_top_k') == DEFAULT_SEARCH_TOP_K
            assert config.get('score_floor') == DEFAULT_SCORE_FLOOR
            assert config.get('context_window') == DEFAULT_CONTEXT_WINDOW
            assert config.get('unlearn_on_remove') is False

    def test_optional_paths_are_none(self, reset_singletons):
        """Unset optional paths are None, not errors."""
        with patch.dict(os.environ, {'DOC_MATCH_LOG_DIR': ''}, clear=False):
            config = ConfigLoader()
            assert config.get('log_dir') is None

    def test_malformed_number_uses_default(self, reset_singletons):
        """Unparsable numbers fall back to the default."""
        env = {
            'DOC_MATCH_SEARCH_TOP_K': 'many',
            'DOC_MATCH_SCORE_FLOOR': 'low',
        }
        with patch.dict(os.environ, env, clear=False):
            config = ConfigLoader()
            assert config.get('search_top_k') == DEFAULT_SEARCH_TOP_K
            assert config.get('score_floor') == DEFAULT_SCORE_FLOOR
