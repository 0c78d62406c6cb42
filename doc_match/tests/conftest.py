# Path: doc_match/tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for doc_match

Provides common test fixtures used across all test modules.
"""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from doc_match.config_loader import (
    DEFAULT_SEARCH_TOP_K,
    DEFAULT_SCORE_FLOOR,
    DEFAULT_SERIES_MATCH_THRESHOLD,
    DEFAULT_SERIES_CONFIDENCE,
    DEFAULT_NEGATIVE_SAMPLE_LIMIT,
    DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE,
    DEFAULT_HISTORY_CAP,
    DEFAULT_CONTEXT_WINDOW,
    DEFAULT_AUTO_MATCH_THRESHOLD,
    DEFAULT_OFFLOAD_THRESHOLD,
    DEFAULT_MAX_WORKERS,
    DEFAULT_JSON_INDENT,
)


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        'DOC_MATCH_ENVIRONMENT': 'test',
        'DOC_MATCH_DEBUG': 'true',

        # Logging
        'DOC_MATCH_LOG_DIR': '/tmp/doc_match_test/logs',
        'DOC_MATCH_LOG_LEVEL': 'DEBUG',
        'DOC_MATCH_LOG_CONSOLE': 'false',

        # Search
        'DOC_MATCH_SEARCH_TOP_K': '15',
        'DOC_MATCH_SCORE_FLOOR': '0.1',

        # Learning
        'DOC_MATCH_HISTORY_CAP': '500',
        'DOC_MATCH_UNLEARN_ON_REMOVE': 'yes',

        # Concurrency
        'DOC_MATCH_OFFLOAD_THRESHOLD': '100',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# SAMPLE DATA FIXTURES
# ==============================================================================

@pytest.fixture
def sample_references():
    """References from a typical bundle index."""
    return [
        'Exhibit A5-01',
        'Exhibit A5-02',
        'Exhibit A5-03',
        'CW-1 - Witness Statement of J. Smith',
        'CW-2 - Witness Statement of K. Jones',
        'Procedural Order No. 3',
    ]


@pytest.fixture
def sample_paths():
    """Candidate paths for sample_references, in load order."""
    return [
        'exhibits/A5-01.pdf',
        'exhibits/A5-02.pdf',
        'exhibits/A5-03.pdf',
        'witness/CW-1 Witness Statement Smith.pdf',
        'witness/CW-2 Witness Statement Jones.pdf',
        'orders/Procedural Order 3.pdf',
        'misc/Cover Letter.docx',
    ]


@pytest.fixture
def scenario_references():
    """Two-item scenario used across coordinator tests."""
    return ['Exhibit A5-01', 'Exhibit A5-02']


@pytest.fixture
def scenario_paths():
    return ['folder/A5-01-letter.pdf', 'folder/A5-02-letter.pdf']


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

CONFIG_DEFAULTS = {
    'environment': 'test',
    'debug': True,
    'dictionary_dir': None,
    'learning_data_path': None,
    'log_dir': None,
    'log_level': 'INFO',
    'log_console': False,
    'search_top_k': DEFAULT_SEARCH_TOP_K,
    'score_floor': DEFAULT_SCORE_FLOOR,
    'series_match_threshold': DEFAULT_SERIES_MATCH_THRESHOLD,
    'series_confidence': DEFAULT_SERIES_CONFIDENCE,
    'negative_sample_limit': DEFAULT_NEGATIVE_SAMPLE_LIMIT,
    'negative_sample_min_score': DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE,
    'history_cap': DEFAULT_HISTORY_CAP,
    'unlearn_on_remove': False,
    'context_window': DEFAULT_CONTEXT_WINDOW,
    'auto_match_threshold': DEFAULT_AUTO_MATCH_THRESHOLD,
    'offload_threshold': DEFAULT_OFFLOAD_THRESHOLD,
    'max_workers': DEFAULT_MAX_WORKERS,
    'json_indent': DEFAULT_JSON_INDENT,
}


@pytest.fixture
def make_config():
    """Factory for mock ConfigLoaders with overridden values."""
    def _make(**overrides):
        values = {**CONFIG_DEFAULTS, **overrides}
        config = MagicMock()
        config.get.side_effect = lambda key, default=None: values.get(key, default)
        return config
    return _make


@pytest.fixture
def mock_config(make_config):
    """Create a mock ConfigLoader with default values."""
    return make_config()


@pytest.fixture
def coordinator(mock_config):
    """Coordinator on default configuration."""
    from doc_match.process.matcher import MatchingCoordinator

    coordinator = MatchingCoordinator(mock_config)
    yield coordinator
    coordinator.shutdown()


@pytest.fixture
def session(coordinator, sample_references, sample_paths):
    """Session over the sample references and paths."""
    return coordinator.create_session(sample_references, sample_paths)


@pytest.fixture
def scenario_session(coordinator, scenario_references, scenario_paths):
    return coordinator.create_session(scenario_references, scenario_paths)


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from doc_match.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
