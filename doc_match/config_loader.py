# Path: doc_match/config_loader.py
"""
Configuration Loader for doc_match (Document Reference Matching)

Loads configuration from .env file for the matching engine.
Singleton pattern ensures consistent configuration across all components.

NO hardcoded thresholds in module code.
All tunables come from environment variables, with defaults below.
"""

import os
import threading
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Search Defaults
DEFAULT_SEARCH_TOP_K: int = 20
DEFAULT_SCORE_FLOOR: float = 0.05

# Series Detection Defaults
DEFAULT_SERIES_MATCH_THRESHOLD: float = 0.7
DEFAULT_SERIES_CONFIDENCE: float = 0.85

# Learning Defaults
DEFAULT_NEGATIVE_SAMPLE_LIMIT: int = 3
DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE: float = 0.5
DEFAULT_HISTORY_CAP: int = 1000

# Context Defaults
DEFAULT_CONTEXT_WINDOW: int = 10

# Auto-Match Defaults
DEFAULT_AUTO_MATCH_THRESHOLD: float = 0.8

# Performance Defaults
DEFAULT_OFFLOAD_THRESHOLD: int = 5000
DEFAULT_MAX_WORKERS: int = 2

# Output Defaults
DEFAULT_JSON_INDENT: int = 2


class ConfigLoader:
    """
    Singleton configuration loader for doc_match.

    Loads configuration from environment variables with type
    conversion and sensible defaults. Unlike path-heavy applications,
    nothing is required: the matching engine runs on an empty environment.

    Example:
        config = ConfigLoader()
        top_k = config.get('search_top_k')  # Returns int
        floor = config.get('score_floor')   # Returns float
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        from the project root on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # doc_match/config_loader.py -> .env is in the project root
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('DOC_MATCH_ENVIRONMENT', 'development'),
            'debug': self._get_bool('DOC_MATCH_DEBUG', False),

            # ================================================================
            # PATHS (all optional)
            # ================================================================
            'dictionary_dir': self._get_path('DOC_MATCH_DICTIONARY_DIR'),
            'learning_data_path': self._get_path('DOC_MATCH_LEARNING_DATA_PATH'),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('DOC_MATCH_LOG_DIR'),
            'log_level': self._get_env('DOC_MATCH_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('DOC_MATCH_LOG_CONSOLE', True),

            # ================================================================
            # SEARCH CONFIGURATION
            # ================================================================
            'search_top_k': self._get_int(
                'DOC_MATCH_SEARCH_TOP_K', DEFAULT_SEARCH_TOP_K
            ),
            'score_floor': self._get_float(
                'DOC_MATCH_SCORE_FLOOR', DEFAULT_SCORE_FLOOR
            ),

            # ================================================================
            # SERIES DETECTION
            # ================================================================
            'series_match_threshold': self._get_float(
                'DOC_MATCH_SERIES_MATCH_THRESHOLD', DEFAULT_SERIES_MATCH_THRESHOLD
            ),
            'series_confidence': self._get_float(
                'DOC_MATCH_SERIES_CONFIDENCE', DEFAULT_SERIES_CONFIDENCE
            ),

            # ================================================================
            # LEARNING
            # ================================================================
            'negative_sample_limit': self._get_int(
                'DOC_MATCH_NEGATIVE_SAMPLE_LIMIT', DEFAULT_NEGATIVE_SAMPLE_LIMIT
            ),
            'negative_sample_min_score': self._get_float(
                'DOC_MATCH_NEGATIVE_SAMPLE_MIN_SCORE', DEFAULT_NEGATIVE_SAMPLE_MIN_SCORE
            ),
            'history_cap': self._get_int('DOC_MATCH_HISTORY_CAP', DEFAULT_HISTORY_CAP),
            'unlearn_on_remove': self._get_bool('DOC_MATCH_UNLEARN_ON_REMOVE', False),

            # ================================================================
            # CONTEXT
            # ================================================================
            'context_window': self._get_int(
                'DOC_MATCH_CONTEXT_WINDOW', DEFAULT_CONTEXT_WINDOW
            ),

            # ================================================================
            # AUTO-MATCH
            # ================================================================
            'auto_match_threshold': self._get_float(
                'DOC_MATCH_AUTO_MATCH_THRESHOLD', DEFAULT_AUTO_MATCH_THRESHOLD
            ),

            # ================================================================
            # PERFORMANCE CONFIGURATION
            # ================================================================
            'offload_threshold': self._get_int(
                'DOC_MATCH_OFFLOAD_THRESHOLD', DEFAULT_OFFLOAD_THRESHOLD
            ),
            'max_workers': self._get_int('DOC_MATCH_MAX_WORKERS', DEFAULT_MAX_WORKERS),

            # ================================================================
            # OUTPUT CONFIGURATION
            # ================================================================
            'json_indent': self._get_int('DOC_MATCH_JSON_INDENT', DEFAULT_JSON_INDENT),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if value is None or value == '':
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"log_dir={self._config.get('log_dir')})"
        )


__all__ = ['ConfigLoader']
