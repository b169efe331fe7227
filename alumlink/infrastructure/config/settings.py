"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and an optional
YAML configuration file (~/.alumlink/config.yaml). Values are read once at
startup by the composition root; there is no hot reload.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".alumlink"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_SESSION_FILE = DEFAULT_CONFIG_DIR / "session.json"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "ALUMLINK_"

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
PLACEHOLDER_KEY_MARKER = "your-"

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_loaded = False


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: ENV VARS take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.info("Configuration loading process completed.")


def reset_configuration() -> None:
    """Forgets loaded values so load_configuration runs again."""
    global _config, _loaded
    _config = {}
    _loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML sections into dotted keys ('api.url')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def _env_key(key: str) -> str:
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if in testing mode)
    2. Environment variable (ALUMLINK_ + upper-cased key, dots as underscores)
    3. YAML config
    4. Default value

    Args:
        key: The configuration key, e.g. 'api.url'
        default: Default value if the key is not found

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = _env_key(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    logger.debug(f"Config key '{key}' not found in environment or loaded config. Returning default: {default}")
    return default


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        if value.lower() == 'true':
            return True
        if value.lower() == 'false':
            return False
        logger.warning(f"Unexpected string value for boolean flag: '{value}'. Defaulting to {default}.")
        return default
    return bool(value)


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Convenience Functions ---

def get_api_url() -> str:
    """Base URL of the real backend, without the /api prefix."""
    url = get_config('api_url', DEFAULT_API_URL)
    return str(url).rstrip('/')


def use_real_api() -> bool:
    """Whether the operator prefers the real backend at startup."""
    return _as_bool(get_config('use_real_api', False), default=False)


def is_backend_available() -> bool:
    """Whether the backend is presumed reachable before any probe."""
    return _as_bool(get_config('backend_available', False), default=False)


def get_publishable_key() -> Optional[str]:
    """The identity provider's publishable key, if configured."""
    key = get_config('publishable_key')
    return str(key) if key else None


def get_environment() -> str:
    return str(get_config('env', 'production')).lower()


def is_local_identity_mode() -> bool:
    """True in development when no usable identity-provider key is configured."""
    if get_environment() != 'development':
        return False
    key = get_publishable_key()
    return not key or PLACEHOLDER_KEY_MARKER in key


def get_request_timeout() -> float:
    timeout = get_config('request_timeout', DEFAULT_REQUEST_TIMEOUT_SECONDS)
    try:
        return float(timeout)
    except (TypeError, ValueError):
        logger.warning(f"Invalid request timeout '{timeout}'. Using {DEFAULT_REQUEST_TIMEOUT_SECONDS}s.")
        return DEFAULT_REQUEST_TIMEOUT_SECONDS


def get_session_file() -> Path:
    return Path(get_config('session_file', DEFAULT_SESSION_FILE)).expanduser()


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
