"""
Configuration management and loading.

Handles the API credential, client settings and the optional YAML
settings file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional
from urllib.parse import urlparse

import yaml

from ..core.errors import ConfigurationError

API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"
DEFAULT_MODEL = "claude-3-sonnet-20240229"
DEFAULT_ENDPOINT = "https://api.anthropic.com/v1/messages/count_tokens"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_TIMEOUT = 10.0  # seconds


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings injected into the transport client."""
    endpoint: str = DEFAULT_ENDPOINT
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate endpoint and timeout."""
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be > 0")
        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"endpoint must be an http(s) URL: {self.endpoint}")
        if not self.api_version:
            raise ConfigurationError("api_version cannot be empty")


@dataclass(frozen=True)
class Settings:
    """Resolved settings for a single run."""
    model: str = DEFAULT_MODEL
    client: ClientConfig = field(default_factory=ClientConfig)


def load_api_key(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the API key from the environment.

    Raises:
        ConfigurationError: If the variable is missing or blank
    """
    env = os.environ if environ is None else environ
    api_key = env.get(API_KEY_ENV_VAR, "").strip()
    if not api_key:
        raise ConfigurationError(
            f"Missing Anthropic API key. Set {API_KEY_ENV_VAR} environment variable."
        )
    return api_key


def load_settings(path: str) -> Settings:
    """Load and validate settings from a YAML file.

    Every key is optional; omitted keys keep their defaults. Unknown keys
    are rejected so a typo never silently falls back to a default.

    Args:
        path: Path to YAML settings file

    Returns:
        Validated Settings object

    Raises:
        ConfigurationError: If the file is missing, unreadable, or invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e

    if raw_config is None:
        raise ConfigurationError("Settings file is empty")
    if not isinstance(raw_config, dict):
        raise ConfigurationError("Settings file must contain a mapping")

    allowed_keys = {'model', 'endpoint', 'api_version', 'timeout'}
    unknown_keys = set(raw_config.keys()) - allowed_keys
    if unknown_keys:
        raise ConfigurationError(f"Unknown settings keys: {sorted(unknown_keys)}")

    model = _parse_string(raw_config, 'model', DEFAULT_MODEL)

    client_kwargs: Dict[str, object] = {
        'endpoint': _parse_string(raw_config, 'endpoint', DEFAULT_ENDPOINT),
        'api_version': _parse_string(raw_config, 'api_version', DEFAULT_API_VERSION),
    }

    timeout = raw_config.get('timeout', DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigurationError("'timeout' must be a number > 0")
    client_kwargs['timeout'] = float(timeout)

    return Settings(model=model, client=ClientConfig(**client_kwargs))


def _parse_string(data: Dict, key: str, default: str) -> str:
    """Return a non-empty string value or the default when the key is absent."""
    if key not in data:
        return default
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"'{key}' must be a non-empty string")
    return value
