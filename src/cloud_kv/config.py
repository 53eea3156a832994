"""Configuration management for cloud-kv.

Connection settings live in a YAML file with one entry per deployment
environment::

    default_environment: prod
    request_timeout: 30
    environments:
      prod:
        url: https://cloud.example.com
        token: ${CLOUD_KV_TOKEN}

``CLOUD_KV_URL`` and ``CLOUD_KV_TOKEN`` override the selected
environment's values.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cloud_kv.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cloud-kv" / "config.yaml"
DEFAULT_REQUEST_TIMEOUT = 30.0

CONFIG_PATH_ENV = "CLOUD_KV_CONFIG"
URL_ENV = "CLOUD_KV_URL"
TOKEN_ENV = "CLOUD_KV_TOKEN"

_ENVIRONMENTS_HINT = "Each environment is a name mapped to its url and token, e.g. prod: {url: ..., token: ...}."


def _resolve_env_reference(value: str | None) -> str | None:
    """Expand a ``${VAR}`` value from the environment."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1])
    return value


@dataclass
class EnvironmentConfig:
    """Connection settings for one deployment environment."""
    url: str | None = None
    token: str | None = None

    def __post_init__(self):
        self.token = _resolve_env_reference(self.token)


@dataclass
class Config:
    """Main configuration."""
    environments: dict[str, EnvironmentConfig] = field(default_factory=dict)
    default_environment: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from a YAML file.

        A missing file yields an empty configuration; environment
        variables may still supply everything needed.
        """
        if config_path is None:
            env_path = os.environ.get(CONFIG_PATH_ENV)
            config_path = Path(env_path).expanduser() if env_path else DEFAULT_CONFIG_PATH

        if not config_path.exists():
            logger.debug("No config file at %s", config_path)
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                f"Could not read config file {config_path}: {exc}",
            ) from exc

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping.",
            )
        return cls.from_dict(data, config_path)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: object = "configuration") -> Config:
        """Build a configuration from parsed YAML.

        *source* names the file in error messages.
        """
        raw_environments = data.get("environments") or {}
        if not isinstance(raw_environments, Mapping):
            raise ConfigurationError(
                f'Invalid "environments" in {source}: expected a mapping of environment names.',
                hint=_ENVIRONMENTS_HINT,
            )

        environments = {}
        for name, values in raw_environments.items():
            values = values or {}
            if not isinstance(values, Mapping):
                raise ConfigurationError(
                    f'Invalid environment "{name}" in {source}: expected a mapping.',
                    hint=_ENVIRONMENTS_HINT,
                )
            for key in ("url", "token"):
                if values.get(key) is not None and not isinstance(values[key], str):
                    raise ConfigurationError(
                        f'Invalid "{key}" for environment "{name}" in {source}: expected a string.',
                    )
            environments[str(name)] = EnvironmentConfig(
                url=values.get("url"),
                token=values.get("token"),
            )

        raw_timeout = data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        try:
            request_timeout = float(raw_timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f'Invalid "request_timeout" in {source}: expected a number of seconds, '
                f"got {raw_timeout!r}.",
            ) from exc

        return cls(
            environments=environments,
            default_environment=data.get("default_environment"),
            request_timeout=request_timeout,
        )

    def resolve(self, environment: str | None = None) -> EnvironmentConfig:
        """Return the connection settings to use for this invocation.

        Parameters
        ----------
        environment:
            Explicit environment name (``--environment``).  Falls back to
            ``default_environment``, then to the only configured one.

        Raises
        ------
        ConfigurationError
            If the environment is unknown or the URL or token is missing
            after environment-variable overrides.
        """
        name = environment or self.default_environment
        if name is None and len(self.environments) == 1:
            name = next(iter(self.environments))

        if name is not None and name not in self.environments:
            known = ", ".join(sorted(self.environments)) or "none"
            raise ConfigurationError(
                f'Unknown environment "{name}"',
                hint=f"Configured environments: {known}",
            )

        selected = self.environments[name] if name is not None else EnvironmentConfig()
        resolved = EnvironmentConfig(
            url=os.environ.get(URL_ENV) or selected.url,
            token=os.environ.get(TOKEN_ENV) or selected.token,
        )

        if not resolved.url:
            raise ConfigurationError(
                "No cloud URL configured.",
                hint=f"Set {URL_ENV} or add a url to {DEFAULT_CONFIG_PATH}.",
            )
        if not resolved.token:
            raise ConfigurationError(
                "Not logged in: no access token configured.",
                hint=f"Set {TOKEN_ENV} or add a token to {DEFAULT_CONFIG_PATH}.",
            )
        return resolved
