"""Client configuration for cloudops.

Configuration comes from named profiles in an INI file
(``~/.cloudopscfg`` unless ``CLOUDOPS_CONFIG_FILE`` points elsewhere),
overridden by ``CLOUDOPS_*`` environment variables. Endpoints are
normalized the same way regardless of where they came from.

Example profile::

    [lab]
    provider = cloudstack
    endpoint = https://cloud.example.com/client/api
    identity = my-api-key
    credential = my-secret-key
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

from cloudops.core.apis import ApiRegistry, UnknownApiError

CONFIG_FILE_ENV = "CLOUDOPS_CONFIG_FILE"
_ENV_OVERRIDES = {
    "provider": "CLOUDOPS_PROVIDER",
    "endpoint": "CLOUDOPS_ENDPOINT",
    "identity": "CLOUDOPS_IDENTITY",
    "credential": "CLOUDOPS_CREDENTIAL",
}


class ConfigError(RuntimeError):
    """Raised when cloudops configuration is missing or invalid."""


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for talking to one provider."""

    provider: str
    endpoint: str | None
    identity: str | None = None
    credential: str | None = field(default=None, repr=False)
    profile: str | None = None


def config_path() -> Path:
    """Return the profile file location, honoring the env override."""
    override = os.getenv(CONFIG_FILE_ENV)
    if override:
        return Path(override)
    return Path.home() / ".cloudopscfg"


def _sanitize_endpoint(endpoint: str | None) -> str | None:
    """
    Normalize a provider endpoint URL.

    - Removes query strings (e.g. '?o=123456789')
    - Removes trailing slashes
    """
    if not endpoint:
        return endpoint
    endpoint = endpoint.split("?", 1)[0]
    return endpoint.rstrip("/")


def _read_profile(path: Path, profile: str | None) -> dict[str, str]:
    """Return the keys of a profile (the DEFAULT section when none is given)."""
    parser = configparser.ConfigParser(interpolation=None)
    if path.exists():
        try:
            parser.read(path)
        except configparser.Error as exc:
            raise ConfigError(f"Could not parse {path}: {exc}") from exc

    if profile is None:
        return dict(parser.defaults())
    if not parser.has_section(profile):
        raise ConfigError(f"Profile '{profile}' not found in {path}")
    return dict(parser[profile])


def load_config(
    profile: str | None = None,
    registry: ApiRegistry | None = None,
) -> ClientConfig:
    """
    Resolve the client configuration for a profile.

    When a registry is given, the provider id is checked against it and a
    missing endpoint falls back to the provider's default endpoint.

    Raises:
        ConfigError: If the profile does not exist, no provider is set, or
                     the provider is unknown.
    """
    path = config_path()
    values = _read_profile(path, profile)

    for key, env_name in _ENV_OVERRIDES.items():
        env_value = os.getenv(env_name)
        if env_value:
            values[key] = env_value

    provider = values.get("provider")
    if not provider:
        raise ConfigError(
            "No provider configured. Set `provider` in "
            f"{path} or export {_ENV_OVERRIDES['provider']}."
        )

    endpoint = values.get("endpoint")
    identity = values.get("identity")
    if registry is not None:
        try:
            metadata = registry.get(provider)
        except UnknownApiError as exc:
            raise ConfigError(str(exc)) from exc
        if not endpoint and metadata.default_endpoint:
            endpoint = metadata.default_endpoint.replace("{identity}", identity or "")

    return ClientConfig(
        provider=provider,
        endpoint=_sanitize_endpoint(endpoint),
        identity=identity,
        credential=values.get("credential"),
        profile=profile,
    )
