"""Application context management for the CLI."""

from dataclasses import dataclass

from cloudops.cli.common.exits import die
from cloudops.core.apis import ApiMetadata, ApiRegistry
from cloudops.core.config import ClientConfig, ConfigError, load_config
from cloudops.core.providers import default_registry


@dataclass
class ApisAppContext:
    """Application context holding the API registry."""

    registry: ApiRegistry


@dataclass
class ClientAppContext:
    """Application context holding resolved configuration for one provider."""

    profile: str | None
    config: ClientConfig
    api: ApiMetadata


def build_apis_context() -> ApisAppContext:
    """Build the context for commands that browse registered APIs."""
    return ApisAppContext(registry=default_registry())


def build_client_context(profile: str | None) -> ClientAppContext:
    """Build and return the context for a configured provider.

    Args:
        profile: Optional profile name from the cloudops config file.

    Returns:
        ClientAppContext: Resolved configuration plus the provider's metadata.
    """
    registry = default_registry()
    try:
        config = load_config(profile, registry=registry)
    except ConfigError as exc:
        die(str(exc), code=1)
    return ClientAppContext(
        profile=profile,
        config=config,
        api=registry.get(config.provider),
    )
