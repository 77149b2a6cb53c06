"""Pod providers, selected by name from configuration."""

import logging
from typing import Callable, Dict

from zun_provider.config import ConfigError, ProviderConfig, get_openstack_auth_config
from zun_provider.providers.base import PodProvider
from zun_provider.providers.zun import ZunProvider
from zun_provider.services.zun_client import create_zun_client

logger = logging.getLogger(__name__)


def _openstack_provider(config: ProviderConfig) -> PodProvider:
    zun_client = create_zun_client(get_openstack_auth_config())
    return ZunProvider(zun_client, config)


PROVIDER_FACTORIES: Dict[str, Callable[[ProviderConfig], PodProvider]] = {
    "openstack": _openstack_provider,
}


def create_provider(config: ProviderConfig) -> PodProvider:
    """
    Build the provider named in the configuration.

    Raises:
        ConfigError: If no provider is registered under that name
    """
    factory = PROVIDER_FACTORIES.get(config.provider)
    if factory is None:
        raise ConfigError(
            f"Unknown provider {config.provider!r}; available: {', '.join(sorted(PROVIDER_FACTORIES))}"
        )
    logger.info(f"Initializing {config.provider} provider for node {config.node_name}")
    return factory(config)


__all__ = ["PodProvider", "ZunProvider", "create_provider", "PROVIDER_FACTORIES"]
