"""Registry of network adapters keyed by network."""

from __future__ import annotations

import logging
from typing import Optional

from typing_extensions import Self

from svm_pay.adapters.base import NetworkAdapter
from svm_pay.networks import SVMNetwork

logger = logging.getLogger(__name__)


class NetworkAdapterRegistry:
    """Lookup table from network to adapter.

    Populate the registry once at startup and pass the same instance to every
    request handler. It is not meant to be mutated while requests are being
    processed.

    Example:
        ```python
        registry = NetworkAdapterRegistry()
        registry.register_adapter(RpcNetworkAdapter(SVMNetwork.SOLANA))

        handler = TransferRequestHandler(registry)
        ```
    """

    def __init__(self, adapters: Optional[list[NetworkAdapter]] = None) -> None:
        self._adapters: dict[SVMNetwork, NetworkAdapter] = {}
        for adapter in adapters or []:
            self.register_adapter(adapter)

    def register_adapter(self, adapter: NetworkAdapter) -> Self:
        """Register an adapter for the network it declares.

        Args:
            adapter: Adapter to register. Replaces any adapter already
                registered for the same network.

        Returns:
            Self for chaining.
        """
        network = SVMNetwork(adapter.network)
        if network in self._adapters:
            logger.warning("Replacing network adapter for %s", network.value)
        self._adapters[network] = adapter
        logger.debug("Registered %s for %s", type(adapter).__name__, network.value)
        return self

    def get_adapter(self, network: SVMNetwork) -> Optional[NetworkAdapter]:
        """Return the adapter for ``network``, or None if none is registered."""
        return self._adapters.get(network)

    def get_all_adapters(self) -> dict[SVMNetwork, NetworkAdapter]:
        """Return a copy of the network to adapter mapping."""
        return dict(self._adapters)

    def networks(self) -> list[SVMNetwork]:
        return list(self._adapters)

    def __contains__(self, network: object) -> bool:
        return network in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)
