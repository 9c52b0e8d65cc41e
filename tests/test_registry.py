"""Tests for the network adapter registry."""

import logging

from svm_pay.adapters import NetworkAdapter, NetworkAdapterRegistry
from svm_pay.networks import SVMNetwork

from .mocks import FakeNetworkAdapter


class TestNetworkAdapterRegistry:
    def test_register_and_get(self) -> None:
        solana = FakeNetworkAdapter(SVMNetwork.SOLANA)
        sonic = FakeNetworkAdapter(SVMNetwork.SONIC)

        registry = NetworkAdapterRegistry().register_adapter(solana).register_adapter(sonic)

        assert registry.get_adapter(SVMNetwork.SOLANA) is solana
        assert registry.get_adapter(SVMNetwork.SONIC) is sonic
        assert registry.get_adapter(SVMNetwork.ECLIPSE) is None
        assert len(registry) == 2
        assert SVMNetwork.SONIC in registry
        assert SVMNetwork.SOON not in registry
        assert registry.networks() == [SVMNetwork.SOLANA, SVMNetwork.SONIC]

    def test_get_all_adapters_returns_copy(self) -> None:
        adapter = FakeNetworkAdapter()
        registry = NetworkAdapterRegistry([adapter])

        adapters = registry.get_all_adapters()
        adapters.clear()

        assert registry.get_all_adapters() == {SVMNetwork.SOLANA: adapter}

    def test_reregistering_replaces_and_warns(self, caplog) -> None:
        first = FakeNetworkAdapter()
        second = FakeNetworkAdapter()
        registry = NetworkAdapterRegistry([first])

        with caplog.at_level(logging.WARNING, logger="svm_pay.adapters.registry"):
            registry.register_adapter(second)

        assert registry.get_adapter(SVMNetwork.SOLANA) is second
        assert "Replacing network adapter for solana" in caplog.text

    def test_accepts_network_value_strings(self) -> None:
        adapter = FakeNetworkAdapter("eclipse")
        registry = NetworkAdapterRegistry([adapter])
        assert registry.get_adapter(SVMNetwork.ECLIPSE) is adapter

    def test_fake_adapter_satisfies_protocol(self) -> None:
        assert isinstance(FakeNetworkAdapter(), NetworkAdapter)
