"""Shared fixtures for SVM-Pay tests."""

import pytest

from svm_pay.adapters import NetworkAdapterRegistry

from .mocks import FakeNetworkAdapter, RecordingStore


@pytest.fixture
def adapter():
    return FakeNetworkAdapter()


@pytest.fixture
def registry(adapter):
    return NetworkAdapterRegistry([adapter])


@pytest.fixture
def store():
    return RecordingStore()
