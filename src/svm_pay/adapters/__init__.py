"""Network adapters and the registry that selects them."""

from .base import NetworkAdapter
from .registry import NetworkAdapterRegistry
from .rpc import (
    RpcNetworkAdapter,
    TransferBuilder,
    attach_signature,
    create_default_registry,
    decode_transaction,
)

__all__ = [
    "NetworkAdapter",
    "NetworkAdapterRegistry",
    "RpcNetworkAdapter",
    "TransferBuilder",
    "attach_signature",
    "create_default_registry",
    "decode_transaction",
]
