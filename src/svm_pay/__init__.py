"""
SVM-Pay: payment requests for Solana-compatible networks.

The package re-exports the pieces most integrators need so they can
``from svm_pay import ...`` without navigating the subpackages.
"""

from .adapters import (
    NetworkAdapter,
    NetworkAdapterRegistry,
    RpcNetworkAdapter,
    create_default_registry,
)
from .config import SVMPayConfig, get_rpc_url, load_config
from .errors import (
    AdapterError,
    InvalidPaymentStateError,
    InvalidPaymentUrlError,
    MissingRecipientError,
    NoAdapterError,
    PaymentNotFoundError,
    SVMPayError,
    UnsupportedNetworkError,
    UnsupportedRequestTypeError,
)
from .handlers import PaymentStats, TransactionRequestHandler, TransferRequestHandler
from .networks import SVMNetwork
from .reference import (
    generate_deterministic_reference,
    generate_reference,
    validate_reference,
)
from .store import InMemoryPaymentRecordStore, PaymentRecordStore
from .types import (
    PaymentRecord,
    PaymentRequest,
    PaymentStatus,
    RequestType,
    TransactionRequest,
    TransferRequest,
)
from .url_scheme import (
    create_transaction_url,
    create_transfer_url,
    create_url,
    detect_network_from_url,
    parse_url,
)

__version__ = "0.1.0"

__all__ = [
    # Networks & types
    "SVMNetwork",
    "RequestType",
    "PaymentStatus",
    "PaymentRequest",
    "TransferRequest",
    "TransactionRequest",
    "PaymentRecord",
    # Errors
    "SVMPayError",
    "InvalidPaymentUrlError",
    "UnsupportedNetworkError",
    "MissingRecipientError",
    "NoAdapterError",
    "PaymentNotFoundError",
    "InvalidPaymentStateError",
    "UnsupportedRequestTypeError",
    "AdapterError",
    # References
    "generate_reference",
    "generate_deterministic_reference",
    "validate_reference",
    # URL scheme
    "parse_url",
    "create_url",
    "create_transfer_url",
    "create_transaction_url",
    "detect_network_from_url",
    # Adapters
    "NetworkAdapter",
    "NetworkAdapterRegistry",
    "RpcNetworkAdapter",
    "create_default_registry",
    # Storage
    "PaymentRecordStore",
    "InMemoryPaymentRecordStore",
    # Handlers
    "TransferRequestHandler",
    "TransactionRequestHandler",
    "PaymentStats",
    # Config
    "SVMPayConfig",
    "get_rpc_url",
    "load_config",
]
