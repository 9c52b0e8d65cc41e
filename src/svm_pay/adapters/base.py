"""Network adapter protocol.

Each SVM network is served by one adapter. Adapters are selected through a
``NetworkAdapterRegistry`` so request handlers never branch on the network.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from svm_pay.networks import SVMNetwork
from svm_pay.types import (
    PaymentStatus,
    SignatureHandle,
    TransactionHandle,
    TransactionRequest,
    TransferRequest,
)


@runtime_checkable
class NetworkAdapter(Protocol):
    """Per-network capability contract.

    Implementations raise on failure; request handlers capture the error on
    the payment record.
    """

    network: SVMNetwork

    async def create_transfer_transaction(
        self, request: TransferRequest
    ) -> TransactionHandle:
        """Build an unsigned transaction satisfying a transfer request."""
        ...

    async def fetch_transaction(self, request: TransactionRequest) -> TransactionHandle:
        """Retrieve transaction bytes from ``request.link``."""
        ...

    async def submit_transaction(
        self, transaction: TransactionHandle, signature: str
    ) -> SignatureHandle:
        """Broadcast a signed transaction and return its signature."""
        ...

    async def check_transaction_status(self, signature: SignatureHandle) -> PaymentStatus:
        """Query the network for the confirmation state of a signature."""
        ...
