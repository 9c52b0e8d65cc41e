"""JSON-RPC backed network adapter for SVM networks."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Awaitable, Callable, Optional

import base58
import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.signature import Signature
from solders.transaction import VersionedTransaction
from solders.transaction_status import TransactionConfirmationStatus

from svm_pay.adapters.registry import NetworkAdapterRegistry
from svm_pay.config import SVMPayConfig, get_rpc_url
from svm_pay.errors import AdapterError
from svm_pay.networks import SVMNetwork
from svm_pay.types import (
    PaymentStatus,
    SignatureHandle,
    TransactionHandle,
    TransactionRequest,
    TransferRequest,
)

logger = logging.getLogger(__name__)

# Builds the unsigned transaction for a transfer request (base64 output)
TransferBuilder = Callable[[TransferRequest], Awaitable[TransactionHandle]]

SIGNATURE_LENGTH = 64


def decode_transaction(encoded_tx: str) -> VersionedTransaction:
    """
    Decode a base64-encoded legacy or versioned transaction.

    Raises:
        AdapterError: If the input is not a serialized transaction.
    """
    try:
        tx_bytes = base64.b64decode(encoded_tx, validate=True)
        return VersionedTransaction.from_bytes(tx_bytes)
    except (binascii.Error, ValueError) as e:
        raise AdapterError(f"Invalid transaction encoding: {e}") from e


def _detached_signature(signature: str) -> Optional[Signature]:
    try:
        raw = base58.b58decode(signature)
    except ValueError:
        return None
    if len(raw) != SIGNATURE_LENGTH:
        return None
    return Signature.from_bytes(raw)


def attach_signature(transaction: TransactionHandle, signature: str) -> VersionedTransaction:
    """
    Combine wallet output with the transaction it signed.

    ``signature`` is either a detached base58 signature, which becomes the
    fee payer signature of ``transaction``, or a complete base64 signed
    transaction, which is used as-is.

    Args:
        transaction: Base64 unsigned or partially signed transaction
        signature: Detached signature or signed transaction from the wallet

    Returns:
        Transaction ready for broadcast
    """
    detached = _detached_signature(signature)
    if detached is None:
        return decode_transaction(signature)

    tx = decode_transaction(transaction)
    signatures = list(tx.signatures)
    if signatures:
        signatures[0] = detached
    else:
        signatures = [detached]
    return VersionedTransaction.populate(tx.message, signatures)


class RpcNetworkAdapter:
    """Network adapter talking to an SVM JSON-RPC endpoint.

    Transaction requests are fetched from the merchant link over HTTP.
    Transfer construction is delegated to ``transfer_builder`` since this
    package does not build on-chain transactions itself.

    Example:
        ```python
        adapter = RpcNetworkAdapter(SVMNetwork.SONIC)
        async with adapter:
            status = await adapter.check_transaction_status(signature)
        ```
    """

    def __init__(
        self,
        network: SVMNetwork,
        rpc_url: Optional[str] = None,
        *,
        transfer_builder: Optional[TransferBuilder] = None,
        rpc_client: Optional[AsyncClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        http_timeout: float = 30.0,
        commitment: str = "confirmed",
    ) -> None:
        self.network = SVMNetwork(network)
        self.rpc_url = get_rpc_url(self.network, rpc_url)
        self._transfer_builder = transfer_builder
        self._http_timeout = http_timeout
        self._commitment = commitment
        self._rpc_client = rpc_client
        self._owns_rpc_client = rpc_client is None
        self._http_client = http_client
        self._owns_http_client = http_client is None

    def _get_rpc_client(self) -> AsyncClient:
        if self._rpc_client is None:
            self._rpc_client = AsyncClient(self.rpc_url, commitment=self._commitment)
        return self._rpc_client

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._http_timeout, follow_redirects=True
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the clients this adapter created."""
        if self._owns_rpc_client and self._rpc_client is not None:
            await self._rpc_client.close()
            self._rpc_client = None
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> RpcNetworkAdapter:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def create_transfer_transaction(
        self, request: TransferRequest
    ) -> TransactionHandle:
        if self._transfer_builder is None:
            raise AdapterError(
                f"No transfer builder configured for network: {self.network.value}"
            )
        return await self._transfer_builder(request)

    async def fetch_transaction(self, request: TransactionRequest) -> TransactionHandle:
        """Fetch the transaction a merchant endpoint built for ``request``.

        The endpoint must answer with JSON ``{"transaction": "<base64>"}``.
        """
        logger.debug("Fetching %s transaction from %s", self.network.value, request.link)
        try:
            response = await self._get_http_client().get(
                request.link, headers={"Accept": "application/json"}
            )
        except httpx.HTTPError as e:
            raise AdapterError(f"Failed to fetch transaction: {e}") from e

        if response.status_code >= 400:
            raise AdapterError(
                f"Transaction endpoint responded with {response.status_code}: {response.text}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AdapterError(
                f"Failed to parse JSON from transaction endpoint at {request.link}"
            ) from e

        transaction = body.get("transaction") if isinstance(body, dict) else None
        if not isinstance(transaction, str) or not transaction:
            raise AdapterError("Transaction endpoint response is missing 'transaction'")

        decode_transaction(transaction)
        return transaction

    async def submit_transaction(
        self, transaction: TransactionHandle, signature: str
    ) -> SignatureHandle:
        signed = attach_signature(transaction, signature)
        opts = TxOpts(
            skip_preflight=False,
            preflight_commitment=self._commitment,
            max_retries=3,
        )
        try:
            response = await self._get_rpc_client().send_raw_transaction(
                bytes(signed), opts=opts
            )
        except (RPCException, SolanaRpcException) as e:
            raise AdapterError(f"Failed to submit transaction: {e}") from e

        tx_signature = str(response.value)
        logger.info("Submitted %s transaction %s", self.network.value, tx_signature)
        return tx_signature

    async def check_transaction_status(self, signature: SignatureHandle) -> PaymentStatus:
        try:
            sig = Signature.from_string(signature)
        except ValueError as e:
            raise AdapterError(f"Invalid transaction signature: {signature}") from e

        try:
            response = await self._get_rpc_client().get_signature_statuses(
                [sig], search_transaction_history=True
            )
        except (RPCException, SolanaRpcException) as e:
            raise AdapterError(f"Failed to check transaction status: {e}") from e

        status = response.value[0] if response.value else None
        if status is None or status.err is not None:
            return PaymentStatus.FAILED

        if status.confirmation_status in (
            TransactionConfirmationStatus.Confirmed,
            TransactionConfirmationStatus.Finalized,
        ):
            return PaymentStatus.CONFIRMED
        return PaymentStatus.PENDING


def create_default_registry(
    config: Optional[SVMPayConfig] = None,
    *,
    transfer_builder: Optional[TransferBuilder] = None,
) -> NetworkAdapterRegistry:
    """Register an :class:`RpcNetworkAdapter` for every supported network.

    Args:
        config: Adapter configuration. Defaults to :class:`SVMPayConfig`.
        transfer_builder: Optional builder shared by all adapters.

    Returns:
        Populated registry.
    """
    config = config or SVMPayConfig()
    registry = NetworkAdapterRegistry()
    for network in SVMNetwork:
        registry.register_adapter(
            RpcNetworkAdapter(
                network,
                config.rpc_url(network),
                transfer_builder=transfer_builder,
                http_timeout=config.http_timeout,
                commitment=config.commitment,
            )
        )
    return registry
