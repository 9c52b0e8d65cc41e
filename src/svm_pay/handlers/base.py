"""Lifecycle logic shared by the transfer and transaction request handlers."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from svm_pay.adapters.base import NetworkAdapter
from svm_pay.adapters.registry import NetworkAdapterRegistry
from svm_pay.errors import (
    InvalidPaymentStateError,
    NoAdapterError,
    PaymentNotFoundError,
    SVMPayError,
    UnsupportedRequestTypeError,
)
from svm_pay.networks import SVMNetwork
from svm_pay.reference import generate_reference
from svm_pay.store import InMemoryPaymentRecordStore, PaymentRecordStore
from svm_pay.types import (
    PaymentRecord,
    PaymentRequest,
    PaymentStatus,
    RequestType,
    TransactionHandle,
)

logger = logging.getLogger(__name__)

EXPIRABLE_STATUSES = (PaymentStatus.CREATED, PaymentStatus.PENDING)


@dataclass
class PaymentStats:
    """Record counts grouped by status, request type and network."""

    total: int = 0
    by_status: dict[PaymentStatus, int] = field(default_factory=dict)
    by_type: dict[RequestType, int] = field(default_factory=dict)
    by_network: dict[SVMNetwork, int] = field(default_factory=dict)


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class BaseRequestHandler:
    """Drives a payment record through CREATED, PENDING and a terminal state.

    Subclasses bind a request type and the adapter call that constructs its
    transaction. Adapter failures never propagate: they move the record to
    FAILED and are recorded in ``record.error``. Configuration problems
    (unregistered network, unknown payment id) are raised.
    """

    request_type: RequestType

    def __init__(
        self,
        registry: NetworkAdapterRegistry,
        store: Optional[PaymentRecordStore] = None,
    ) -> None:
        """Create a request handler.

        Args:
            registry: Adapters to dispatch to, shared across handlers.
            store: Record storage. Defaults to a new in-memory store.
        """
        self._registry = registry
        self._store = store if store is not None else InMemoryPaymentRecordStore()

    @property
    def registry(self) -> NetworkAdapterRegistry:
        return self._registry

    @property
    def store(self) -> PaymentRecordStore:
        return self._store

    # ========================================================================
    # Helpers
    # ========================================================================

    def _resolve_adapter(self, network: SVMNetwork) -> NetworkAdapter:
        adapter = self._registry.get_adapter(network)
        if adapter is None:
            raise NoAdapterError(network)
        return adapter

    async def _load(self, payment_id: str) -> PaymentRecord:
        record = await self._store.get(payment_id)
        if record is None:
            raise PaymentNotFoundError(payment_id)
        return record

    async def _fail(self, record: PaymentRecord, exc: Exception) -> PaymentRecord:
        message = _error_message(exc)
        logger.warning("Payment %s failed: %s", record.id, message)
        record.transition(PaymentStatus.FAILED, error=message)
        await self._store.put(record)
        return record

    async def _construct(
        self, adapter: NetworkAdapter, request: PaymentRequest
    ) -> TransactionHandle:
        raise NotImplementedError

    # ========================================================================
    # Lifecycle
    # ========================================================================

    async def process_request(self, request: PaymentRequest) -> PaymentRecord:
        """Create a payment record and build its transaction.

        A fresh reference becomes the record id. If the request carries no
        references, the reference is also embedded in the stored request so
        the transaction can be found on-chain.

        Args:
            request: Request of this handler's type.

        Returns:
            Record in PENDING on success, FAILED if the adapter raised.

        Raises:
            UnsupportedRequestTypeError: If the request is of another type.
            NoAdapterError: If no adapter is registered for the network.
        """
        if request.type != self.request_type:
            raise UnsupportedRequestTypeError(
                f"{type(self).__name__} cannot process {request.type} requests"
            )
        adapter = self._resolve_adapter(request.network)

        reference = generate_reference()
        if not request.references:
            request = request.model_copy(update={"references": [reference]})

        record = PaymentRecord(id=reference, request=request)
        await self._store.put(record)
        logger.info(
            "Created %s payment %s on %s",
            request.type,
            record.id,
            request.network.value,
        )

        try:
            transaction = await self._construct(adapter, request)
        except Exception as e:
            return await self._fail(record, e)

        record.transition(PaymentStatus.PENDING, transaction=transaction)
        await self._store.put(record)
        logger.info("Payment %s is pending signature", record.id)
        return record

    async def submit_transaction(
        self, payment_id: str, transaction: TransactionHandle, signature: str
    ) -> PaymentRecord:
        """Broadcast the signed transaction for a pending payment.

        Args:
            payment_id: Id returned by :meth:`process_request`.
            transaction: Transaction that was signed.
            signature: Wallet signature, or the complete signed transaction.

        Returns:
            Record in CONFIRMED on success, FAILED if the adapter raised.

        Raises:
            PaymentNotFoundError: If the payment id is unknown.
            InvalidPaymentStateError: If the payment is not PENDING.
            NoAdapterError: If no adapter is registered for the network.
        """
        record = await self._load(payment_id)
        if record.status != PaymentStatus.PENDING:
            raise InvalidPaymentStateError(
                f"Payment {payment_id} is {record.status.value}, expected pending"
            )
        adapter = self._resolve_adapter(record.request.network)

        try:
            tx_signature = await adapter.submit_transaction(transaction, signature)
        except Exception as e:
            return await self._fail(record, e)

        record.transition(PaymentStatus.CONFIRMED, signature=tx_signature)
        await self._store.put(record)
        logger.info("Payment %s submitted with signature %s", record.id, tx_signature)
        return record

    async def check_status(self, payment_id: str) -> PaymentRecord:
        """Reconcile a payment with the network, dispatching on its request type."""
        record = await self._load(payment_id)
        return await self.check_status_by_type(
            payment_id, RequestType(record.request.type)
        )

    async def check_status_by_type(
        self, payment_id: str, request_type: RequestType
    ) -> PaymentRecord:
        """Reconcile a payment of a known request type with the network.

        The stored status is overwritten with what the adapter reports, so a
        record can move from PENDING to CONFIRMED or FAILED here. Records
        without a signature are returned unchanged.

        Raises:
            PaymentNotFoundError: If the payment id is unknown.
            UnsupportedRequestTypeError: If the record is of another type.
            NoAdapterError: If no adapter is registered for the network.
        """
        record = await self._load(payment_id)
        if record.request.type != request_type:
            raise UnsupportedRequestTypeError(
                f"Payment {payment_id} is a {record.request.type} request, "
                f"not {RequestType(request_type).value}"
            )

        if request_type == RequestType.TRANSACTION and not record.request.link.startswith(
            ("http://", "https://")
        ):
            return await self._fail(record, ValueError("Invalid transaction link"))

        adapter = self._resolve_adapter(record.request.network)
        if not record.signature:
            return record

        try:
            status = await adapter.check_transaction_status(record.signature)
        except Exception as e:
            return await self._fail(record, e)

        if status != record.status:
            logger.info(
                "Payment %s moved from %s to %s",
                record.id,
                record.status.value,
                status.value,
            )
        record.transition(status)
        await self._store.put(record)
        return record

    async def mark_expired(self, payment_id: str) -> PaymentRecord:
        """Apply a caller-side timeout to a payment that has not completed.

        Raises:
            PaymentNotFoundError: If the payment id is unknown.
            InvalidPaymentStateError: If the payment already reached a terminal state.
        """
        record = await self._load(payment_id)
        if record.status not in EXPIRABLE_STATUSES:
            raise InvalidPaymentStateError(
                f"Payment {payment_id} is {record.status.value} and cannot expire"
            )
        record.transition(PaymentStatus.EXPIRED)
        await self._store.put(record)
        logger.info("Payment %s expired", record.id)
        return record

    # ========================================================================
    # Queries
    # ========================================================================

    async def get_payment(self, payment_id: str) -> Optional[PaymentRecord]:
        return await self._store.get(payment_id)

    async def get_payments_by_type(self, request_type: RequestType) -> list[PaymentRecord]:
        return [
            record
            for record in await self._store.records()
            if record.request.type == request_type
        ]

    async def bulk_check_status(self, payment_ids: list[str]) -> list[PaymentRecord]:
        """Check several payments, skipping ids that cannot be checked."""
        results = []
        for payment_id in payment_ids:
            try:
                results.append(await self.check_status(payment_id))
            except SVMPayError as e:
                logger.error("Error checking status for payment %s: %s", payment_id, e)
        return results

    async def get_payment_stats(self) -> PaymentStats:
        records = await self._store.records()
        by_status = Counter(record.status for record in records)
        by_type = Counter(RequestType(record.request.type) for record in records)
        by_network = Counter(record.request.network for record in records)
        return PaymentStats(
            total=len(records),
            by_status={status: by_status[status] for status in PaymentStatus},
            by_type={request_type: by_type[request_type] for request_type in RequestType},
            by_network={network: by_network[network] for network in SVMNetwork},
        )
