"""Storage interface for payment records.

The core keeps records only for the lifetime of the process. Durable storage
is provided by implementing :class:`PaymentRecordStore`.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from svm_pay.types import PaymentRecord


@runtime_checkable
class PaymentRecordStore(Protocol):
    """Keyed storage for payment records."""

    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        """Return the record for ``payment_id``, or None if unknown."""
        ...

    async def put(self, record: PaymentRecord) -> None:
        """Insert or replace the record keyed by ``record.id``."""
        ...

    async def records(self) -> list[PaymentRecord]:
        """Return every stored record."""
        ...


class InMemoryPaymentRecordStore:
    """Process-local store.

    Records are copied on the way in and on the way out so callers holding a
    returned record cannot change stored state by mutating it.
    """

    def __init__(self) -> None:
        self._records: dict[str, PaymentRecord] = {}

    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        record = self._records.get(payment_id)
        return record.model_copy(deep=True) if record is not None else None

    async def put(self, record: PaymentRecord) -> None:
        self._records[record.id] = record.model_copy(deep=True)

    async def records(self) -> list[PaymentRecord]:
        return [record.model_copy(deep=True) for record in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)
