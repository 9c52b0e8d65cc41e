"""Mock implementations for testing."""

from unittest.mock import AsyncMock

from svm_pay.networks import SVMNetwork
from svm_pay.store import InMemoryPaymentRecordStore
from svm_pay.types import PaymentStatus

FAKE_TRANSFER_TX = "dHJhbnNmZXItdHg="
FAKE_FETCHED_TX = "ZmV0Y2hlZC10eA=="
FAKE_SIGNATURE = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"


class FakeNetworkAdapter:
    """Adapter whose operations are AsyncMocks with successful defaults."""

    def __init__(self, network=SVMNetwork.SOLANA):
        self.network = network
        self.create_transfer_transaction = AsyncMock(return_value=FAKE_TRANSFER_TX)
        self.fetch_transaction = AsyncMock(return_value=FAKE_FETCHED_TX)
        self.submit_transaction = AsyncMock(return_value=FAKE_SIGNATURE)
        self.check_transaction_status = AsyncMock(return_value=PaymentStatus.CONFIRMED)


class RecordingStore(InMemoryPaymentRecordStore):
    """In-memory store that remembers the status of every write."""

    def __init__(self):
        super().__init__()
        self.writes = []

    async def put(self, record):
        self.writes.append((record.id, record.status))
        await super().put(record)


__all__ = [
    "FAKE_FETCHED_TX",
    "FAKE_SIGNATURE",
    "FAKE_TRANSFER_TX",
    "FakeNetworkAdapter",
    "RecordingStore",
]
