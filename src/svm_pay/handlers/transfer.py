"""Handler for transfer requests.

Transfer requests carry everything needed to build the transaction, so the
adapter constructs it locally.
"""

from svm_pay.adapters.base import NetworkAdapter
from svm_pay.handlers.base import BaseRequestHandler
from svm_pay.types import RequestType, TransactionHandle, TransferRequest


class TransferRequestHandler(BaseRequestHandler):
    """Processes :class:`TransferRequest` payments."""

    request_type = RequestType.TRANSFER

    async def _construct(
        self, adapter: NetworkAdapter, request: TransferRequest
    ) -> TransactionHandle:
        return await adapter.create_transfer_transaction(request)
