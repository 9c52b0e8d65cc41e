"""Handler for transaction requests.

The transaction is built by the merchant endpoint named in ``link``, which
lets it compute totals or compose several instructions server-side.
"""

from svm_pay.adapters.base import NetworkAdapter
from svm_pay.handlers.base import BaseRequestHandler
from svm_pay.types import RequestType, TransactionHandle, TransactionRequest


class TransactionRequestHandler(BaseRequestHandler):
    """Processes :class:`TransactionRequest` payments."""

    request_type = RequestType.TRANSACTION

    async def _construct(
        self, adapter: NetworkAdapter, request: TransactionRequest
    ) -> TransactionHandle:
        return await adapter.fetch_transaction(request)
