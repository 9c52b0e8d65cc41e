"""Request handlers driving payment records through their lifecycle."""

from .base import BaseRequestHandler, PaymentStats
from .transaction import TransactionRequestHandler
from .transfer import TransferRequestHandler

__all__ = [
    "BaseRequestHandler",
    "PaymentStats",
    "TransactionRequestHandler",
    "TransferRequestHandler",
]
