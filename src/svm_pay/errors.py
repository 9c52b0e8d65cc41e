"""Exception types raised by the SVM-Pay core.

Only codec and configuration problems are raised. Failures reported by a
network adapter while a payment is in flight are captured on the
``PaymentRecord`` instead.
"""


class SVMPayError(Exception):
    """Base class for SVM-Pay errors."""

    pass


class InvalidPaymentUrlError(SVMPayError, ValueError):
    """Raised when a payment URL cannot be parsed into a request."""

    pass


class UnsupportedNetworkError(InvalidPaymentUrlError):
    """Raised when a payment URL uses an unknown or missing network prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"Unsupported network: {prefix or '<missing>'}")


class MissingRecipientError(InvalidPaymentUrlError):
    """Raised when a payment URL has no recipient address."""

    def __init__(self):
        super().__init__("Missing recipient")


class NoAdapterError(SVMPayError, LookupError):
    """Raised when no network adapter is registered for a network."""

    def __init__(self, network):
        self.network = network
        value = getattr(network, "value", network)
        super().__init__(f"No adapter available for network: {value}")


class PaymentNotFoundError(SVMPayError, KeyError):
    """Raised when a payment id has no stored record."""

    def __init__(self, payment_id: str):
        self.payment_id = payment_id
        super().__init__(payment_id)

    def __str__(self) -> str:
        return f"Payment record not found: {self.payment_id}"


class InvalidPaymentStateError(SVMPayError):
    """Raised when an operation is not allowed from the record's current status."""

    pass


class UnsupportedRequestTypeError(SVMPayError, TypeError):
    """Raised when a handler receives a request variant it does not process."""

    pass


class AdapterError(SVMPayError):
    """Raised by network adapters when a network operation fails."""

    pass
