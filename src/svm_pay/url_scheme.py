"""SVM-Pay URL scheme.

Payment requests travel as URLs of the form::

    <network>:<recipient>?amount=1.5&spl-token=...&label=...&reference=...

where ``<network>`` is one of the supported SVM network prefixes. The
presence of a ``link`` parameter marks a transaction request; every other
URL is a transfer request.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlsplit

from pydantic import ValidationError

from svm_pay.errors import (
    InvalidPaymentUrlError,
    MissingRecipientError,
    UnsupportedNetworkError,
)
from svm_pay.networks import SVMNetwork, network_from_prefix
from svm_pay.types import (
    BasePaymentRequest,
    PaymentRequest,
    RequestType,
    TransactionRequest,
    TransferRequest,
)

logger = logging.getLogger(__name__)

PARAM_AMOUNT = "amount"
PARAM_SPL_TOKEN = "spl-token"
PARAM_LABEL = "label"
PARAM_MESSAGE = "message"
PARAM_MEMO = "memo"
PARAM_REFERENCE = "reference"
PARAM_LINK = "link"


def _split(url: str):
    if not isinstance(url, str):
        raise InvalidPaymentUrlError(
            f"Invalid payment URL: expected a string, got {type(url).__name__}"
        )
    try:
        return urlsplit(url.strip())
    except ValueError as e:
        raise InvalidPaymentUrlError(f"Invalid payment URL: {e}") from e


def _recipient(netloc: str, path: str) -> str:
    # "solana://ADDR" puts the address in the authority component
    recipient = netloc or (path[1:] if path.startswith("/") else path)
    return unquote(recipient)


def parse_url(url: str) -> PaymentRequest:
    """Parse a payment URL into a request.

    Args:
        url: Payment URL (e.g. "solana:ABC123?amount=1.5&label=Coffee").

    Returns:
        A TransferRequest, or a TransactionRequest when the URL has a ``link``.

    Raises:
        UnsupportedNetworkError: If the network prefix is unknown or missing.
        MissingRecipientError: If the URL has no recipient.
        InvalidPaymentUrlError: If the URL is otherwise malformed.
    """
    parts = _split(url)

    network = network_from_prefix(parts.scheme)
    if network is None:
        raise UnsupportedNetworkError(parts.scheme)

    recipient = _recipient(parts.netloc, parts.path)
    if not recipient.strip():
        raise MissingRecipientError()

    params: dict[str, str] = {}
    references: list[str] = []
    try:
        pairs = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError as e:
        raise InvalidPaymentUrlError(f"Invalid payment URL: {e}") from e

    for key, value in pairs:
        if key == PARAM_REFERENCE:
            references.append(value)
        else:
            # Repeated keys other than reference keep their first value
            params.setdefault(key, value)

    common = {
        "network": network,
        "recipient": recipient,
        "label": params.get(PARAM_LABEL),
        "message": params.get(PARAM_MESSAGE),
        "memo": params.get(PARAM_MEMO),
        "references": references,
    }

    try:
        if PARAM_LINK in params:
            return TransactionRequest(link=params[PARAM_LINK], **common)
        return TransferRequest(
            amount=params.get(PARAM_AMOUNT),
            spl_token=params.get(PARAM_SPL_TOKEN),
            **common,
        )
    except ValidationError as e:
        raise InvalidPaymentUrlError(f"Invalid payment URL: {e}") from e


def _common_params(request: BasePaymentRequest) -> list[tuple[str, str]]:
    params = []
    if request.label is not None:
        params.append((PARAM_LABEL, request.label))
    if request.message is not None:
        params.append((PARAM_MESSAGE, request.message))
    if request.memo is not None:
        params.append((PARAM_MEMO, request.memo))
    for reference in request.references:
        params.append((PARAM_REFERENCE, reference))
    return params


def _render(network: SVMNetwork, recipient: str, params: list[tuple[str, str]]) -> str:
    url = f"{network.value}:{quote(recipient, safe='')}"
    if params:
        url += "?" + urlencode(params, quote_via=quote)
    return url


def create_transfer_url(request: TransferRequest) -> str:
    """Render a transfer request as a payment URL.

    Args:
        request: Transfer request to render.

    Returns:
        Payment URL string. Absent optional fields are omitted.
    """
    params: list[tuple[str, str]] = []
    if request.amount is not None:
        params.append((PARAM_AMOUNT, request.amount))
    if request.spl_token is not None:
        params.append((PARAM_SPL_TOKEN, request.spl_token))
    params.extend(_common_params(request))
    return _render(request.network, request.recipient, params)


def create_transaction_url(request: TransactionRequest) -> str:
    """Render a transaction request as a payment URL.

    Args:
        request: Transaction request to render.

    Returns:
        Payment URL string with the ``link`` parameter first.
    """
    params = [(PARAM_LINK, request.link)]
    params.extend(_common_params(request))
    return _render(request.network, request.recipient, params)


def create_url(request: PaymentRequest) -> str:
    """Render any payment request as a payment URL."""
    if request.type == RequestType.TRANSFER:
        return create_transfer_url(request)
    if request.type == RequestType.TRANSACTION:
        return create_transaction_url(request)
    raise InvalidPaymentUrlError(f"Unsupported request type: {request.type}")


def detect_network_from_url(url: str) -> Optional[SVMNetwork]:
    """Detect the network a payment URL targets without fully parsing it.

    Returns:
        The network, or None if the URL has no supported prefix.
    """
    try:
        parts = _split(url)
    except InvalidPaymentUrlError:
        logger.debug("Could not split payment URL for network detection")
        return None
    return network_from_prefix(parts.scheme)
