"""Request and record models for the SVM-Pay protocol."""

from __future__ import annotations

import re
import time
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from svm_pay.networks import SVMNetwork
from svm_pay.reference import validate_reference

# Serialized transaction as produced by an adapter (base64)
TransactionHandle = str

# Confirmable transaction signature returned by an adapter (base58)
SignatureHandle = str

MAX_LABEL_LENGTH = 200
MAX_MESSAGE_LENGTH = 500
# Solana memo program limit
MAX_MEMO_LENGTH = 566

_AMOUNT_PATTERN = re.compile(r"[0-9]+(\.[0-9]+)?")


class RequestType(str, Enum):
    TRANSFER = "transfer"
    TRANSACTION = "transaction"


class PaymentStatus(str, Enum):
    CREATED = "created"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    EXPIRED = "expired"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class BasePaymentRequest(BaseModel):
    """Fields shared by every payment request variant."""

    network: SVMNetwork
    recipient: str
    label: Optional[str] = Field(default=None, max_length=MAX_LABEL_LENGTH)
    message: Optional[str] = Field(default=None, max_length=MAX_MESSAGE_LENGTH)
    memo: Optional[str] = Field(default=None, max_length=MAX_MEMO_LENGTH)
    references: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("recipient")
    def validate_recipient(cls, v):
        if not v or not v.strip():
            raise ValueError("recipient must not be empty")
        return v

    @field_validator("references")
    def validate_references(cls, v):
        for reference in v:
            if not validate_reference(reference):
                raise ValueError(
                    f"reference must be a base58-encoded 32-byte value: {reference!r}"
                )
        return v


class TransferRequest(BasePaymentRequest):
    """Self-describing request for a plain SOL or SPL token transfer."""

    type: Literal["transfer"] = "transfer"
    amount: Optional[str] = None
    spl_token: Optional[str] = None

    @field_validator("amount")
    def validate_amount(cls, v):
        if v is None:
            return v
        if not _AMOUNT_PATTERN.fullmatch(v):
            raise ValueError("amount must be a plain decimal number such as 1.5")
        if Decimal(v) <= 0:
            raise ValueError("amount must be a positive number")
        return v


class TransactionRequest(BasePaymentRequest):
    """Request whose transaction is fetched from a merchant-supplied link."""

    type: Literal["transaction"] = "transaction"
    link: str = Field(min_length=1)


PaymentRequest = Annotated[
    Union[TransferRequest, TransactionRequest],
    Field(discriminator="type"),
]


class PaymentRecord(BaseModel):
    """Lifecycle state of a single payment attempt."""

    id: str
    request: PaymentRequest
    status: PaymentStatus = PaymentStatus.CREATED
    transaction: Optional[str] = None
    signature: Optional[str] = None
    error: Optional[str] = None
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def touch(self, timestamp: Optional[int] = None) -> None:
        """Advance ``updated_at``, never moving it backwards."""
        timestamp = now_ms() if timestamp is None else timestamp
        self.updated_at = max(self.updated_at, timestamp)

    def transition(
        self,
        status: PaymentStatus,
        *,
        transaction: Optional[str] = None,
        signature: Optional[str] = None,
        error: Optional[str] = None,
    ) -> None:
        """Move the record to ``status`` and refresh its timestamp."""
        self.status = status
        if transaction is not None:
            self.transaction = transaction
        if signature is not None:
            self.signature = signature
        if error is not None:
            self.error = error
        self.touch()

    @property
    def is_terminal(self) -> bool:
        return self.status in (
            PaymentStatus.CONFIRMED,
            PaymentStatus.FAILED,
            PaymentStatus.EXPIRED,
        )
