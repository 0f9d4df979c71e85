"""Value objects shared by the dispatcher and the transaction sender."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class SendStatus(Enum):
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class TransferRequest:
    to_address: str
    amount: str
    gas_price: str
    nonce: int


@dataclass(frozen=True)
class LoopPlan:
    """Fixed before dispatch starts: every recipient, `loop_count` times over."""

    recipients: Tuple[str, ...]
    loop_count: int

    def __post_init__(self) -> None:
        if not self.recipients:
            raise ValueError("Recipient list must not be empty.")
        if self.loop_count < 1:
            raise ValueError("Loop count must be at least 1.")

    @property
    def total_transactions(self) -> int:
        return self.loop_count * len(self.recipients)


class NonceCounter:
    """Local next-nonce authority for the run; only ever moves forward by one."""

    def __init__(self, initial: int) -> None:
        self._value = initial

    @property
    def value(self) -> int:
        return self._value

    def advance(self) -> int:
        self._value += 1
        return self._value


@dataclass
class BatchReport:
    start_nonce: int
    attempts: List[Tuple[TransferRequest, SendStatus]] = field(default_factory=list)

    def record(self, request: TransferRequest, status: SendStatus) -> None:
        self.attempts.append((request, status))

    def count(self, status: SendStatus) -> int:
        return sum(1 for _, item in self.attempts if item == status)

    @property
    def nonces(self) -> List[int]:
        return [request.nonce for request, _ in self.attempts]
