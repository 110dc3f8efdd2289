"""Decision tracing for notification explainability.

Every coordinator decision can be recorded as a ``DecisionRecord``: which
category, which subscription, what happened and why. Tracing is opt-in
and sampled.

Critical invariants:
- Zero semantic difference when tracing is off
- Never blocks execution
- Never emits by default
"""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .categories import AlertCategory


class DecisionOutcome(Enum):
    """What a coordinator decision did at the shell."""

    PRESENTED = "presented"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class DecisionRecord:
    """A single traced decision.

    Attributes:
        category: Alert category the decision was about.
        sub_id: Subscription involved, if any.
        outcome: What happened.
        reason: Short machine-friendly reason (e.g. "no_phone").
        recipients: Profile handles the alert was presented to.
        timestamp: When the decision was made.
    """

    category: AlertCategory
    outcome: DecisionOutcome
    sub_id: int | None = None
    reason: str | None = None
    recipients: tuple[int, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now())


@dataclass
class TraceConfig:
    """Configuration for trace emission.

    Attributes:
        enabled: Master switch for tracing (default: False)
        sample_rate: Fraction of decisions to trace (0.0-1.0, default: 1.0)
    """

    enabled: bool = False
    sample_rate: float = 1.0

    def should_trace(self) -> bool:
        """Determine if this decision should be traced."""
        if not self.enabled:
            return False
        if self.sample_rate >= 1.0:
            return True
        return secrets.randbelow(1000) < int(self.sample_rate * 1000)


class TraceEmitter(ABC):
    """Abstract interface for trace emission."""

    @abstractmethod
    def emit(self, record: DecisionRecord) -> None:
        """Emit a decision record. Must be non-blocking."""


class NullEmitter(TraceEmitter):
    """No-op emitter for when tracing is disabled."""

    def emit(self, record: DecisionRecord) -> None:
        """Discard the record."""


class BufferEmitter(TraceEmitter):
    """Keeps the most recent ``max_size`` records in memory."""

    def __init__(self, max_size: int = 1000) -> None:
        self._records: deque[DecisionRecord] = deque(maxlen=max_size)

    def emit(self, record: DecisionRecord) -> None:
        self._records.append(record)

    @property
    def records(self) -> list[DecisionRecord]:
        """Buffered records, oldest first."""
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


class CallbackEmitter(TraceEmitter):
    """Emitter that calls a callback function."""

    def __init__(self, callback: Callable[[DecisionRecord], None]) -> None:
        self._callback = callback

    def emit(self, record: DecisionRecord) -> None:
        """Call the callback with the record."""
        self._callback(record)


class DecisionTracer:
    """Applies a ``TraceConfig`` in front of an emitter."""

    def __init__(
        self,
        config: TraceConfig | None = None,
        emitter: TraceEmitter | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or TraceConfig()
        self.emitter = emitter or NullEmitter()
        self._clock = clock

    def record(
        self,
        category: AlertCategory,
        outcome: DecisionOutcome,
        *,
        sub_id: int | None = None,
        reason: str | None = None,
        recipients: tuple[int, ...] = (),
    ) -> None:
        """Emit a decision record if tracing selects this decision."""
        if not self.config.should_trace():
            return
        self.emitter.emit(
            DecisionRecord(
                category=category,
                outcome=outcome,
                sub_id=sub_id,
                reason=reason,
                recipients=recipients,
                timestamp=self._clock(),
            )
        )
