"""Event handlers that keep a running summary of rETH token events."""

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from config.defaults import IndexerConfig

logger: logging.Logger = logging.getLogger(__name__)

GLOBAL_EVENTS_SUMMARY_KEY = IndexerConfig.GLOBAL_EVENTS_SUMMARY_KEY


class HandlerSignal(Enum):
    """Tells the indexer whether to keep consuming events."""

    CONTINUE = "continue"
    STOP = "stop"


@dataclass
class LogEvent:
    """A decoded contract log as delivered to the handlers."""

    name: str
    block_number: int
    transaction_hash: str
    log_index: int
    params: dict[str, Any] = field(default_factory=dict)

    @property
    def entity_id(self) -> str:
        return f"{self.transaction_hash}{self.log_index}"


@dataclass(frozen=True)
class EventsSummary:
    id: str = GLOBAL_EVENTS_SUMMARY_KEY
    approval_count: int = 0
    transfer_count: int = 0


@dataclass(frozen=True)
class ApprovalEntity:
    id: str
    owner: str
    spender: str
    value: int
    events_summary: str = GLOBAL_EVENTS_SUMMARY_KEY


@dataclass(frozen=True)
class TransferEntity:
    id: str
    sender: str
    receiver: str
    value: int
    events_summary: str = GLOBAL_EVENTS_SUMMARY_KEY


class EntityStore:
    """In-memory entity tables keyed by entity type and id."""

    def __init__(self) -> None:
        self._tables: dict[type, dict[str, Any]] = {}

    def get(self, entity_type: type, entity_id: str) -> Optional[Any]:
        return self._tables.get(entity_type, {}).get(entity_id)

    def set(self, entity: Any) -> None:
        self._tables.setdefault(type(entity), {})[entity.id] = entity

    def all(self, entity_type: type) -> list[Any]:
        return list(self._tables.get(entity_type, {}).values())


class RunContext:
    """Per-run indexing state: first-event flag, start time and stop height."""

    def __init__(
        self,
        end_block: int = IndexerConfig.END_BLOCK,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.end_block = end_block
        self.clock = clock
        self.first_event_seen = False
        self.start_timestamp: Optional[float] = None

    def mark_event(self) -> None:
        """Records the start time when the first event arrives."""
        if self.first_event_seen:
            return
        self.first_event_seen = True
        self.start_timestamp = self.clock()
        logger.info("The first event was indexed")
        logger.info(f"Start timestamp: {int(self.start_timestamp * 1000)}")

    def should_stop(self, block_number: int) -> bool:
        return block_number > self.end_block

    def elapsed_ms(self) -> float:
        if self.start_timestamp is None:
            return 0.0
        return (self.clock() - self.start_timestamp) * 1000


def _load_summary(store: EntityStore) -> EventsSummary:
    summary = store.get(EventsSummary, GLOBAL_EVENTS_SUMMARY_KEY)
    return summary if summary is not None else EventsSummary()


def handle_approval(
    event: LogEvent, store: EntityStore, run_context: RunContext
) -> HandlerSignal:
    """Counts an Approval event and stores its row."""
    run_context.mark_event()
    if run_context.should_stop(event.block_number):
        return HandlerSignal.STOP

    summary = _load_summary(store)
    store.set(replace(summary, approval_count=summary.approval_count + 1))
    store.set(
        ApprovalEntity(
            id=event.entity_id,
            owner=event.params["owner"],
            spender=event.params["spender"],
            value=int(event.params["value"]),
        )
    )
    return HandlerSignal.CONTINUE


def handle_transfer(
    event: LogEvent, store: EntityStore, run_context: RunContext
) -> HandlerSignal:
    """Counts a Transfer event and stores its row."""
    run_context.mark_event()
    if run_context.should_stop(event.block_number):
        return HandlerSignal.STOP

    summary = _load_summary(store)
    store.set(replace(summary, transfer_count=summary.transfer_count + 1))
    store.set(
        TransferEntity(
            id=event.entity_id,
            sender=event.params["from"],
            receiver=event.params["to"],
            value=int(event.params["value"]),
        )
    )
    return HandlerSignal.CONTINUE


EVENT_HANDLERS: dict[str, Callable[[LogEvent, EntityStore, RunContext], HandlerSignal]] = {
    "Approval": handle_approval,
    "Transfer": handle_transfer,
}


class EventIndexer:
    """Feeds events to their handlers until one of them signals a stop."""

    def __init__(self, store: EntityStore, run_context: RunContext) -> None:
        self.store = store
        self.run_context = run_context
        self.stopped = False

    def process(self, events: Iterable[LogEvent]) -> int:
        """Handles events in order and returns how many were indexed."""
        if self.stopped:
            return 0

        handled = 0
        for event in events:
            handler = EVENT_HANDLERS.get(event.name)
            if handler is None:
                raise ValueError(f"No handler registered for event '{event.name}'")

            if handler(event, self.store, self.run_context) is HandlerSignal.STOP:
                self.stopped = True
                logger.info(f"We've reached block {event.block_number}")
                logger.info(f"End timestamp: {int(self.run_context.clock() * 1000)}")
                logger.info(f"Elapsed time: {self.run_context.elapsed_ms():.0f}ms")
                break
            handled += 1
        return handled
