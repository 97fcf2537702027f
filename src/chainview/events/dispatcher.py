"""Delivery of collapse events to the registered processors."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from chainview.events.processor import EventProcessor

if TYPE_CHECKING:
    from chainview.events.types import Event

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Delivers each event to every processor, in registration order.

    A processor that raises is logged and skipped, so a broken layout hook
    never blocks a toggle. With ``strict=True`` the first failure propagates
    and later processors are not called.
    """

    def __init__(
        self,
        processors: Iterable[EventProcessor] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._processors: tuple[EventProcessor, ...] = tuple(processors or ())
        self._strict = strict

    @property
    def active(self) -> bool:
        """Whether anyone is listening; lets callers skip building events."""
        return bool(self._processors)

    def emit(self, event: Event) -> None:
        stage = f"on {type(event).__name__}"
        for processor in self._processors:
            self._deliver(processor, lambda p=processor: p.on_event(event), stage)

    def shutdown(self) -> None:
        for processor in self._processors:
            self._deliver(processor, processor.shutdown, "during shutdown")

    def _deliver(self, processor: EventProcessor, call: Callable[[], None], stage: str) -> None:
        try:
            call()
        except Exception:
            if self._strict:
                raise
            logger.warning("Event processor %r failed %s", processor, stage, exc_info=True)
