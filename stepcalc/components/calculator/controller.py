"""
State aggregator for the calculator.

The controller is the single writer of ``InputState`` and ``OutputState``. Events are
queued by ``submit`` and drained one at a time by a consumer task, and stepper callbacks
run on the same event loop, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .events import Event, InputChanged, TriggerComputation
from .state import InputState, OutputState, UIState, merge_state
from .stepper import Stepper
from .validator import validate

logger = logging.getLogger(__name__)

Subscriber = Callable[[UIState], None]


class CalculatorController:
    """Owns calculator state, reacts to events and publishes ``UIState``."""

    def __init__(self, stepper: Stepper | None = None, initial_text: str = "0") -> None:
        self.stepper = stepper or Stepper()
        result = validate(initial_text)
        self._input = InputState(text=initial_text, error_message=result.error)
        self._output = OutputState()
        self._state = merge_state(self._input, self._output)
        self._subscribers: list[Subscriber] = []
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._consumer: asyncio.Task | None = None
        self._closed = False

    @property
    def state(self) -> UIState:
        """Latest published UI state."""
        return self._state

    @property
    def input_state(self) -> InputState:
        return self._input

    @property
    def output_state(self) -> OutputState:
        return self._output

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every published state; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def current_target(self) -> int | None:
        """Cancellation key read by stepper runs. ``None`` once the controller is closed."""
        if self._closed:
            return None
        return self._output.target

    # Event intake

    def start(self) -> None:
        """Start draining the event queue. Must be called from a running event loop."""
        if self._consumer is None or self._consumer.done():
            self._consumer = asyncio.get_running_loop().create_task(
                self._consume(), name="calculator-events"
            )

    def submit(self, event: Event) -> None:
        """Queue an event without waiting for it to be processed."""
        if self._closed:
            logger.debug("Controller closed, dropping %r", event)
            return
        self._queue.put_nowait(event)

    async def join(self) -> None:
        """Wait until every submitted event has been handled."""
        await self._queue.join()

    async def _consume(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                self.handle(event)
            except Exception:
                logger.exception("Failed handling %r", event)
            finally:
                self._queue.task_done()

    def handle(self, event: Event) -> None:
        """Process a single event immediately."""
        if self._closed:
            logger.debug("Controller closed, ignoring %r", event)
            return
        if isinstance(event, InputChanged):
            self._on_input_changed(event.text)
        elif isinstance(event, TriggerComputation):
            self._on_trigger()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    # Transitions

    def _on_input_changed(self, text: str) -> None:
        result = validate(text)
        self._input = InputState(text=text, error_message=result.error)
        self._publish()

    def _on_trigger(self) -> None:
        if self._input.error_message:
            logger.debug("Trigger ignored, input has error: %s", self._input.error_message)
            return
        result = validate(self._input.text)
        if result.value is None:
            logger.debug("Trigger ignored, unparseable input %r", self._input.text)
            return
        n = result.value
        if n == self._output.target:
            logger.debug("Trigger ignored, already computing for %d", n)
            return

        # Changing the target is what cancels the previous run
        self._output = OutputState(target=n)
        self._publish()
        self.stepper.start(n, lambda series: self._on_step(n, series), self.current_target)

    def _on_step(self, n: int, series: list[int]) -> None:
        if self._closed or self._output.target != n:
            return
        self._output = self._output.with_series(series)
        self._publish()

    def _publish(self) -> None:
        self._state = merge_state(self._input, self._output)
        for callback in list(self._subscribers):
            callback(self._state)

    async def close(self) -> None:
        """Tear down: mark every run stale, cancel pending tasks and drop subscribers."""
        if self._closed:
            return
        self._closed = True
        self._subscribers.clear()
        if self._consumer is not None:
            self._consumer.cancel()
            await asyncio.gather(self._consumer, return_exceptions=True)
            self._consumer = None
        await self.stepper.shutdown()
        logger.debug("Controller closed")
