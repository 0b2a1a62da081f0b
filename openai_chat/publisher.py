"""Single-value push adapter over an async call."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ChatCompletionPublisher.subscribe().

    cancel() only stops delivery. The underlying task keeps running until the
    exchange finishes.
    """

    def __init__(self, task: "asyncio.Task[Any]"):
        self._task = task
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        """True once the underlying call has settled."""
        return self._task.done()

    def cancel(self) -> None:
        self._cancelled = True

    async def wait(self) -> None:
        """Wait for the underlying call to settle, whatever its outcome."""
        await asyncio.wait({self._task})


class ChatCompletionPublisher(Generic[T]):
    """Cold publisher that emits exactly one value or one error.

    Each subscribe() starts an independent call on the running event loop.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]):
        self._factory = factory

    def subscribe(
        self,
        on_next: Callable[[T], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_completed: Optional[Callable[[], None]] = None
    ) -> Subscription:
        """Start the call and deliver its result to the callbacks.

        Must be called from within a running event loop; otherwise raises
        RuntimeError before the call is created.

        Args:
            on_next: Receives the single value
            on_error: Receives the failure; no value is delivered in that case
            on_completed: Called after on_next

        Returns:
            Subscription used to stop delivery
        """
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._factory())
        subscription = Subscription(task)

        def deliver(finished: "asyncio.Task[T]") -> None:
            if finished.cancelled():
                error: Optional[BaseException] = asyncio.CancelledError()
            else:
                error = finished.exception()
            if subscription.cancelled:
                logger.debug("Subscription cancelled, dropping result")
                return
            if error is not None:
                if on_error is not None:
                    on_error(error)
                else:
                    logger.debug(f"Unhandled publisher error: {error!r}")
                return
            on_next(finished.result())
            if on_completed is not None:
                on_completed()

        task.add_done_callback(deliver)
        return subscription

    def __await__(self) -> Generator[Any, None, T]:
        return self._factory().__await__()
