import asyncio
from typing import Any, Callable, Optional

from loguru import logger as log


class Debouncer:
    """
    Run `callback` once edits have been quiet for `delay` seconds.

    Every `trigger` restarts the window and replaces the pending arguments, so
    at most one call is pending. Outside a running event loop nothing is
    scheduled; the pending call waits for `flush`.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[tuple] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self, *args: Any) -> None:
        self._cancel_timer()
        self._pending = args

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.debug("No running event loop, debounced call waits for flush")
            return

        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        self._cancel_timer()
        self._pending = None

    def flush(self) -> bool:
        """Run the pending call now. Returns False if nothing was pending."""
        if self._pending is None:
            return False
        self._cancel_timer()
        self._fire()
        return True

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        args, self._pending = self._pending, None
        if args is not None:
            self.callback(*args)
