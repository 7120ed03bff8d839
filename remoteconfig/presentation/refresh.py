"""
Refresh Controller

The user-facing "refresh" trigger. Owns the refresh tasks it starts,
exposes a busy flag for the loading indicator, and collapses repeated
triggers into the fetch already in flight.
"""

import asyncio
from collections.abc import Callable

from remoteconfig.common.logging_setup import LogContext, get_service_logger
from remoteconfig.services.config.service import FetchResult, RemoteConfigService

logger = get_service_logger("refresh")

BusyListener = Callable[[bool], None]
ResultListener = Callable[[FetchResult], None]


class RefreshController:
    """
    Single-flight refresh with a busy signal.

    busy turns True synchronously inside request_refresh() and back to
    False exactly once when that fetch settles, whether it succeeded,
    failed, raised or was cancelled.
    """

    def __init__(self, service: RemoteConfigService):
        self.service = service
        self._busy = False
        self._current: asyncio.Task | None = None
        self._periodic_task: asyncio.Task | None = None
        self._busy_listeners: list[BusyListener] = []
        self._result_listeners: list[ResultListener] = []
        self._closed = False
        self.last_result: FetchResult | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def closed(self) -> bool:
        return self._closed

    def on_busy_changed(self, listener: BusyListener) -> None:
        self._busy_listeners.append(listener)

    def on_result(self, listener: ResultListener) -> None:
        self._result_listeners.append(listener)

    def request_refresh(self, source: str = "user") -> asyncio.Task:
        """
        Trigger a fetch-and-activate, or join the one in flight.

        Must be called from the event loop thread.

        Returns:
            The task settling with the FetchResult
        """
        if self._closed:
            raise RuntimeError("RefreshController is closed")

        if self._current is not None and not self._current.done():
            logger.debug(f"Refresh already in flight, coalescing ({source})")
            return self._current

        self._set_busy(True)
        task = asyncio.create_task(self._run(source))
        # _run never starts if the task is cancelled before its first step
        task.add_done_callback(self._on_task_done)
        self._current = task
        return task

    async def refresh(self, source: str = "user") -> FetchResult:
        """Trigger a refresh and wait for its outcome"""
        return await self.request_refresh(source)

    def start_periodic(self, interval_s: float) -> None:
        """Refresh every interval_s seconds until close()"""
        if interval_s <= 0 or self._periodic_task is not None:
            return
        self._periodic_task = asyncio.create_task(self._periodic_loop(interval_s))

    async def close(self) -> None:
        """Cancel owned tasks and detach listeners"""
        self._closed = True
        self._busy_listeners.clear()
        self._result_listeners.clear()

        for task in (self._periodic_task, self._current):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        self._periodic_task = None
        self._current = None
        self._set_busy(False)

    async def _run(self, source: str) -> FetchResult:
        try:
            with LogContext(refresh_source=source):
                logger.info(f"Refreshing Remote Config ({source})")
                result = await self.service.fetch_and_activate()
            self.last_result = result
            logger.info(
                f"Refresh result: activated={result.activated} ok={result.ok}",
                extra={"activated": result.activated, "ok": result.ok},
            )
            for listener in list(self._result_listeners):
                listener(result)
            return result
        finally:
            if asyncio.current_task() is self._current:
                self._set_busy(False)

    async def _periodic_loop(self, interval_s: float) -> None:
        """Periodic app-triggered refresh loop"""
        while not self._closed:
            await asyncio.sleep(interval_s)
            try:
                await self.request_refresh(source="periodic")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error in periodic refresh: {e}")

    def _on_task_done(self, task: asyncio.Task) -> None:
        # A newer refresh may already own the busy flag
        if self._current is task or self._current is None:
            self._set_busy(False)

    def _set_busy(self, busy: bool) -> None:
        if self._busy == busy:
            return
        self._busy = busy
        for listener in list(self._busy_listeners):
            try:
                listener(busy)
            except Exception as e:
                logger.error(f"Busy listener failed: {e}", exc_info=True)
