"""Deferred, cancellable tasks on the running event loop"""

import asyncio
import logging
from typing import Callable, Dict

from fintech_agent_api.infrastructure.observability.metrics import deferred_task_counter

logger = logging.getLogger(__name__)


class DeferredTaskScheduler:
    """
    Runs a callback once after a delay, keyed by the entity it acts on.

    Scheduling a key that is already pending replaces the earlier task.
    `cancel` is the hook explicit updates use to win over a task that has not
    fired yet. Must be driven from the event loop thread.
    """

    def __init__(self) -> None:
        self._handles: Dict[str, asyncio.TimerHandle] = {}

    def schedule(self, key: str, delay_seconds: float, callback: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        self.cancel(key)
        self._handles[key] = loop.call_later(delay_seconds, self._fire, key, callback)
        deferred_task_counter.labels(outcome="scheduled").inc()

    def _fire(self, key: str, callback: Callable[[], None]) -> None:
        self._handles.pop(key, None)
        deferred_task_counter.labels(outcome="fired").inc()
        logger.info("Deferred task fired", extra={"task_key": key})
        callback()

    def cancel(self, key: str) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        deferred_task_counter.labels(outcome="cancelled").inc()
        return True

    def is_pending(self, key: str) -> bool:
        return key in self._handles

    def shutdown(self) -> None:
        """Cancel everything still waiting; called on application shutdown"""
        for key in list(self._handles):
            self.cancel(key)
