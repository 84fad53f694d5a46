"""
Duplicate-join guard.

In-memory registry mapping a meeting's chat thread id to the call id the
bot currently holds in that meeting. Lives for the lifetime of the
process only and knows nothing about joins made by other processes.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class JoinGuard:
    """
    Thread-safe threadId -> callId registry.

    Entries are added only after Graph has created the call and removed
    only after a hangup succeeds (or the call is reported gone), so a
    failed request never leaves the registry out of step with Graph.
    """

    def __init__(self) -> None:
        self._calls_by_thread: dict[str, str] = {}
        self._lock = threading.Lock()

    def check(self, thread_id: str) -> str | None:
        """Return the active call id for a thread, or None."""
        with self._lock:
            return self._calls_by_thread.get(thread_id)

    def register(self, thread_id: str, call_id: str) -> None:
        """Record the call now active for a thread."""
        with self._lock:
            previous = self._calls_by_thread.get(thread_id)
            self._calls_by_thread[thread_id] = call_id

        if previous and previous != call_id:
            # Two overlapping joins both passed check(); the later one wins.
            logger.warning(
                "Thread %s already mapped to call %s; replacing with %s",
                thread_id,
                previous,
                call_id,
            )
        else:
            logger.info("Registered call %s for thread %s", call_id, thread_id)

    def release_by_thread(self, thread_id: str) -> str | None:
        """Remove the entry for a thread. Returns the released call id."""
        with self._lock:
            return self._calls_by_thread.pop(thread_id, None)

    def release_by_call(self, call_id: str) -> str | None:
        """
        Remove the first entry whose call id matches.

        Returns:
            The thread id that was released, or None if no entry matched
        """
        with self._lock:
            for thread_id, active_call_id in self._calls_by_thread.items():
                if active_call_id == call_id:
                    del self._calls_by_thread[thread_id]
                    break
            else:
                return None

        logger.info("Released call %s for thread %s", call_id, thread_id)
        return thread_id

    def snapshot(self) -> dict[str, str]:
        """Copy of the current registry."""
        with self._lock:
            return dict(self._calls_by_thread)

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls_by_thread)
