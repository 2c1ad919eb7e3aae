"""
Background execution of geometry optimizations.

Runs are submitted to a shared thread pool. The returned
OptimizationHandle can be waited on and queried for the result but not
cancelled: once submitted, a run proceeds to completion or failure.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


class OptimizationHandle:
    """
    Eventual result of a background optimization.

    Example:
        >>> handle = GeometryOptimizer.optimize_coordinates_async(molecule)
        >>> converged = handle.result()
    """

    def __init__(self, future: "Future[bool]") -> None:
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run finishes. Returns False on timeout."""
        try:
            self._future.exception(timeout=timeout)
        except FutureTimeoutError:
            return False
        return True

    def result(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the run finishes and return whether it converged.

        Raises:
            TimeoutError: If *timeout* expires first.
            Exception: Whatever the run raised.
        """
        return self._future.result(timeout=timeout)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        return self._future.exception(timeout=timeout)

    def __repr__(self) -> str:
        status = "done" if self.done() else "running"
        return f"OptimizationHandle({status})"


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(thread_name_prefix="molopt")
        return _executor


def submit(fn: Callable[..., bool], *args: Any) -> OptimizationHandle:
    """Run fn(*args) on the shared pool."""
    future = _get_executor().submit(fn, *args)
    logger.debug("Submitted %s", getattr(fn, "__qualname__", fn))
    return OptimizationHandle(future)


def shutdown_executor(wait: bool = True) -> None:
    """Shut the shared pool down; the next submit() creates a new one."""
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)
