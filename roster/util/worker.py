"""Process-wide worker numbering.

Each application instance created in this process takes the next number,
which the health endpoint reports so callers can tell workers apart.
"""

import itertools
import threading

_lock = threading.Lock()
_counter = itertools.count(1)


def reset_worker_counter(start: int = 1) -> None:
    """Restart numbering. Called once at process startup."""
    global _counter
    with _lock:
        _counter = itertools.count(start)


def next_worker_id() -> int:
    """Take the next worker number."""
    with _lock:
        return next(_counter)
