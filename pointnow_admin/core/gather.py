"""
All-settled join for independent upstream calls.

The overview page asks for several metric sets at once; one failing
endpoint must not hide the others, so every outcome is kept.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)


class Settled:
    """Outcome of one call: a value or the exception it raised"""

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error

    @property
    def ok(self):
        return self.error is None

    @property
    def message(self):
        if self.error is None:
            return None
        return getattr(self.error, 'message', None) or str(self.error)

    def __repr__(self):
        return f"<Settled ok={self.ok}>"


def gather_settled(calls, max_workers=None):
    """
    Run zero-argument callables in parallel and wait for all of them

    Args:
        calls: dict of name -> callable
        max_workers: thread pool size (defaults to one thread per call)

    Returns:
        dict of name -> Settled, in the same order as calls
    """
    if not calls:
        return {}

    results = {}
    with ThreadPoolExecutor(max_workers=max_workers or len(calls)) as executor:
        futures = {name: executor.submit(fn) for name, fn in calls.items()}
        for name, future in futures.items():
            try:
                results[name] = Settled(value=future.result())
            except Exception as e:
                logger.warning("Parallel call %s failed: %s", name, e)
                results[name] = Settled(error=e)
    return results
