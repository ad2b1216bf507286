from functools import wraps

from curvesim.logging import get_logger

from dscsim.exceptions import ReentrancyError

logger = get_logger(__name__)


def nonreentrant(method):
    """
    Reject calls into any guarded method of the same object while
    another one is still executing.
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._locked:
            raise ReentrancyError(f"Reentrant call to {method.__name__}")
        self._locked = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._locked = False

    return wrapper


def atomic(method):
    """
    Run the method against a snapshot of the object and restore the
    snapshot if anything raises.
    """

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        snapshot = self.get_snapshot()
        try:
            return method(self, *args, **kwargs)
        except Exception as e:
            logger.debug("%s reverted: %r", method.__name__, e)
            self.revert_to_snapshot(snapshot)
            raise

    return wrapper
