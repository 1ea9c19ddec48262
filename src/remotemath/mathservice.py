"""
The math object that the server publishes for remote callers.

remotemath - publish a math object with Pyro.
"""

import logging
import numbers
import threading
import Pyro4

__all__ = ["IRemoteMath", "RemoteMath"]

log = logging.getLogger("remotemath.mathservice")


class IRemoteMath(object):
    """
    The operations a math object offers to remote callers.
    The server only depends on this interface, so any implementation can be published.
    """

    def add(self, a, b):
        raise NotImplementedError("add")

    def subtract(self, a, b):
        raise NotImplementedError("subtract")

    def multiply(self, a, b):
        raise NotImplementedError("multiply")

    def divide(self, a, b):
        raise NotImplementedError("divide")

    def computations(self):
        """the number of computations performed so far"""
        raise NotImplementedError("computations")


@Pyro4.expose
class RemoteMath(IRemoteMath):
    """
    Plain arithmetic on two numbers. Keeps count of the computations it performed.
    Pyro may call into a single instance from several worker threads at once.
    """

    def __init__(self):
        self._computations = 0
        self._lock = threading.Lock()

    def add(self, a, b):
        self._count("add", a, b)
        return a + b

    def subtract(self, a, b):
        self._count("subtract", a, b)
        return a - b

    def multiply(self, a, b):
        self._count("multiply", a, b)
        return a * b

    def divide(self, a, b):
        self._count("divide", a, b)
        return a / b

    def computations(self):
        with self._lock:
            return self._computations

    def _count(self, operation, a, b):
        for arg in (a, b):
            if isinstance(arg, bool) or not isinstance(arg, numbers.Real):
                raise TypeError("%s expects numbers, not %s" % (operation, type(arg).__name__))
        with self._lock:
            self._computations += 1
            count = self._computations
        log.debug("%s(%r, %r), number of computations performed so far = %d", operation, a, b, count)
