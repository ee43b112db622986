"""Round-robin load balancer."""
import threading
from typing import Sequence

from .base import LoadBalancer, E


class RoundRobinLoadBalancer(LoadBalancer):
    """
    Cycles through the entries in order, wrapping at the end.

    The cursor is a position in whatever sequence is passed in, not a node
    identity, so a node may be visited more or less often around membership
    changes.
    """

    name = 'round_robin'

    def __init__(self):
        self._index = 0
        self._lock = threading.Lock()

    def _select(self, entries: Sequence[E]) -> E:
        with self._lock:
            index = self._index
            self._index += 1
        return entries[index % len(entries)]
