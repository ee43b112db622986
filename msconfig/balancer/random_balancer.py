"""Random load balancer."""
import random
from typing import Sequence

from .base import LoadBalancer, E


class RandomLoadBalancer(LoadBalancer):
    """Picks an entry uniformly at random."""

    name = 'random'

    def __init__(self, rng: random.Random = None):
        self._rng = rng or random.Random()

    def _select(self, entries: Sequence[E]) -> E:
        return entries[self._rng.randrange(len(entries))]
