"""Weighted round-robin load balancer."""
import logging
import threading
from typing import Dict, Mapping, Sequence, Union

from .base import LoadBalancer, E
from ..utils.address import Address, format_address, parse_address
from ..utils.config import Config

logger = logging.getLogger(__name__)


class _WeightEntry:
    """Weight of one node and the selections it has left in the current cycle."""

    def __init__(self, weight: int):
        self.weight = weight
        self.counter = weight

    def reset(self):
        self.counter = self.weight


class WeightedRoundRobinBalancer(LoadBalancer):
    """
    Round-robin where each node is picked as often as its weight.

    Entries are visited in order like round-robin, skipping nodes that have
    already been picked as many times as their weight in the current cycle.
    A cycle ends when every available node is used up. A node with weight 3
    is returned three times for every time a node with weight 1 is returned.

    Entries must expose an ``address`` (host, port) tuple. Nodes missing from
    the weights map get default_weight. Such nodes are forgotten once they
    drop out of the entries, and start a fresh count if they come back.
    """

    name = 'weighted_round_robin'

    def __init__(self, weights: Mapping[Union[str, Address], int] = None, default_weight: int = None):
        """
        Initialize weighted balancer.

        Args:
            weights: Node address ('host:port' or (host, port)) to weight
            default_weight: Weight of nodes not listed in weights

        Raises:
            ValueError: If a weight is not a positive integer
        """
        if default_weight is None:
            default_weight = Config.WEIGHTED_DEFAULT_WEIGHT
        if not _is_positive_int(default_weight):
            raise ValueError(f"Default weight must be a positive integer, got {default_weight!r}")
        self.default_weight = default_weight

        if weights is not None and not isinstance(weights, Mapping):
            raise TypeError(f"Weights must be a mapping of address to weight, got {type(weights).__name__}")
        self._configured: Dict[Address, int] = {}
        for addr, weight in (weights or {}).items():
            if not _is_positive_int(weight):
                raise ValueError(f"Weight for {addr} must be a positive integer, got {weight!r}")
            self._configured[parse_address(addr)] = weight
        self._weights = {addr: _WeightEntry(weight) for addr, weight in self._configured.items()}

        self._index = 0
        self._lock = threading.Lock()

    @property
    def weights(self) -> Dict[Address, int]:
        """Configured weight for each listed node."""
        return dict(self._configured)

    def _select(self, entries: Sequence[E]) -> E:
        with self._lock:
            for entry in entries:
                if entry.address not in self._weights:
                    logger.debug("Using default weight %d for %s",
                                 self.default_weight, format_address(entry.address))
                    self._weights[entry.address] = _WeightEntry(self.default_weight)

            if len(self._weights) > len(self._configured) + len(entries):
                self._prune(entries)

            if all(self._weights[e.address].counter <= 0 for e in entries):
                # Every available node used up its share of this cycle
                for weight_entry in self._weights.values():
                    weight_entry.reset()

            count = len(entries)
            for offset in range(count):
                position = (self._index + offset) % count
                weight_entry = self._weights[entries[position].address]
                if weight_entry.counter > 0:
                    weight_entry.counter -= 1
                    self._index = position + 1
                    return entries[position]

    def _prune(self, entries: Sequence[E]):
        # Forget departed nodes that only ever had the default weight
        current = {entry.address for entry in entries}
        for addr in list(self._weights):
            if addr not in current and addr not in self._configured:
                del self._weights[addr]

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['weights'] = {format_address(addr): weight for addr, weight in self.weights.items()}
        data['default_weight'] = self.default_weight
        return data

    def __repr__(self):
        return f"WeightedRoundRobinBalancer(weights={self.weights!r}, default_weight={self.default_weight})"


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
