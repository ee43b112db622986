"""Load balancer interface."""
from abc import ABC, abstractmethod
from typing import Sequence, TypeVar

from ..errors import NoAvailableEntryError

E = TypeVar('E')


class LoadBalancer(ABC):
    """
    Chooses the connection entry that serves a read.

    The connection manager calls select_entry() with the entries currently
    available for the configured read mode, once per routed read and from
    many threads at once. Implementations must return one of the given
    entries and must not block.
    """

    #: Name used in configuration documents
    name = None

    def select_entry(self, entries: Sequence[E]) -> E:
        """
        Select one entry to serve a read.

        Args:
            entries: Non-empty ordered sequence of available entries

        Returns:
            One element of entries

        Raises:
            NoAvailableEntryError: If entries is empty
        """
        if not entries:
            raise NoAvailableEntryError("No connection entries available for selection")
        return self._select(entries)

    @abstractmethod
    def _select(self, entries: Sequence[E]) -> E:
        pass

    def to_dict(self) -> dict:
        """Describe the balancer for a configuration document."""
        return {'type': self.name or f"{type(self).__module__}:{type(self).__qualname__}"}

    def __repr__(self):
        return f"{type(self).__name__}()"
