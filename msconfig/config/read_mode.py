"""Node types used for read operations."""
from enum import Enum

from ..errors import ConfigFormatError


class ReadMode(Enum):
    """Which nodes serve read operations."""

    MASTER = 'MASTER'  # Reads go to the master only
    SLAVE = 'SLAVE'  # Reads go to slaves, chosen by the load balancer
    MASTER_SLAVE = 'MASTER_SLAVE'  # Reads are balanced across master and slaves

    @property
    def uses_master(self) -> bool:
        """Whether the master is a read candidate."""
        return self is not ReadMode.SLAVE

    @property
    def uses_slaves(self) -> bool:
        """Whether slaves are read candidates."""
        return self is not ReadMode.MASTER

    @classmethod
    def parse(cls, value) -> 'ReadMode':
        """
        Convert a ReadMode or its name to a ReadMode.

        Names are case-insensitive and may use '-' in place of '_'.

        Raises:
            ConfigFormatError: If the value names no read mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper().replace('-', '_')
            if name in cls.__members__:
                return cls[name]
        choices = ', '.join(cls.__members__)
        raise ConfigFormatError(f"Unknown read mode: {value!r} (expected one of {choices})")
