"""Connection entries handed to load balancers."""
from dataclasses import dataclass
from typing import Tuple

MASTER = 'master'
SLAVE = 'slave'


@dataclass(frozen=True)
class ClientConnectionsEntry:
    """Connections held by the client against a single node."""
    host: str
    port: int
    node_type: str = SLAVE

    @property
    def address(self) -> Tuple[str, int]:
        """Get the (host, port) tuple."""
        return (self.host, self.port)

    @property
    def is_master(self) -> bool:
        return self.node_type == MASTER

    def __hash__(self):
        return hash((self.host, self.port))

    def __eq__(self, other):
        if not isinstance(other, ClientConnectionsEntry):
            return NotImplemented
        return self.host == other.host and self.port == other.port

    def __str__(self):
        return f"{self.host}:{self.port}"
