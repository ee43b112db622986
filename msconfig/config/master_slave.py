"""Master/slave connection pool and read routing configuration."""
from typing import Iterable, List, Optional, Union

from .base import BaseConfig, check_non_negative
from .read_mode import ReadMode
from ..balancer import LoadBalancer, RoundRobinLoadBalancer
from ..utils.address import Address, parse_address
from ..utils.config import Config


class BaseMasterSlaveServersConfig(BaseConfig):
    """
    Pool sizing and read routing for a master with slave nodes.

    The client keeps one command connection pool against the master, and
    against *each* slave node one command connection pool plus one pool of
    pub/sub subscription connections. Every pool is kept warm down to its
    minimum idle size and never grows past its pool size.

    Reads are routed according to read_mode; when slaves take part, the
    load balancer picks the node for each read.
    """

    _fields = (
        'load_balancer',
        'master_connection_pool_size',
        'slave_connection_pool_size',
        'slave_subscription_connection_pool_size',
        'master_connection_minimum_idle_size',
        'slave_connection_minimum_idle_size',
        'slave_subscription_connection_minimum_idle_size',
        'read_mode',
    )

    # (pool size field, minimum idle size field) for each pool
    _pools = (
        ('master_connection_pool_size', 'master_connection_minimum_idle_size'),
        ('slave_connection_pool_size', 'slave_connection_minimum_idle_size'),
        ('slave_subscription_connection_pool_size', 'slave_subscription_connection_minimum_idle_size'),
    )

    def __init__(self, config: 'BaseMasterSlaveServersConfig' = None):
        if config is not None and not isinstance(config, BaseMasterSlaveServersConfig):
            raise TypeError(f"Cannot copy master/slave configuration from {type(config).__name__}")

        self._load_balancer: LoadBalancer = RoundRobinLoadBalancer()
        self._slave_subscription_connection_minimum_idle_size = Config.SLAVE_SUBSCRIPTION_CONNECTION_MINIMUM_IDLE_SIZE
        self._slave_subscription_connection_pool_size = Config.SLAVE_SUBSCRIPTION_CONNECTION_POOL_SIZE
        self._slave_connection_minimum_idle_size = Config.SLAVE_CONNECTION_MINIMUM_IDLE_SIZE
        self._slave_connection_pool_size = Config.SLAVE_CONNECTION_POOL_SIZE
        self._master_connection_minimum_idle_size = Config.MASTER_CONNECTION_MINIMUM_IDLE_SIZE
        self._master_connection_pool_size = Config.MASTER_CONNECTION_POOL_SIZE
        self._read_mode = ReadMode.parse(Config.READ_MODE)
        super().__init__(config)

    def _collect_errors(self) -> List[str]:
        errors = super()._collect_errors()
        for pool_field, idle_field in self._pools:
            pool_size = getattr(self, pool_field)
            idle_size = getattr(self, idle_field)
            before = len(errors)
            check_non_negative(errors, pool_field, pool_size)
            check_non_negative(errors, idle_field, idle_size)
            if len(errors) == before and pool_size < idle_size:
                errors.append(f"{pool_field} ({pool_size}) can't be lower than {idle_field} ({idle_size})")
        if not isinstance(self._load_balancer, LoadBalancer):
            errors.append(f"load_balancer must be a LoadBalancer, got {type(self._load_balancer).__name__}")
        return errors

    @property
    def slave_connection_pool_size(self) -> int:
        return self._slave_connection_pool_size

    def set_slave_connection_pool_size(self, slave_connection_pool_size: int):
        """
        Maximum command connections for each slave node.

        Default is 64.
        """
        return self._set('slave_connection_pool_size', slave_connection_pool_size)

    @property
    def master_connection_pool_size(self) -> int:
        return self._master_connection_pool_size

    def set_master_connection_pool_size(self, master_connection_pool_size: int):
        """
        Maximum command connections to the master node.

        Default is 64.
        """
        return self._set('master_connection_pool_size', master_connection_pool_size)

    @property
    def load_balancer(self) -> LoadBalancer:
        return self._load_balancer

    def set_load_balancer(self, load_balancer: Optional[LoadBalancer]):
        """
        Balancer choosing the node that serves each read.

        The balancer is held by reference, not copied. Passing None restores
        a new round-robin balancer, which is also the default.
        """
        if load_balancer is None:
            load_balancer = RoundRobinLoadBalancer()
        return self._set('load_balancer', load_balancer)

    @property
    def slave_subscription_connection_pool_size(self) -> int:
        return self._slave_subscription_connection_pool_size

    def set_slave_subscription_connection_pool_size(self, slave_subscription_connection_pool_size: int):
        """
        Maximum pub/sub subscription connections for each slave node.

        Default is 50.
        """
        return self._set('slave_subscription_connection_pool_size', slave_subscription_connection_pool_size)

    @property
    def slave_connection_minimum_idle_size(self) -> int:
        return self._slave_connection_minimum_idle_size

    def set_slave_connection_minimum_idle_size(self, slave_connection_minimum_idle_size: int):
        """
        Idle command connections kept open for each slave node.

        Default is 10.
        """
        return self._set('slave_connection_minimum_idle_size', slave_connection_minimum_idle_size)

    @property
    def master_connection_minimum_idle_size(self) -> int:
        return self._master_connection_minimum_idle_size

    def set_master_connection_minimum_idle_size(self, master_connection_minimum_idle_size: int):
        """
        Idle command connections kept open to the master node.

        Default is 10.
        """
        return self._set('master_connection_minimum_idle_size', master_connection_minimum_idle_size)

    @property
    def slave_subscription_connection_minimum_idle_size(self) -> int:
        return self._slave_subscription_connection_minimum_idle_size

    def set_slave_subscription_connection_minimum_idle_size(self, slave_subscription_connection_minimum_idle_size: int):
        """
        Idle pub/sub subscription connections kept open for each slave node.

        Default is 1.
        """
        return self._set('slave_subscription_connection_minimum_idle_size',
                         slave_subscription_connection_minimum_idle_size)

    @property
    def read_mode(self) -> ReadMode:
        return self._read_mode

    def set_read_mode(self, read_mode: Union[ReadMode, str]):
        """
        Node type used for read operations.

        Default is ReadMode.SLAVE. Accepts a ReadMode or its name.
        """
        return self._set('read_mode', ReadMode.parse(read_mode))


class MasterSlaveServersConfig(BaseMasterSlaveServersConfig):
    """Master/slave configuration with the node addresses to connect to."""

    _fields = (
        'master_address',
        'slave_addresses',
        'database',
    )

    def __init__(self, config: BaseMasterSlaveServersConfig = None):
        self._master_address: Optional[Address] = None
        self._slave_addresses: List[Address] = []
        self._database = Config.DATABASE
        super().__init__(config)

    def _collect_errors(self) -> List[str]:
        errors = super()._collect_errors()
        if self._master_address is None:
            errors.append("master_address is required")
        check_non_negative(errors, 'database', self._database)
        return errors

    @property
    def master_address(self) -> Optional[Address]:
        return self._master_address

    def set_master_address(self, address: Union[str, Address, None]):
        """Set the master node address, as 'host:port' or (host, port)."""
        return self._set('master_address', None if address is None else parse_address(address))

    @property
    def slave_addresses(self) -> List[Address]:
        return list(self._slave_addresses)

    def add_slave_address(self, *addresses: Union[str, Address]):
        """Add slave node addresses. Addresses already present are ignored."""
        return self.set_slave_addresses(self._slave_addresses + list(addresses))

    def set_slave_addresses(self, addresses: Iterable[Union[str, Address]]):
        """Replace the slave node addresses, keeping their order and dropping duplicates."""
        unique = []
        for address in addresses:
            address = parse_address(address)
            if address not in unique:
                unique.append(address)
        return self._set('slave_addresses', unique)

    @property
    def database(self) -> int:
        return self._database

    def set_database(self, database: int):
        """Database index selected on every connection. Default is 0."""
        return self._set('database', database)
