"""MSConfig - master/slave connection pool and read routing configuration."""
__version__ = '1.0.0'

from .errors import ConfigError, ConfigFormatError, NoAvailableEntryError
from .balancer import (
    LoadBalancer,
    ClientConnectionsEntry,
    RoundRobinLoadBalancer,
    RandomLoadBalancer,
    WeightedRoundRobinBalancer,
)
from .config import (
    BaseConfig,
    ReadMode,
    BaseMasterSlaveServersConfig,
    MasterSlaveServersConfig,
    load_config,
    dump_config,
)

__all__ = [
    'ConfigError', 'ConfigFormatError', 'NoAvailableEntryError',
    'LoadBalancer', 'ClientConnectionsEntry', 'RoundRobinLoadBalancer',
    'RandomLoadBalancer', 'WeightedRoundRobinBalancer',
    'BaseConfig', 'ReadMode', 'BaseMasterSlaveServersConfig', 'MasterSlaveServersConfig',
    'load_config', 'dump_config',
]
