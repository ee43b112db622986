"""Client configuration objects."""
from .base import BaseConfig
from .read_mode import ReadMode
from .master_slave import BaseMasterSlaveServersConfig, MasterSlaveServersConfig
from .loader import config_from_dict, config_to_dict, load_config, dump_config

__all__ = [
    'BaseConfig',
    'ReadMode',
    'BaseMasterSlaveServersConfig',
    'MasterSlaveServersConfig',
    'config_from_dict',
    'config_to_dict',
    'load_config',
    'dump_config',
]
