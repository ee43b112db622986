"""Load and save master/slave configurations as JSON or YAML documents."""
import importlib
import json
import logging
from pathlib import Path
from typing import Optional, Union

import yaml

from .master_slave import MasterSlaveServersConfig
from ..balancer import LoadBalancer, RandomLoadBalancer, RoundRobinLoadBalancer, WeightedRoundRobinBalancer
from ..errors import ConfigFormatError
from ..utils.address import format_address

logger = logging.getLogger(__name__)

LOAD_BALANCERS = {
    RoundRobinLoadBalancer.name: RoundRobinLoadBalancer,
    RandomLoadBalancer.name: RandomLoadBalancer,
    WeightedRoundRobinBalancer.name: WeightedRoundRobinBalancer,
}

JSON_SUFFIXES = ('.json',)
YAML_SUFFIXES = ('.yaml', '.yml')
SECRET_MASK = '********'


def load_balancer_from_spec(spec: Union[str, dict, LoadBalancer, None]) -> Optional[LoadBalancer]:
    """
    Build a load balancer from its document form.

    Args:
        spec: A balancer name ('round_robin', 'random', 'weighted_round_robin'),
              an import path 'package.module:ClassName', or a mapping with a
              'type' key plus constructor arguments

    Returns:
        The load balancer, or None when spec is None so the configuration
        falls back to its default balancer

    Raises:
        ConfigFormatError: If the balancer cannot be built
    """
    if spec is None or isinstance(spec, LoadBalancer):
        return spec
    if isinstance(spec, str):
        kind, params = spec, {}
    elif isinstance(spec, dict) and 'type' in spec:
        params = dict(spec)
        kind = params.pop('type')
    else:
        raise ConfigFormatError(f"Invalid load_balancer: {spec!r}")
    if not isinstance(kind, str):
        raise ConfigFormatError(f"Load balancer type must be a string, got {kind!r}")

    balancer_class = LOAD_BALANCERS.get(kind) or _import_balancer(kind)
    try:
        return balancer_class(**params)
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigFormatError(f"Cannot create load balancer {kind!r}: {e}") from e


def _import_balancer(path: str):
    module_name, _, class_name = path.partition(':')
    if not class_name:
        choices = ', '.join(LOAD_BALANCERS)
        raise ConfigFormatError(f"Unknown load balancer: {path!r} (expected one of {choices} "
                                f"or 'package.module:ClassName')")
    try:
        balancer_class = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigFormatError(f"Cannot import load balancer {path!r}: {e}") from e
    if not (isinstance(balancer_class, type) and issubclass(balancer_class, LoadBalancer)):
        raise ConfigFormatError(f"{path!r} is not a LoadBalancer")
    return balancer_class


def config_from_dict(data: dict) -> MasterSlaveServersConfig:
    """
    Build a configuration from a mapping of field names to values.

    Missing fields keep their defaults.

    Raises:
        ConfigFormatError: On unknown fields or unparseable values
    """
    if not isinstance(data, dict):
        raise ConfigFormatError(f"Configuration must be a mapping, got {type(data).__name__}")

    known = MasterSlaveServersConfig.field_names()
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigFormatError(f"Unknown configuration field(s): {', '.join(unknown)}")

    slaves = data.get('slave_addresses', [])
    if not isinstance(slaves, list):
        raise ConfigFormatError(f"slave_addresses must be a list, got {type(slaves).__name__}")

    config = MasterSlaveServersConfig()
    for name in known:
        if name not in data:
            continue
        value = data[name]
        if name == 'load_balancer':
            value = load_balancer_from_spec(value)
        try:
            getattr(config, 'set_' + name)(value)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigFormatError(f"Invalid value for {name}: {value!r} ({e})") from e
    return config


def config_to_dict(config: MasterSlaveServersConfig, mask_secrets: bool = False) -> dict:
    """
    Inverse of config_from_dict, using only JSON/YAML friendly values.

    With mask_secrets, a set password is replaced by SECRET_MASK.
    """
    data = config.to_dict()
    if mask_secrets and data['password'] is not None:
        data['password'] = SECRET_MASK
    data['load_balancer'] = config.load_balancer.to_dict()
    data['read_mode'] = config.read_mode.value
    if config.master_address is not None:
        data['master_address'] = format_address(config.master_address)
    data['slave_addresses'] = [format_address(addr) for addr in config.slave_addresses]
    return data


def load_config(path: Union[str, Path]) -> MasterSlaveServersConfig:
    """
    Read a configuration file.

    The format is chosen by extension: .json, .yaml or .yml.

    Raises:
        ConfigFormatError: If the file cannot be parsed
        OSError: If the file cannot be read
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ConfigFormatError(f"Cannot read {path}: not valid UTF-8 ({e})") from e
    try:
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        elif suffix in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            raise ConfigFormatError(f"Unsupported configuration file type: {path.name}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigFormatError(f"Cannot parse {path}: {e}") from e

    config = config_from_dict(data or {})
    logger.debug("Loaded configuration from %s", path)
    return config


def dump_config(config: MasterSlaveServersConfig, path: Union[str, Path] = None, fmt: str = None,
                mask_secrets: bool = False) -> str:
    """
    Serialize a configuration, optionally writing it to a file.

    Args:
        config: Configuration to serialize
        path: File to write; its extension selects the format unless fmt is given
        fmt: 'json' or 'yaml' (default: chosen by path extension, else json)
        mask_secrets: Replace the password with SECRET_MASK

    Returns:
        The serialized document
    """
    if fmt is None:
        fmt = 'yaml' if path is not None and Path(path).suffix.lower() in YAML_SUFFIXES else 'json'

    data = config_to_dict(config, mask_secrets=mask_secrets)
    if fmt == 'yaml':
        text = yaml.dump(data, default_flow_style=False, indent=2, sort_keys=False)
    elif fmt == 'json':
        text = json.dumps(data, indent=2) + '\n'
    else:
        raise ConfigFormatError(f"Unsupported output format: {fmt!r}")

    if path is not None:
        Path(path).write_text(text, encoding='utf-8')
        logger.debug("Wrote configuration to %s", path)
    return text
