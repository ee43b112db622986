"""Node address parsing."""
from typing import Tuple, Union

from .config import Config
from ..errors import ConfigFormatError

Address = Tuple[str, int]


def parse_address(value: Union[str, Address], default_port: int = None) -> Address:
    """
    Parse a node address.

    Args:
        value: 'host:port', 'host' or a (host, port) tuple
        default_port: Port used when none is given (default: Config.DEFAULT_PORT)

    Returns:
        (host, port) tuple

    Raises:
        ConfigFormatError: If the address is malformed
    """
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise ConfigFormatError(f"Invalid address: {value!r} (expected (host, port))")
        host, port = value
    elif isinstance(value, str):
        addr = value.strip()
        if '://' in addr:
            addr = addr.split('://', 1)[1]
        if ':' in addr:
            host, port = addr.rsplit(':', 1)
        else:
            host, port = addr, default_port or Config.DEFAULT_PORT
    else:
        raise ConfigFormatError(f"Invalid address: {value!r}")

    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ConfigFormatError(f"Invalid port number in {value!r} (expected host:port)") from None
    if not host:
        raise ConfigFormatError(f"Missing host in {value!r} (expected host:port)")
    if not 0 < port < 65536:
        raise ConfigFormatError(f"Port out of range in {value!r}")
    return (host, port)


def format_address(address: Address) -> str:
    """Format a (host, port) tuple as 'host:port'."""
    return f"{address[0]}:{address[1]}"
