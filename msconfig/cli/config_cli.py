"""Configuration check CLI."""
import argparse
import logging
import sys

from msconfig.config import MasterSlaveServersConfig, ReadMode, dump_config, load_config
from msconfig.config.loader import LOAD_BALANCERS, YAML_SUFFIXES, load_balancer_from_spec
from msconfig.errors import ConfigError


def parse_slave_addresses(slaves_arg: str) -> list[str]:
    """
    Split a comma-separated list of slave addresses.

    Args:
        slaves_arg: Comma-separated list of host:port addresses

    Returns:
        List of non-empty address strings
    """
    return [addr.strip() for addr in slaves_arg.split(',') if addr.strip()]


def apply_overrides(config: MasterSlaveServersConfig, args) -> MasterSlaveServersConfig:
    """Apply command line overrides to a configuration."""
    if args.master:
        config.set_master_address(args.master)
    if args.slaves:
        config.set_slave_addresses(parse_slave_addresses(args.slaves))
    if args.read_mode:
        config.set_read_mode(args.read_mode)
    if args.load_balancer:
        config.set_load_balancer(load_balancer_from_spec(args.load_balancer))
    if args.master_pool_size is not None:
        config.set_master_connection_pool_size(args.master_pool_size)
    if args.slave_pool_size is not None:
        config.set_slave_connection_pool_size(args.slave_pool_size)
    return config


def main():
    """Main entry point for configuration check CLI."""
    parser = argparse.ArgumentParser(description='Check a master/slave client configuration')
    parser.add_argument('config', nargs='?', help='Configuration file (.json, .yaml or .yml)')
    parser.add_argument('--master', help='Master address (host:port)')
    parser.add_argument('--slaves', help='Comma-separated list of slave addresses (host:port,host:port,...)')
    parser.add_argument('--read-mode', choices=[mode.name for mode in ReadMode],
                        help='Node type used for reads (default: SLAVE)')
    parser.add_argument('--load-balancer', choices=sorted(LOAD_BALANCERS),
                        help='Load balancer for reads (default: round_robin)')
    parser.add_argument('--master-pool-size', type=int, help='Master connection pool size')
    parser.add_argument('--slave-pool-size', type=int, help='Connection pool size for each slave')
    parser.add_argument('--format', choices=['json', 'yaml'],
                        help='Output format (default: from the --output extension, else json)')
    parser.add_argument('--output', help='Write the effective configuration to this file')
    parser.add_argument('--show-secrets', action='store_true', help='Print the password instead of masking it')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')

    try:
        config = load_config(args.config) if args.config else MasterSlaveServersConfig()
        apply_overrides(config, args).freeze()
        fmt = args.format
        if args.output:
            dump_config(config, args.output, fmt=fmt)
            if fmt is None:
                fmt = 'yaml' if args.output.lower().endswith(YAML_SUFFIXES) else 'json'
        print(dump_config(config, fmt=fmt, mask_secrets=not args.show_secrets), end='')
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading configuration: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
