"""Configuration defaults."""


class Config:
    """Default values used when building a client configuration."""

    # Master node pool
    MASTER_CONNECTION_POOL_SIZE = 64
    MASTER_CONNECTION_MINIMUM_IDLE_SIZE = 10

    # Slave node pools (sized for each slave node)
    SLAVE_CONNECTION_POOL_SIZE = 64
    SLAVE_CONNECTION_MINIMUM_IDLE_SIZE = 10
    SLAVE_SUBSCRIPTION_CONNECTION_POOL_SIZE = 50  # pub/sub connections
    SLAVE_SUBSCRIPTION_CONNECTION_MINIMUM_IDLE_SIZE = 1

    # Read routing
    READ_MODE = 'SLAVE'  # 'MASTER', 'SLAVE' or 'MASTER_SLAVE'
    WEIGHTED_DEFAULT_WEIGHT = 1  # Weight for nodes missing from the weights map

    # Connection settings (milliseconds)
    IDLE_CONNECTION_TIMEOUT = 10000
    PING_TIMEOUT = 1000
    CONNECT_TIMEOUT = 10000
    TIMEOUT = 3000  # Command response timeout
    RETRY_ATTEMPTS = 3
    RETRY_INTERVAL = 1000
    RECONNECTION_TIMEOUT = 3000
    FAILED_ATTEMPTS = 3  # Failed commands before a node is excluded
    SUBSCRIPTIONS_PER_CONNECTION = 5

    # Server settings
    DATABASE = 0
    DEFAULT_PORT = 6379
