"""Settings shared by every server configuration."""
import logging
from typing import List, Optional

from ..errors import ConfigError
from ..utils.config import Config

logger = logging.getLogger(__name__)


class BaseConfig:
    """
    Connection settings common to all server configurations.

    A configuration is built by chaining set_*() calls, each of which returns
    the configuration itself:

        config = BaseConfig().set_timeout(5000).set_retry_attempts(5)

    Setters store values as given. validate() checks them, and freeze()
    validates and then rejects any further change, marking the point where
    the configuration is handed to the connection manager.

    Passing an existing configuration copies every field it shares with the
    new one. Each class lists the fields it declares in ``_fields``.
    """

    _fields = (
        'idle_connection_timeout',
        'ping_timeout',
        'connect_timeout',
        'timeout',
        'retry_attempts',
        'retry_interval',
        'reconnection_timeout',
        'failed_attempts',
        'password',
        'subscriptions_per_connection',
        'client_name',
    )

    def __init__(self, config: 'BaseConfig' = None):
        """
        Initialize configuration with defaults.

        Args:
            config: Configuration to copy field values from

        Raises:
            TypeError: If config is not a compatible configuration
        """
        if config is not None and not isinstance(config, BaseConfig):
            raise TypeError(f"Cannot copy configuration from {type(config).__name__}")

        self._frozen = False
        self._idle_connection_timeout = Config.IDLE_CONNECTION_TIMEOUT
        self._ping_timeout = Config.PING_TIMEOUT
        self._connect_timeout = Config.CONNECT_TIMEOUT
        self._timeout = Config.TIMEOUT
        self._retry_attempts = Config.RETRY_ATTEMPTS
        self._retry_interval = Config.RETRY_INTERVAL
        self._reconnection_timeout = Config.RECONNECTION_TIMEOUT
        self._failed_attempts = Config.FAILED_ATTEMPTS
        self._password: Optional[str] = None
        self._subscriptions_per_connection = Config.SUBSCRIPTIONS_PER_CONNECTION
        self._client_name: Optional[str] = None

        if config is not None:
            self._copy_from(config)

    @classmethod
    def field_names(cls) -> List[str]:
        """All field names of this configuration class, base class fields first."""
        names = []
        for klass in reversed(cls.__mro__):
            names.extend(klass.__dict__.get('_fields', ()))
        return names

    def _copy_from(self, config: 'BaseConfig'):
        # Copy only the fields declared by classes both configurations share
        for klass in reversed(type(self).__mro__):
            if '_fields' not in klass.__dict__ or not isinstance(config, klass):
                continue
            for name in klass._fields:
                getattr(self, 'set_' + name)(getattr(config, name))

    def _set(self, name: str, value):
        if self._frozen:
            raise ConfigError(f"Cannot set {name}: configuration is frozen")
        setattr(self, '_' + name, value)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self):
        """
        Validate the configuration and make it read-only.

        Returns:
            This configuration

        Raises:
            ConfigError: If the configuration is invalid
        """
        if not self._frozen:
            self.validate()
            self._frozen = True
            logger.debug("Frozen %r", self)
        return self

    def validate(self):
        """
        Check every field.

        Raises:
            ConfigError: Listing all invalid fields
        """
        errors = self._collect_errors()
        if errors:
            raise ConfigError("Invalid configuration: " + "; ".join(errors))

    def _collect_errors(self) -> List[str]:
        errors = []
        for name in ('idle_connection_timeout', 'ping_timeout', 'connect_timeout', 'timeout',
                     'retry_attempts', 'retry_interval', 'reconnection_timeout', 'failed_attempts'):
            check_non_negative(errors, name, getattr(self, name))
        if not _is_int(self._subscriptions_per_connection) or self._subscriptions_per_connection < 1:
            errors.append(f"subscriptions_per_connection must be a positive integer, "
                          f"got {self._subscriptions_per_connection!r}")
        return errors

    def to_dict(self) -> dict:
        """Field name to current value."""
        return {name: getattr(self, name) for name in self.field_names()}

    def __repr__(self):
        fields = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items() if k != 'password')
        return f"{type(self).__name__}({fields})"

    # Timeouts are in milliseconds

    @property
    def idle_connection_timeout(self) -> int:
        return self._idle_connection_timeout

    def set_idle_connection_timeout(self, idle_connection_timeout: int):
        """Time after which an unused pooled connection above the minimum idle size is closed."""
        return self._set('idle_connection_timeout', idle_connection_timeout)

    @property
    def ping_timeout(self) -> int:
        return self._ping_timeout

    def set_ping_timeout(self, ping_timeout: int):
        return self._set('ping_timeout', ping_timeout)

    @property
    def connect_timeout(self) -> int:
        return self._connect_timeout

    def set_connect_timeout(self, connect_timeout: int):
        """Timeout while connecting to a node."""
        return self._set('connect_timeout', connect_timeout)

    @property
    def timeout(self) -> int:
        return self._timeout

    def set_timeout(self, timeout: int):
        """Time to wait for a node's response once a command is sent."""
        return self._set('timeout', timeout)

    @property
    def retry_attempts(self) -> int:
        return self._retry_attempts

    def set_retry_attempts(self, retry_attempts: int):
        """Attempts to send a command before an error is raised."""
        return self._set('retry_attempts', retry_attempts)

    @property
    def retry_interval(self) -> int:
        return self._retry_interval

    def set_retry_interval(self, retry_interval: int):
        return self._set('retry_interval', retry_interval)

    @property
    def reconnection_timeout(self) -> int:
        return self._reconnection_timeout

    def set_reconnection_timeout(self, reconnection_timeout: int):
        """Interval between attempts to reconnect to a disconnected node."""
        return self._set('reconnection_timeout', reconnection_timeout)

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    def set_failed_attempts(self, failed_attempts: int):
        """Consecutive failed commands after which a node is excluded from reads."""
        return self._set('failed_attempts', failed_attempts)

    @property
    def password(self) -> Optional[str]:
        return self._password

    def set_password(self, password: Optional[str]):
        return self._set('password', password)

    @property
    def subscriptions_per_connection(self) -> int:
        return self._subscriptions_per_connection

    def set_subscriptions_per_connection(self, subscriptions_per_connection: int):
        """Channel subscriptions multiplexed over one subscription connection."""
        return self._set('subscriptions_per_connection', subscriptions_per_connection)

    @property
    def client_name(self) -> Optional[str]:
        return self._client_name

    def set_client_name(self, client_name: Optional[str]):
        return self._set('client_name', client_name)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_non_negative(errors: List[str], name: str, value):
    """Append an error message unless value is a non-negative integer."""
    if not _is_int(value) or value < 0:
        errors.append(f"{name} must be a non-negative integer, got {value!r}")
