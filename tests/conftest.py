import pytest
from msconfig import ClientConnectionsEntry, MasterSlaveServersConfig


@pytest.fixture
def slave_entries():
    """Three slave entries, in the order the connection manager lists them."""
    return [
        ClientConnectionsEntry('10.0.0.2', 6379),
        ClientConnectionsEntry('10.0.0.3', 6379),
        ClientConnectionsEntry('10.0.0.4', 6379),
    ]


@pytest.fixture
def master_slave_config():
    """Configuration with a master and two slaves, otherwise defaults."""
    return (MasterSlaveServersConfig()
            .set_master_address('10.0.0.1:6379')
            .add_slave_address('10.0.0.2:6379', '10.0.0.3:6379'))
