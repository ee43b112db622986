"""Load balancers that pick the node serving a read."""
from .base import LoadBalancer
from .entry import ClientConnectionsEntry
from .round_robin import RoundRobinLoadBalancer
from .random_balancer import RandomLoadBalancer
from .weighted import WeightedRoundRobinBalancer

__all__ = [
    'LoadBalancer',
    'ClientConnectionsEntry',
    'RoundRobinLoadBalancer',
    'RandomLoadBalancer',
    'WeightedRoundRobinBalancer',
]
