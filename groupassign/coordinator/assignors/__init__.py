from .abstract import AbstractPartitionAssignor
from .roundrobin import RoundRobinPartitionAssignor
from .simple_roundrobin import SimpleRoundRobinPartitionAssignor

__all__ = [
    "AbstractPartitionAssignor",
    "RoundRobinPartitionAssignor",
    "SimpleRoundRobinPartitionAssignor",
]
