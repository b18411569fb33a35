__version__ = "0.1.0"

from .cluster import ClusterMetadata
from .coordinator.assignors import (
    AbstractPartitionAssignor,
    RoundRobinPartitionAssignor,
    SimpleRoundRobinPartitionAssignor,
)
from .coordinator.consumer import AssignmentCoordinator, check_assignment
from .errors import InconsistentGroupProtocolError, InvalidAssignmentError
from .structs import TopicPartition

__all__ = [
    # Assignors
    "AbstractPartitionAssignor",
    "RoundRobinPartitionAssignor",
    "SimpleRoundRobinPartitionAssignor",
    # Coordination
    "AssignmentCoordinator",
    "ClusterMetadata",
    "check_assignment",
    # Errors
    "InconsistentGroupProtocolError",
    "InvalidAssignmentError",
    # Structs
    "TopicPartition",
]
