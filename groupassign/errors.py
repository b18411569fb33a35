from kafka.errors import InconsistentGroupProtocolError  # 23
from kafka.errors import IllegalStateError, KafkaError

__all__ = [
    # groupassign custom errors
    "InvalidAssignmentError",
    # Kafka Python errors
    "KafkaError",
    "IllegalStateError",
    # Numbered errors
    "InconsistentGroupProtocolError",  # 23
]


class InvalidAssignmentError(KafkaError):
    """Raised by :func:`~groupassign.coordinator.consumer.check_assignment`
    when an assignment loses, duplicates or misplaces partitions.
    """

    def __init__(
        self,
        message: str,
        *,
        unassigned=frozenset(),
        duplicated=frozenset(),
        unsubscribed=frozenset(),
    ) -> None:
        super().__init__(message)
        self.unassigned = unassigned
        self.duplicated = duplicated
        self.unsubscribed = unsubscribed
