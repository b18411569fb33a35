from collections.abc import Iterable
from typing import NamedTuple

from typing_extensions import Self

from groupassign.structs import TopicPartition


class ConsumerProtocolMemberMetadata(NamedTuple):
    version: int
    subscription: list[str]
    user_data: bytes = b""


class ConsumerProtocolMemberAssignment(NamedTuple):
    class Assignment(NamedTuple):
        topic: str
        partitions: list[int]

    version: int
    assignment: list[Assignment]
    user_data: bytes = b""

    @classmethod
    def from_partitions(
        cls, version: int, partitions: Iterable[TopicPartition], user_data: bytes = b""
    ) -> Self:
        """Group a flat list of partitions by topic, both sorted."""
        by_topic: dict[str, list[int]] = {}
        for tp in partitions:
            by_topic.setdefault(tp.topic, []).append(tp.partition)
        assignment = [
            cls.Assignment(topic, sorted(by_topic[topic])) for topic in sorted(by_topic)
        ]
        return cls(version, assignment, user_data)

    def partitions(self) -> list[TopicPartition]:
        return [
            TopicPartition(topic, partition)
            for topic, partitions in self.assignment
            for partition in partitions
        ]


class ConsumerProtocol:
    PROTOCOL_TYPE = "consumer"
    ASSIGNMENT_STRATEGIES = ("roundrobin", "simple_roundrobin")
    METADATA = ConsumerProtocolMemberMetadata
    ASSIGNMENT = ConsumerProtocolMemberAssignment
