from groupassign.coordinator.protocol import (
    ConsumerProtocol,
    ConsumerProtocolMemberAssignment,
    ConsumerProtocolMemberMetadata,
)
from groupassign.structs import TopicPartition


def test_member_assignment_from_partitions():
    partitions = [
        TopicPartition("t1", 2),
        TopicPartition("t0", 1),
        TopicPartition("t1", 0),
        TopicPartition("t0", 0),
    ]

    assignment = ConsumerProtocolMemberAssignment.from_partitions(3, partitions)

    assert assignment.version == 3
    assert assignment.assignment == [("t0", [0, 1]), ("t1", [0, 2])]
    assert assignment.assignment[0].topic == "t0"
    assert assignment.user_data == b""
    assert assignment.partitions() == sorted(partitions)


def test_empty_member_assignment():
    assignment = ConsumerProtocolMemberAssignment.from_partitions(0, [])
    assert assignment == ConsumerProtocolMemberAssignment(0, [], b"")
    assert assignment.partitions() == []


def test_consumer_protocol():
    assert ConsumerProtocol.PROTOCOL_TYPE == "consumer"
    assert ConsumerProtocol.METADATA is ConsumerProtocolMemberMetadata
    assert ConsumerProtocol.ASSIGNMENT is ConsumerProtocolMemberAssignment
    assert "roundrobin" in ConsumerProtocol.ASSIGNMENT_STRATEGIES
