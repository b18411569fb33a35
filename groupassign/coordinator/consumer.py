import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from groupassign import errors as Errors
from groupassign.cluster import ClusterMetadata
from groupassign.coordinator.assignors.abstract import (
    AbstractPartitionAssignor,
    Subscriptions,
)
from groupassign.coordinator.assignors.roundrobin import RoundRobinPartitionAssignor
from groupassign.coordinator.protocol import (
    ConsumerProtocol,
    ConsumerProtocolMemberAssignment,
    ConsumerProtocolMemberMetadata,
)
from groupassign.structs import TopicPartition

log = logging.getLogger(__name__)


class AssignmentCoordinator:
    """
    This class wires partition assignors into a consumer group: it advertises
    the configured strategies, negotiates the one the whole group supports and
    runs it on a rebalance.

    It does not talk to brokers. Group membership, metadata fetching and
    delivering the result to members belong to the caller.
    """

    def __init__(
        self,
        *,
        group_id: Optional[str] = "groupassign-default-group",
        assignors: Sequence[type[AbstractPartitionAssignor]] = (
            RoundRobinPartitionAssignor,
        ),
        cluster: Optional[ClusterMetadata] = None,
    ):
        """Initialize the coordination manager.

        Parameters:
            group_id (str): name of the consumer group the assignment is
                computed for, only used in logs.
                Default: 'groupassign-default-group'
            assignors (list): List of assignor classes to use to distribute
                partition ownership amongst consumer instances. This preference
                is implicit in the order of the strategies in the list.
                Default: [RoundRobinPartitionAssignor]
            cluster (ClusterMetadata): resolved topic metadata partitions are
                read from. Default: empty metadata
        """
        if not assignors:
            raise ValueError("Coordinator requires assignors")
        names = set()
        for assignor in assignors:
            if not (
                isinstance(assignor, type)
                and issubclass(assignor, AbstractPartitionAssignor)
            ):
                raise ValueError(f"Invalid assignor: {assignor!r}")
            if assignor.name in names:
                raise ValueError(f"Duplicate assignor name: {assignor.name}")
            names.add(assignor.name)

        self.group_id = group_id
        self._assignors = tuple(assignors)
        self._cluster = cluster if cluster is not None else ClusterMetadata()

    @property
    def cluster(self) -> ClusterMetadata:
        return self._cluster

    def protocol_type(self) -> str:
        return ConsumerProtocol.PROTOCOL_TYPE

    def group_protocols(
        self, topics: Iterable[str]
    ) -> list[tuple[str, ConsumerProtocolMemberMetadata]]:
        """Returns list of preferred (protocols, metadata)"""
        metadata_list = []
        for assignor in self._assignors:
            metadata = assignor.metadata(topics)
            group_protocol = (assignor.name, metadata)
            metadata_list.append(group_protocol)
        return metadata_list

    def select_protocol(self, member_protocols: Mapping[str, Sequence[str]]) -> str:
        """Pick the assignment strategy every member of the group supports.

        Candidates are tried in this coordinator's preference order.

        Arguments:
            member_protocols (dict of {member_id: [protocol name, ...]}): the
                strategies each member offered when joining

        Returns:
            str: name of the selected strategy

        Raises:
            InconsistentGroupProtocolError: no strategy is shared by all members
        """
        supported = [set(protocols) for protocols in member_protocols.values()]
        for assignor in self._assignors:
            if all(assignor.name in protocols for protocols in supported):
                log.debug(
                    "Selected assignment strategy %s for group %s",
                    assignor.name,
                    self.group_id,
                )
                return assignor.name
        raise Errors.InconsistentGroupProtocolError(
            f"No common assignment strategy for group {self.group_id}: "
            f"{dict(member_protocols)}"
        )

    def _lookup_assignor(self, name: str) -> type[AbstractPartitionAssignor]:
        for assignor in self._assignors:
            if assignor.name == name:
                return assignor
        raise Errors.IllegalStateError(f"Invalid assignment protocol: {name}")

    def perform_assignment(
        self,
        assignment_strategy: str,
        member_metadata: Mapping[str, ConsumerProtocolMemberMetadata],
    ) -> dict[str, ConsumerProtocolMemberAssignment]:
        assignor = self._lookup_assignor(assignment_strategy)

        log.debug(
            "Performing assignment for group %s using strategy %s"
            " with subscriptions %s",
            self.group_id,
            assignor.name,
            member_metadata,
        )

        assignments = assignor.assign(self._cluster, member_metadata)
        log.debug("Finished assignment for group %s: %s", self.group_id, assignments)
        return assignments

    def on_assignment(
        self, protocol: str, assignment: ConsumerProtocolMemberAssignment
    ) -> list[TopicPartition]:
        assignor = self._lookup_assignor(protocol)

        # give the assignor a chance to update internal state
        # based on the received assignment
        assignor.on_assignment(assignment)

        partitions = assignment.partitions()
        log.info(
            "Setting newly assigned partitions %s for group %s",
            set(partitions),
            self.group_id,
        )
        return partitions


def check_assignment(
    members: Subscriptions,
    partitions: Iterable[TopicPartition],
    assignment: Mapping[str, Iterable[TopicPartition]],
) -> None:
    """Verify an assignment against the input it was computed from.

    Assignors silently drop partitions of topics nobody subscribes to, so
    those are not reported. Every other partition must be assigned exactly
    once, to a member subscribed to its topic.

    Raises:
        InvalidAssignmentError: with the offending partitions attached
    """
    subscriptions = {
        member_id: set(topics or ()) for member_id, topics in members.items()
    }
    subscribed_topics = set().union(*subscriptions.values())
    expected = {tp for tp in partitions if tp.topic in subscribed_topics}

    seen: set[TopicPartition] = set()
    duplicated = set()
    unsubscribed = set()
    for member_id, assigned in assignment.items():
        topics = subscriptions.get(member_id, set())
        for tp in assigned:
            if tp in seen:
                duplicated.add(tp)
            seen.add(tp)
            if tp.topic not in topics:
                unsubscribed.add(tp)
    unassigned = expected - seen

    if unassigned or duplicated or unsubscribed:
        raise Errors.InvalidAssignmentError(
            "Invalid assignment: %d unassigned, %d duplicated, %d unsubscribed"
            % (len(unassigned), len(duplicated), len(unsubscribed)),
            unassigned=frozenset(unassigned),
            duplicated=frozenset(duplicated),
            unsubscribed=frozenset(unsubscribed),
        )
