import abc
import logging
from collections.abc import Iterable, Mapping
from typing import Optional

from groupassign.cluster import ClusterMetadata
from groupassign.coordinator.protocol import (
    ConsumerProtocolMemberAssignment,
    ConsumerProtocolMemberMetadata,
)
from groupassign.structs import TopicPartition

log = logging.getLogger(__name__)

Subscriptions = Mapping[str, Optional[Iterable[str]]]


class AbstractPartitionAssignor(abc.ABC):
    """Abstract assignor implementation which does some common grunt work (in particular
    collecting partition lists from cluster metadata, which are always needed in
    assignors).

    Assignors are stateless: every call works only on its arguments, so all
    members of a group running the same assignor on the same input compute the
    same result.
    """

    name: str
    "A string identifying the assignor in group protocol negotiation"

    version = 0

    @classmethod
    @abc.abstractmethod
    def assign_partitions(
        cls,
        members: Subscriptions,
        partitions: Iterable[TopicPartition],
    ) -> dict[str, list[TopicPartition]]:
        """Distribute partitions among members given their subscriptions

        Arguments:
            members (dict of {member_id: [topic, ...]}): subscribed topics of
                each member of the group. ``None`` means no subscription.
            partitions (list of TopicPartition): partitions to distribute.
                Partitions of topics no member subscribes to are dropped.

        Returns:
            dict: {member_id: [TopicPartition, ...]} with every member id of
            ``members`` present, possibly with an empty list.
        """

    @classmethod
    def assign(
        cls,
        cluster: ClusterMetadata,
        members: Mapping[str, ConsumerProtocolMemberMetadata],
    ) -> dict[str, ConsumerProtocolMemberAssignment]:
        """Perform group assignment given cluster metadata and member subscriptions

        Arguments:
            cluster (ClusterMetadata): metadata for use in assignment
            members (dict of {member_id: MemberMetadata}): decoded metadata for
                each member in the group.

        Returns:
            dict: {member_id: MemberAssignment}
        """
        subscriptions = {
            member_id: (metadata.subscription if metadata is not None else None)
            for member_id, metadata in members.items()
        }

        all_partitions = []
        for topic in sorted(cls._subscribed_topics(subscriptions)):
            partitions = cluster.partitions_for_topic(topic)
            if partitions is None:
                log.warning("No partition metadata for topic %s", topic)
                continue
            all_partitions.extend(
                TopicPartition(topic, partition) for partition in sorted(partitions)
            )

        assignment = cls.assign_partitions(subscriptions, all_partitions)
        return {
            member_id: ConsumerProtocolMemberAssignment.from_partitions(
                cls.version, partitions
            )
            for member_id, partitions in assignment.items()
        }

    @classmethod
    def metadata(cls, topics: Iterable[str]) -> ConsumerProtocolMemberMetadata:
        """Generate ProtocolMetadata to be submitted via JoinGroupRequest.

        Arguments:
            topics (set): a member's subscribed topics

        Returns:
            MemberMetadata struct
        """
        return ConsumerProtocolMemberMetadata(cls.version, sorted(topics), b"")

    @classmethod
    def on_assignment(cls, assignment: ConsumerProtocolMemberAssignment) -> None:
        """Callback that runs on each assignment.

        This method can be used to update internal state, if any, of the
        partition assignor.

        Arguments:
            assignment (MemberAssignment): the member's assignment
        """

    @staticmethod
    def _normalize_subscriptions(members: Subscriptions) -> dict[str, frozenset[str]]:
        # members are ordered by id, not by the mapping's iteration order
        return {
            member_id: frozenset(members[member_id] or ())
            for member_id in sorted(members)
        }

    @staticmethod
    def _subscribed_topics(members: Subscriptions) -> set[str]:
        topics: set[str] = set()
        for subscription in members.values():
            if subscription:
                topics.update(subscription)
        return topics
