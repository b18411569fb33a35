import itertools
import logging
from collections.abc import Iterable
from operator import attrgetter

from groupassign.coordinator.assignors.abstract import (
    AbstractPartitionAssignor,
    Subscriptions,
)
from groupassign.structs import TopicPartition

log = logging.getLogger(__name__)


class SimpleRoundRobinPartitionAssignor(AbstractPartitionAssignor):
    """
    The simple roundrobin assignor lays out all partitions sorted by topic and
    all members sorted by member id, then walks the partitions once while
    cycling through the members. A member that is not subscribed to the
    partition's topic is skipped.

    Partitions are sorted by topic name only; partitions of one topic keep the
    order they were given in, so callers should pass them in partition id order.

    When all members have identical subscriptions the partitions are uniformly
    distributed: the partition counts of any two members differ by at most one.

    With different subscriptions the result can be skewed. For example,
    suppose C0 and C1 are subscribed to t0 and t1, C2 only to t1, t0 has three
    partitions and t1 has one. The assignment will be:
        C0: [t0p0, t0p2]
        C1: [t0p1, t1p0]
        C2: []
    """

    name = "simple_roundrobin"
    version = 0

    @classmethod
    def assign_partitions(
        cls,
        members: Subscriptions,
        partitions: Iterable[TopicPartition],
    ) -> dict[str, list[TopicPartition]]:
        subscriptions = cls._normalize_subscriptions(members)
        assignment: dict[str, list[TopicPartition]] = {
            member_id: [] for member_id in subscriptions
        }

        relevant_partitions = cls._valid_sorted_partitions(subscriptions, partitions)
        if not relevant_partitions:
            return assignment

        member_iter = itertools.cycle(subscriptions)
        member_id = next(member_iter)
        for partition in relevant_partitions:
            # terminates because only partitions of subscribed topics are left
            while partition.topic not in subscriptions[member_id]:
                member_id = next(member_iter)
            assignment[member_id].append(partition)
            member_id = next(member_iter)

        return assignment

    @classmethod
    def _valid_sorted_partitions(
        cls,
        subscriptions: dict[str, frozenset[str]],
        partitions: Iterable[TopicPartition],
    ) -> list[TopicPartition]:
        subscribed_topics = cls._subscribed_topics(subscriptions)
        valid = []
        for partition in partitions:
            if partition.topic in subscribed_topics:
                valid.append(partition)
            else:
                log.debug(
                    "Skipping partition %s: no member subscribed to topic %s",
                    partition,
                    partition.topic,
                )
        return sorted(valid, key=attrgetter("topic"))
