import logging
from collections.abc import Iterable

from groupassign.coordinator.assignors.abstract import (
    AbstractPartitionAssignor,
    Subscriptions,
)
from groupassign.structs import TopicPartition

log = logging.getLogger(__name__)


class RoundRobinPartitionAssignor(AbstractPartitionAssignor):
    """
    The roundrobin assignor distributes the partitions of each topic in turn
    among the members subscribed to that topic, so that it stays fair when
    members subscribe to different, possibly overlapping, sets of topics.

    Topics are processed in name order and the partitions of a topic in id
    order. The members interested in a topic are taken in member id order and
    then stably re-ordered by how many partitions they already hold, least
    loaded first. The i-th partition of the topic goes to the
    ``i % len(interested)``-th of them. Every interested member therefore gets
    ``floor(n / k)`` or ``ceil(n / k)`` of a topic with ``n`` partitions and
    ``k`` interested members, and with identical subscriptions the partitions
    of all topics spread evenly over the group.

    For example, suppose there are three consumers C0, C1, C2, and three
    topics t0, t1, t2, with 1, 2, and 3 partitions, respectively. C0 is
    subscribed to t0; C1 is subscribed to t0, t1; and C2 is subscribed to
    t0, t1, t2.

    The assignment will be:
        C0: [t0p0]
        C1: [t1p0]
        C2: [t1p1, t2p0, t2p1, t2p2]
    """

    name = "roundrobin"
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

        partitions_per_topic = cls._partitions_per_topic(subscriptions, partitions)
        for topic, topic_partitions in partitions_per_topic.items():
            interested = [
                member_id
                for member_id, topics in subscriptions.items()
                if topic in topics
            ]
            interested.sort(key=lambda member_id: len(assignment[member_id]))
            for i, partition in enumerate(topic_partitions):
                assignment[interested[i % len(interested)]].append(partition)

        return assignment

    @classmethod
    def _partitions_per_topic(
        cls,
        subscriptions: dict[str, frozenset[str]],
        partitions: Iterable[TopicPartition],
    ) -> dict[str, list[TopicPartition]]:
        subscribed_topics = cls._subscribed_topics(subscriptions)
        grouped: dict[str, set[TopicPartition]] = {}
        for partition in partitions:
            if partition.topic in subscribed_topics:
                grouped.setdefault(partition.topic, set()).add(partition)
            else:
                log.debug(
                    "Skipping partition %s: no member subscribed to topic %s",
                    partition,
                    partition.topic,
                )
        return {topic: sorted(grouped[topic]) for topic in sorted(grouped)}
