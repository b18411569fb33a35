import logging
import time
from collections.abc import Iterable, Mapping
from typing import Optional

from kafka.cluster import ClusterMetadata as BaseClusterMetadata

from groupassign.structs import PartitionMetadata

log = logging.getLogger(__name__)


class ClusterMetadata(BaseClusterMetadata):
    """Resolved topic metadata the assignors read partitions from.

    Fetching metadata from brokers is not done here: the owner pushes an
    already resolved ``{topic: partition ids}`` mapping with
    :meth:`update_metadata`. Leaders are unknown, so every partition carries
    leader ``-1``.
    """

    def __init__(
        self, topics: Optional[Mapping[str, Iterable[int]]] = None, **configs
    ):
        super().__init__(**configs)
        if topics is not None:
            self.update_metadata(topics)

    def update_metadata(self, topics: Mapping[str, Iterable[int]]) -> None:
        """Replace cluster state with a resolved topic to partitions mapping.

        Topics named with a ``__`` prefix are recorded as internal topics.

        Arguments:
            topics (dict of {topic: [partition, ...]}): every topic the group
                may care about, with its partition ids

        Returns: None
        """
        if not topics:
            log.warning("No topic metadata found in update")

        _new_partitions = {}
        _new_internal_topics = set()
        for topic, partitions in topics.items():
            partition_ids = sorted(set(partitions))
            if not partition_ids:
                log.warning("Topic %s has no partitions", topic)
            elif partition_ids[0] < 0:
                raise ValueError(
                    f"Negative partition id for topic {topic}: {partition_ids[0]}"
                )
            if topic.startswith("__"):
                _new_internal_topics.add(topic)
            _new_partitions[topic] = {
                partition: PartitionMetadata(
                    topic=topic,
                    partition=partition,
                    leader=-1,
                    replicas=[],
                    isr=[],
                    error=None,
                )
                for partition in partition_ids
            }

        with self._lock:
            self._partitions = _new_partitions
            self.internal_topics = _new_internal_topics

        now = time.time() * 1000
        self._last_refresh_ms = now
        self._last_successful_refresh_ms = now

        log.debug("Updated cluster metadata to %s", self)

        for listener in self._listeners:
            listener(self)
