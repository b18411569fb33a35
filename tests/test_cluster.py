import logging
from unittest import mock

import pytest
from kafka.cluster import ClusterMetadata as BaseClusterMetadata

from groupassign.cluster import ClusterMetadata


def test_empty_cluster():
    cluster = ClusterMetadata()
    assert cluster.topics() == set()
    assert cluster.partitions_for_topic("foo") is None


def test_update_metadata():
    cluster = ClusterMetadata({"foo": [0, 1], "bar": range(3)})
    assert cluster.topics() == {"foo", "bar"}
    assert cluster.partitions_for_topic("bar") == {0, 1, 2}

    cluster.update_metadata({"foo": [0, 1, 2, 3]})
    assert cluster.topics() == {"foo"}
    assert cluster.partitions_for_topic("foo") == {0, 1, 2, 3}
    assert cluster.partitions_for_topic("bar") is None


def test_partitions_for_topic_returns_a_copy():
    cluster = ClusterMetadata({"foo": [0, 1]})
    cluster.partitions_for_topic("foo").add(5)
    assert cluster.partitions_for_topic("foo") == {0, 1}


def test_internal_topics():
    cluster = ClusterMetadata({"__consumer_offsets": range(50), "foo": [0]})
    assert cluster.topics() == {"foo"}
    assert cluster.topics(exclude_internal_topics=False) == {
        "__consumer_offsets",
        "foo",
    }


def test_empty_update_warns(caplog):
    cluster = ClusterMetadata()
    with caplog.at_level(logging.WARNING):
        cluster.update_metadata({})
        cluster.update_metadata({"foo": []})
    assert "No topic metadata found in update" in caplog.text
    assert "Topic foo has no partitions" in caplog.text
    assert cluster.partitions_for_topic("foo") == set()


def test_negative_partition_id():
    cluster = ClusterMetadata({"foo": [0]})
    with pytest.raises(ValueError):
        cluster.update_metadata({"foo": [0, -1]})
    assert cluster.partitions_for_topic("foo") == {0}


def test_listeners():
    cluster = ClusterMetadata()
    listener = mock.Mock()
    cluster.add_listener(listener)
    cluster.update_metadata({"foo": [0]})
    listener.assert_called_once_with(cluster)

    cluster.remove_listener(listener)
    cluster.update_metadata({"foo": [0, 1]})
    listener.assert_called_once_with(cluster)


def test_builds_on_kafka_python_metadata():
    cluster = ClusterMetadata({"__transaction_state": [0], "foo": [1, 0]})
    assert isinstance(cluster, BaseClusterMetadata)
    assert cluster.internal_topics == {"__transaction_state"}
    assert cluster.partitions_for_topic("foo") == {0, 1}
    assert cluster.available_partitions_for_topic("foo") == set()
