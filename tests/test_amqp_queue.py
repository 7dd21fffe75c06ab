import dataclasses

import pytest

from amqpcore.amqp_queue import Queue


def test_fields():
    queue = Queue("hello", 4, 2)
    assert queue.name == "hello"
    assert queue.message_count == 4
    assert queue.consumer_count == 2


def test_str_is_name():
    assert str(Queue("hello-async", 0, 0)) == "hello-async"


def test_immutable():
    queue = Queue("hello", 1, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        queue.name = "other"
    assert queue.name == "hello"
    assert str(queue) == "hello"


def test_equality_and_hash():
    assert Queue("a", 1, 2) == Queue("a", 1, 2)
    assert len({Queue("a", 1, 2), Queue("a", 1, 2)}) == 1